"""Tests for the provider bridge and the built-in global providers."""

from __future__ import annotations

import logging

import pytest

from fakerengine.diagnostics import DiagnosticCode, FakerReferenceError, FakerResolutionError
from fakerengine.localedata import LocaleTree
from fakerengine.runtime import FakerSession, ProviderRegistry, create_default_registry
from fakerengine.runtime.provider_bridge import provider_text


@pytest.fixture
def session() -> FakerSession:
    return FakerSession("en", {"en": LocaleTree.from_mapping("en", {})}, seed=1)


# ============================================================================
# REGISTRATION
# ============================================================================


class TestRegister:
    """Test provider registration."""

    def test_global_by_function_name(self) -> None:
        """Named functions register under their own name."""
        registry = ProviderRegistry()

        def checksum(session: FakerSession) -> str:
            return "0"

        signature = registry.register(checksum)
        assert signature.name == "checksum"
        assert signature.is_global
        assert registry.global_provider("CheckSum") is signature

    def test_category_provider_normalized(self) -> None:
        """Category and method names are normalized."""
        registry = ProviderRegistry()
        signature = registry.register(lambda s: "1", category="Address", method="zip_code")
        assert signature.name == "address.zipcode"
        assert registry.lookup("ADDRESS", ["zipCode"]) is signature
        assert "address.zipcode" in registry

    def test_nested_method_path(self) -> None:
        """Methods may span several key segments."""
        registry = ProviderRegistry()
        signature = registry.register(lambda s: "x", category="address", method="street.suffix")
        assert registry.lookup("address", ["street", "suffix"]) is signature

    def test_lambda_requires_method(self) -> None:
        """Unnamed callables need an explicit method."""
        with pytest.raises(ValueError, match="method name is required"):
            ProviderRegistry().register(lambda s: "x", category="address")

    def test_global_name_single_identifier(self) -> None:
        """Global names cannot be dotted."""
        with pytest.raises(ValueError, match="single identifier"):
            ProviderRegistry().register(lambda s: "x", method="a.b")

    @pytest.mark.parametrize("method", ["a..b", ".a", "a."])
    def test_empty_method_segment_rejected(self, method: str) -> None:
        """Dotted methods need non-empty segments."""
        with pytest.raises(ValueError, match="Invalid provider method name"):
            ProviderRegistry().register(lambda s: "x", category="c", method=method)

    def test_empty_category_rejected(self) -> None:
        """A category that normalizes to nothing is rejected."""
        with pytest.raises(ValueError, match="must not be empty"):
            ProviderRegistry().register(lambda s: "x", category="_", method="m")

    def test_global_and_category_namespaces_separate(self) -> None:
        """lookup() ignores globals; global_provider() ignores categories."""
        registry = ProviderRegistry()
        registry.register(lambda s: "g", method="city")
        registry.register(lambda s: "c", category="address", method="city")
        assert registry.lookup("city", []) is None
        assert registry.global_provider("address") is None

    def test_reregistration_replaces(self) -> None:
        """Registering a name again replaces the provider."""
        registry = ProviderRegistry()
        registry.register(lambda s: "old", method="x")
        new = registry.register(lambda s: "new", method="x")
        assert registry.global_provider("x") is new
        assert len(registry) == 1

    def test_registration_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Registration is logged at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="fakerengine.runtime.provider_bridge"):
            ProviderRegistry().register(lambda s: "x", category="a", method="b")
        assert "Registered provider a.b" in caplog.text

    def test_copy_is_isolated(self) -> None:
        """Registrations on a copy do not leak back."""
        original = ProviderRegistry()
        copied = original.copy()
        copied.register(lambda s: "x", method="extra")
        assert "extra" in copied
        assert "extra" not in original

    def test_introspection(self) -> None:
        """Iteration, length and repr describe the registry."""
        registry = create_default_registry()
        assert sorted(registry) == ["bothify", "letterify", "numerify", "options", "regexify"]
        assert len(registry) == 5
        assert repr(registry) == "ProviderRegistry(providers=5)"


# ============================================================================
# CALLING
# ============================================================================


class TestCall:
    """Test provider invocation."""

    def test_arguments_passed_positionally(self, session: FakerSession) -> None:
        """Providers receive the session then the directive arguments."""
        registry = ProviderRegistry()
        seen: list[object] = []

        def record(s: FakerSession, *args: object) -> str:
            seen.append(s)
            seen.extend(args)
            return "ok"

        registry.register(record)
        assert registry.call("record", session, ("a", 2, True)) == "ok"
        assert seen == [session, "a", 2, True]

    def test_unknown_name(self, session: FakerSession) -> None:
        """Calling an unregistered name raises FakerReferenceError."""
        with pytest.raises(FakerReferenceError) as exc_info:
            ProviderRegistry().call("nope", session)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.PROVIDER_NOT_FOUND

    def test_type_error_wrapped(self, session: FakerSession) -> None:
        """Wrong argument counts surface as FakerResolutionError."""
        registry = ProviderRegistry()
        registry.register(lambda s: "x", method="noargs")
        with pytest.raises(FakerResolutionError) as exc_info:
            registry.call("noargs", session, ("extra",))
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.PROVIDER_FAILED
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_value_error_wrapped(self, session: FakerSession) -> None:
        """ValueError from a provider is wrapped with its message."""
        registry = ProviderRegistry()

        def strict(s: FakerSession) -> str:
            msg = "bad input"
            raise ValueError(msg)

        registry.register(strict)
        with pytest.raises(FakerResolutionError, match="bad input"):
            registry.call("strict", session)

    def test_other_exceptions_propagate(self, session: FakerSession) -> None:
        """Bugs in providers are not disguised."""
        registry = ProviderRegistry()

        def broken(s: FakerSession) -> str:
            msg = "boom"
            raise KeyError(msg)

        registry.register(broken)
        with pytest.raises(KeyError):
            registry.call("broken", session)

    def test_unsupported_return_type(self, session: FakerSession) -> None:
        """Returning a list is a provider failure."""
        registry = ProviderRegistry()
        registry.register(lambda s: ["x"], method="listy")  # type: ignore[arg-type, return-value]
        with pytest.raises(FakerResolutionError, match="unsupported type list"):
            registry.call("listy", session)


class TestProviderText:
    """Test conversion of provider results."""

    @pytest.mark.parametrize(
        ("value", "text"),
        [("abc", "abc"), (12, "12"), (1.5, "1.5"), (True, "true"), (False, "false"), (None, "")],
    )
    def test_conversion(self, value: object, text: str) -> None:
        """Scalars become text; None becomes ""."""
        assert provider_text(value) == text  # type: ignore[arg-type]


# ============================================================================
# BUILT-INS
# ============================================================================


class TestBuiltins:
    """Test the built-in global providers through the registry."""

    def test_numerify(self, session: FakerSession) -> None:
        """numerify('###') yields three digits."""
        out = session.providers.call("numerify", session, ("###",))
        assert len(out) == 3
        assert out.isdigit()

    def test_letterify_with_case(self, session: FakerSession) -> None:
        """letterify accepts an optional case argument."""
        assert session.providers.call("letterify", session, ("????", "upper")).isupper()

    def test_bothify(self, session: FakerSession) -> None:
        """bothify fills both placeholder kinds."""
        out = session.providers.call("bothify", session, ("#?",))
        assert out[0].isdigit()
        assert out[1].isalpha()

    def test_regexify(self, session: FakerSession) -> None:
        """regexify generates from its pattern argument."""
        assert session.providers.call("regexify", session, ("[xy]{4}",)) in {
            a + b + c + d for a in "xy" for b in "xy" for c in "xy" for d in "xy"
        }

    def test_options(self, session: FakerSession) -> None:
        """options picks one of its arguments, converting non-strings."""
        assert session.providers.call("options", session, ("red", 2, True)) in {
            "red",
            "2",
            "true",
        }

    def test_non_string_template_rejected(self, session: FakerSession) -> None:
        """Pattern builtins require string arguments."""
        with pytest.raises(FakerResolutionError, match="expects a string argument"):
            session.providers.call("numerify", session, (123,))

    def test_unknown_case_rejected(self, session: FakerSession) -> None:
        """An unknown case policy is a provider failure."""
        with pytest.raises(FakerResolutionError, match="not a valid LetterCase"):
            session.providers.call("letterify", session, ("??", "title"))

    def test_default_registry_is_fresh(self) -> None:
        """Each call builds an independent registry."""
        assert create_default_registry() is not create_default_registry()
