"""Fuzz arbitrary templates through the evaluator.

Every template either expands to text or raises a FakerError subclass.
Nothing else may escape evaluate(). Generated text may hold a literal "#{",
so only templates without built-ins must come out directive-free.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import event, given, settings
from hypothesis import strategies as st

from fakerengine import FakerError, FakerSession, RecursionLimitExceededError
from fakerengine.localedata import LocaleTree
from fakerengine.localedata.tree import normalize_key
from fakerengine.syntax import contains_directive, parse_template
from tests.strategies import argument_values, template_sources, text_runs

pytestmark = pytest.mark.fuzz

_KNOWN_KEYS = (
    "Address.city",
    "Address.streetAddress",
    "Address.zipCode",
    "Address.country",
    "Name.name",
    "Name",
    "Code.serial",
    "PhoneNumber",
)
_BUILTINS = ("numerify", "letterify", "bothify", "regexify", "options")


def _calls_builtin(template: str) -> bool:
    return any(
        normalize_key(directive.path[0]) in _BUILTINS
        for directive in parse_template(template).directives
    )


@st.composite
def known_directives(draw: st.DrawFn) -> str:
    """Directives naming real keys or built-ins, with random arguments."""
    if draw(st.booleans()):
        event("directive=key")
        return f"#{{{draw(st.sampled_from(_KNOWN_KEYS))}}}"
    event("directive=builtin")
    name = draw(st.sampled_from(_BUILTINS))
    arguments = draw(st.lists(argument_values(), max_size=3))
    rendered = ", ".join(repr(a) if isinstance(a, str) else str(a).lower() for a in arguments)
    return f"#{{{name}({rendered})}}"


_TEMPLATES = st.one_of(
    template_sources(),
    st.lists(st.one_of(text_runs, known_directives()), max_size=5).map("".join),
)


class TestEvaluationFuzz:
    """Arbitrary templates never escape the error hierarchy."""

    @given(
        template=_TEMPLATES,
        locale=st.sampled_from(["en", "pt-BR", "uk", "fr"]),
        seed=st.integers(),
    )
    @settings(max_examples=2000, deadline=None)
    def test_only_faker_errors(
        self, locale_trees: dict[str, LocaleTree], template: str, locale: str, seed: int
    ) -> None:
        """PROPERTY: evaluate() returns text or raises FakerError."""
        session = FakerSession(locale, locale_trees, seed=seed)
        try:
            result = session.evaluate(template)
        except RecursionLimitExceededError:
            event("outcome=recursion_limit")
        except FakerError as e:
            event(f"outcome={type(e).__name__}")
        else:
            event("outcome=ok")
            if not _calls_builtin(template):
                assert not contains_directive(result)
