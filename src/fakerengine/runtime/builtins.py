"""Built-in global providers.

Makes the pattern generators and option picking available inside templates:

    #{numerify('###-####')}       -> "555-0142"
    #{letterify('??', 'upper')}   -> "QK"
    #{bothify('##??')}            -> "42ab"
    #{regexify('[A-Z]{3}')}       -> "XQB"
    #{options('red', 'blue')}     -> "blue"

Each provider follows the bridge calling convention func(session, *args)
and delegates to the session, so output draws from the session's random
source.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fakerengine.runtime.provider_bridge import ProviderRegistry, provider_text

if TYPE_CHECKING:
    from fakerengine.runtime.session import FakerSession
    from fakerengine.syntax.ast import ArgumentValue

__all__ = ["create_default_registry"]


def _require_text(name: str, value: ArgumentValue) -> str:
    if not isinstance(value, str):
        msg = f"{name}() expects a string argument, got {type(value).__name__}"
        raise TypeError(msg)
    return value


def numerify(session: FakerSession, template: ArgumentValue) -> str:
    """Replace every "#" in template with a digit."""
    return session.numerify(_require_text("numerify", template))


def letterify(
    session: FakerSession, template: ArgumentValue, letter_case: ArgumentValue | None = None
) -> str:
    """Replace every "?" in template with a letter.

    letter_case is "lower", "upper" or "mixed"; the session default applies
    when it is omitted.
    """
    case = None if letter_case is None else _require_text("letterify", letter_case)
    return session.letterify(_require_text("letterify", template), case)


def bothify(
    session: FakerSession, template: ArgumentValue, letter_case: ArgumentValue | None = None
) -> str:
    """Digit-fill then letter-fill template."""
    case = None if letter_case is None else _require_text("bothify", letter_case)
    return session.bothify(_require_text("bothify", template), case)


def regexify(session: FakerSession, pattern: ArgumentValue) -> str:
    """Generate a string matching pattern."""
    return session.regexify(_require_text("regexify", pattern))


def options(session: FakerSession, *choices: ArgumentValue) -> str:
    """Pick one of the arguments uniformly."""
    return session.options(*(provider_text(c) for c in choices))


def create_default_registry() -> ProviderRegistry:
    """Create a new ProviderRegistry with the built-in global providers.

    Each call returns a fresh, isolated registry, so sessions never share
    registrations.

    Example:
        >>> registry = create_default_registry()
        >>> "numerify" in registry and "options" in registry
        True
    """
    registry = ProviderRegistry()
    for func in (numerify, letterify, bothify, regexify, options):
        registry.register(func)
    return registry
