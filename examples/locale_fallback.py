"""Locale Fallback Example - Regional Data over a Shared Base.

Demonstrates how a session for a regional locale reads keys from less
specific locales when its own data lacks them.

Scenarios covered:
1. pt_BR -> pt -> en fallback chain
2. Intentionally empty values that stop fallback
3. Observing fallbacks with on_fallback
4. Loading locale data from YAML files

Python 3.13+.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from fakerengine import FakerSession, LocaleTree, PathLocaleLoader
from fakerengine.localedata import FallbackInfo

TREES = {
    "en": LocaleTree.from_mapping(
        "en",
        {
            "address": {
                "city_prefix": ["North", "East", "Port"],
                "city_suffix": ["ton", "ville", "burgh"],
                "city": ["#{city_prefix} #{Name.first_name}#{city_suffix}"],
                "street_suffix": ["Street", "Avenue"],
            },
            "name": {"first_name": ["Ada", "Alan"], "last_name": ["Lovelace", "Turing"]},
        },
    ),
    "pt": LocaleTree.from_mapping(
        "pt",
        {
            "address": {"street_suffix": ["Rua", "Avenida", "Travessa"]},
            "name": {"first_name": ["João", "Maria"], "last_name": ["Silva", "Santos"]},
        },
    ),
    "pt_BR": LocaleTree.from_mapping(
        "pt_BR",
        {
            "address": {
                # Brazilian city names carry no prefix or suffix; [""] keeps
                # the English ones from leaking in through fallback.
                "city_prefix": [""],
                "city_suffix": [""],
                "state_abbr": ["SP", "RJ", "MG"],
            },
        },
    ),
}


def example_1_chain() -> None:
    """Example 1: Keys resolve from the most specific locale defining them."""
    print("=" * 60)
    print("Example 1: Fallback chain (pt_BR -> pt -> en)")
    print("=" * 60)

    session = FakerSession("pt-BR", TREES, seed=3)
    print(f"Chain: {' -> '.join(session.chain.locales)}")

    print(f"State (pt_BR):         {session.evaluate('#{Address.stateAbbr}')}")
    print(f"Street suffix (pt):    {session.evaluate('#{Address.streetSuffix}')}")
    print(f"Last name (pt):        {session.evaluate('#{Name.lastName}')}")


def example_2_empty_values() -> None:
    """Example 2: An empty value is a value; it does not fall back."""
    print("\n" + "=" * 60)
    print("Example 2: Intentionally empty values")
    print("=" * 60)

    brazil = FakerSession("pt-BR", TREES, seed=3)
    english = FakerSession("en", TREES, seed=3)

    # The en city template references city_prefix and city_suffix; under
    # pt_BR both resolve to "" while first_name comes from pt.
    print(f"pt_BR city: {brazil.evaluate('#{Address.city}')!r}")
    print(f"en city:    {english.evaluate('#{Address.city}')!r}")


def example_3_observe_fallback() -> None:
    """Example 3: Reporting keys served by a fallback locale."""
    print("\n" + "=" * 60)
    print("Example 3: on_fallback")
    print("=" * 60)

    def report(info: FallbackInfo) -> None:
        print(f"  {info.key_path}: wanted {info.requested_locale}, got {info.resolved_locale}")

    session = FakerSession("pt-BR", TREES, seed=3, on_fallback=report)
    session.evaluate("#{Address.city}, #{Address.stateAbbr}")


def example_4_yaml_files() -> None:
    """Example 4: Loading every locale of the chain from disk."""
    print("\n" + "=" * 60)
    print("Example 4: PathLocaleLoader")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "en.yml").write_text(
            "en:\n  faker:\n    name:\n      first_name: [Ada, Alan]\n",
            encoding="utf-8",
        )
        (root / "fr.yml").write_text(
            "fr:\n  faker:\n    address:\n      city: [Paris, Lyon]\n",
            encoding="utf-8",
        )

        # fr_CA has no file; it is skipped with a warning.
        loader = PathLocaleLoader(str(root / "{locale}.yml"), root_dir=tmpdir)
        session = FakerSession.from_loader("fr-CA", loader, seed=1)

        print(f"Loaded: {session.resolver.locales}")
        print(session.evaluate("#{Name.firstName} de #{Address.city}"))


def main() -> None:
    """Run all examples."""
    example_1_chain()
    example_2_empty_values()
    example_3_observe_fallback()
    example_4_yaml_files()


if __name__ == "__main__":
    main()
