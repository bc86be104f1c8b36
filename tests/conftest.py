"""Pytest configuration for the fakerengine test suite.

Hypothesis example counts are set here and nowhere else. Three profiles:

    dev      500 examples, random seed (default locally)
    ci       50 examples, derandomized (chosen when CI=true)
    verbose  100 examples with progress output

HYPOTHESIS_PROFILE=<name> picks a profile explicitly.

Tests marked ``fuzz`` (tests/fuzz/) are skipped unless the run selects them
with ``pytest -m fuzz``.

Fixtures shared across modules:
    locales_dir    tests/fixtures/locales
    loader         PathLocaleLoader over locales_dir
    locale_trees   every fixture locale as a LocaleTree
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from fakerengine.locale_utils import clear_locale_cache
from fakerengine.localedata import LocaleTree, PathLocaleLoader, load_locale_trees
from fakerengine.patterns import clear_pattern_cache
from fakerengine.syntax import clear_template_cache

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

settings.register_profile("dev", max_examples=500, phases=_PHASES)
settings.register_profile(
    "ci", max_examples=50, phases=_PHASES, derandomize=True, print_blob=True
)
settings.register_profile(
    "verbose", max_examples=100, phases=_PHASES, verbosity=Verbosity.verbose
)


def _profile_name() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in ("dev", "ci", "verbose"):
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_profile_name())


# =============================================================================
# FUZZ MARKER
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "fuzz: long-running randomized session tests, run with -m fuzz",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz tests unless the -m expression mentions fuzz."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    skip = pytest.mark.skip(reason="fuzz test; run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip)


# =============================================================================
# SHARED FIXTURES
# =============================================================================

FIXTURE_LOCALES = ("en", "es_MX", "fr", "it", "pt", "pt_BR", "uk")


@pytest.fixture(autouse=True)
def _clear_caches() -> Iterator[None]:
    """Start and end every test with empty module-level caches."""
    clear_locale_cache()
    clear_template_cache()
    clear_pattern_cache()
    yield
    clear_locale_cache()
    clear_template_cache()
    clear_pattern_cache()


@pytest.fixture(scope="session")
def locales_dir() -> Path:
    """Directory holding the YAML locale fixtures."""
    return Path(__file__).parent / "fixtures" / "locales"


@pytest.fixture(scope="session")
def loader(locales_dir: Path) -> PathLocaleLoader:
    """Loader reading fixtures/locales/<locale>.yml."""
    return PathLocaleLoader(str(locales_dir / "{locale}.yml"), root_dir=str(locales_dir))


@pytest.fixture(scope="session")
def locale_trees(loader: PathLocaleLoader) -> dict[str, LocaleTree]:
    """Every fixture locale as an immutable LocaleTree."""
    return load_locale_trees(loader, FIXTURE_LOCALES)
