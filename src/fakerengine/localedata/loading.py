"""Locale data loading infrastructure.

The evaluation engine never reads files; it receives already-built
LocaleTree objects. This module is the collaborator that builds them from
locale definition files on disk.

Components:
    LocaleDataLoader - Protocol for loading raw locale data (structural typing)
    PathLocaleLoader - YAML loader with path-traversal protection
    load_locale_trees - Build a locale -> LocaleTree mapping from a loader

File format:
    One YAML document per locale. The document may be wrapped in the locale
    code and a "faker" namespace, as in::

        en:
          faker:
            address:
              street_name: ["Main St", "Oak Ave"]

    Both wrappers are optional and removed before the tree is built.

Python 3.13+. External dependency: PyYAML.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import yaml

from fakerengine.locale_utils import normalize_locale
from fakerengine.localedata.tree import LocaleTree
from fakerengine.localedata.types import LocaleCode, RawLocaleData

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "LocaleDataLoader",
    # Concrete loader
    "PathLocaleLoader",
    # Tree construction
    "load_locale_trees",
    "unwrap_locale_document",
]

logger = logging.getLogger(__name__)

# Namespace key used by the upstream locale files.
_NAMESPACE_KEY = "faker"


class LocaleDataLoader(Protocol):
    """Protocol for loading raw locale data for one locale.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders, e.g. a
    loader reading from package resources or a database.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, documents):
        ...         self.documents = documents
        ...     def load(self, locale: str) -> Mapping[str, object]:
        ...         try:
        ...             return self.documents[locale]
        ...         except KeyError:
        ...             raise FileNotFoundError(locale) from None
        ...     def describe_path(self, locale: str) -> str:
        ...         return f"<memory>/{locale}"
    """

    def load(self, locale: LocaleCode) -> RawLocaleData:
        """Load raw locale data.

        Args:
            locale: Locale code as listed by the caller

        Returns:
            Parsed nested mapping

        Raises:
            FileNotFoundError: If no data exists for this locale
            OSError: If data cannot be read
        """

    def describe_path(self, locale: LocaleCode) -> str:
        """Return human-readable location for diagnostics."""
        return locale


@dataclass(frozen=True, slots=True)
class PathLocaleLoader:
    """File system loader using a path template.

    Uses a {locale} placeholder in the path template for substitution.

    Security:
        Locale codes containing path separators or ".." are rejected, and
        every resolved path is checked against a fixed root directory.

    Example:
        >>> loader = PathLocaleLoader("locales/{locale}.yml")
        >>> data = loader.load("pt-BR")
        # Loads from: locales/pt-BR.yml

    Attributes:
        path_template: Path with {locale} placeholder
        root_dir: Fixed root directory for traversal validation.
                  Defaults to the static prefix of path_template.
    """

    path_template: str
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate template and cache resolved root directory.

        Raises:
            ValueError: If path_template lacks the {locale} placeholder
        """
        if "{locale}" not in self.path_template:
            msg = (
                f"path_template must contain '{{locale}}' placeholder, "
                f"got: '{self.path_template}'"
            )
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            static_prefix = self.path_template.split("{locale}")[0]
            prefix_dir = static_prefix.rpartition("/")[0] if "/" in static_prefix else ""
            resolved = Path(prefix_dir).resolve() if prefix_dir else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        """Reject locale codes that could escape the root directory.

        Raises:
            ValueError: If locale is empty or contains unsafe path components
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    def describe_path(self, locale: LocaleCode) -> str:
        """Return the file path a locale loads from."""
        return self.path_template.replace("{locale}", locale)

    def load(self, locale: LocaleCode) -> RawLocaleData:
        """Read and parse the YAML file for a locale.

        Raises:
            ValueError: If the locale is unsafe, the path escapes the root
                directory, or the document is not a mapping
            FileNotFoundError: If the file does not exist
            yaml.YAMLError: If the file is not valid YAML
        """
        self._validate_locale(locale)
        full_path = Path(self.describe_path(locale)).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = f"Path traversal detected: '{full_path}' escapes '{self._resolved_root}'"
            raise ValueError(msg) from None

        with full_path.open(encoding="utf-8") as stream:
            document = yaml.safe_load(stream)

        if document is None:
            return {}
        if not isinstance(document, Mapping):
            msg = f"Locale file {full_path} must hold a mapping, got {type(document).__name__}"
            raise ValueError(msg)
        return document


def unwrap_locale_document(locale: LocaleCode, document: RawLocaleData) -> RawLocaleData:
    """Strip the optional <locale> and "faker" wrappers from a document.

    Example:
        >>> unwrap_locale_document("pt-BR", {"pt-BR": {"faker": {"name": {}}}})
        {'name': {}}
    """
    data = document
    if len(data) == 1:
        (key,) = data
        # A bare YAML "no:" wrapper arrives as False and is left for
        # LocaleTree.from_mapping to reject.
        try:
            wrapped = isinstance(key, str) and normalize_locale(key) == normalize_locale(locale)
        except ValueError:
            wrapped = False
        if wrapped and isinstance(data[key], Mapping):
            data = data[key]
    if len(data) == 1 and _NAMESPACE_KEY in data and isinstance(data[_NAMESPACE_KEY], Mapping):
        data = data[_NAMESPACE_KEY]
    return data


def load_locale_trees(
    loader: LocaleDataLoader, locales: Iterable[LocaleCode]
) -> dict[LocaleCode, LocaleTree]:
    """Load and build trees for every listed locale.

    Locales whose data does not exist are skipped with a warning; every
    other failure (unreadable file, bad YAML, invalid tree) propagates.

    Args:
        loader: Source of raw locale data
        locales: Locale codes to load (duplicates ignored)

    Returns:
        Mapping of normalized locale code to LocaleTree
    """
    trees: dict[LocaleCode, LocaleTree] = {}
    for locale in dict.fromkeys(locales):
        try:
            document = loader.load(locale)
        except FileNotFoundError:
            logger.warning(
                "Locale data not found for %s at %s", locale, loader.describe_path(locale)
            )
            continue
        tree = LocaleTree.from_mapping(locale, unwrap_locale_document(locale, document))
        trees[tree.locale] = tree
        logger.info("Loaded locale %s (%d top-level keys)", tree.locale, len(tree))
    return trees
