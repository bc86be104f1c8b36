"""Immutable per-locale data trees.

A LocaleTree maps case-insensitive key segments to either a ValueList (a
leaf of candidate strings, optionally weighted) or a nested LocaleTree.
Trees are built once when locale data is loaded and never mutated, so one
tree can be shared read-only by any number of sessions and threads.

Key normalization:
    Segments are compared after lower-casing and removing "_" and "-",
    so "streetName", "street_name" and "STREET-NAME" address the same key.
    Two source keys that collide after normalization are rejected at
    construction time.

Source format accepted by LocaleTree.from_mapping():
    - mapping            -> nested tree
    - list of scalars    -> uniform ValueList
    - list of {value, weight} mappings -> weighted ValueList
    - scalar             -> singleton ValueList
    - null               -> singleton ValueList holding ""

Keys must be strings. YAML reads bare no, yes, on, off and numbers as
other types, so such keys must be quoted ("no": ...); a non-string key is
rejected rather than converted.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from fakerengine.locale_utils import normalize_locale
from fakerengine.localedata.types import KeyPath, LocaleCode

__all__ = [
    "LocaleTree",
    "ValueList",
    "format_key_path",
    "normalize_key",
    "split_key_path",
]

type TreeNode = ValueList | LocaleTree


def normalize_key(segment: str) -> str:
    """Return the canonical form of one key segment.

    Example:
        >>> normalize_key("streetName")
        'streetname'
        >>> normalize_key("street_name")
        'streetname'
    """
    return segment.replace("_", "").replace("-", "").lower()


def split_key_path(key_path: str | Sequence[str]) -> KeyPath:
    """Split a dotted key path into normalized segments.

    Args:
        key_path: "Address.street_name" or ("Address", "street_name")

    Returns:
        Normalized segments, e.g. ("address", "streetname")

    Raises:
        ValueError: If the path or any segment is empty
    """
    parts = key_path.split(".") if isinstance(key_path, str) else list(key_path)
    segments = tuple(normalize_key(part.strip()) for part in parts)
    if not segments or not all(segments):
        msg = f"Invalid key path: {key_path!r}"
        raise ValueError(msg)
    return segments


def format_key_path(key_path: KeyPath) -> str:
    """Join normalized segments back into a dotted path for messages."""
    return ".".join(key_path)


def _scalar_text(value: object) -> str:
    match value:
        case None:
            return ""
        case bool():
            return "true" if value else "false"
        case str():
            return value
        case int() | float():
            return str(value)
        case _:
            msg = f"Unsupported locale data value of type {type(value).__name__}"
            raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class ValueList:
    """Leaf set of candidate strings for one key.

    Attributes:
        values: Candidate strings (may be empty; selection then fails)
        weights: Positive weight per value, or None for uniform selection
    """

    values: tuple[str, ...]
    weights: tuple[float, ...] | None = None

    def __post_init__(self) -> None:
        """Validate weights against values.

        Raises:
            ValueError: If weights and values differ in length, or a weight
                is not a finite positive number
        """
        if self.weights is None:
            return
        if len(self.weights) != len(self.values):
            msg = (
                f"ValueList has {len(self.values)} values "
                f"but {len(self.weights)} weights"
            )
            raise ValueError(msg)
        for weight in self.weights:
            if isinstance(weight, bool) or not math.isfinite(weight) or weight <= 0:
                msg = f"ValueList weights must be finite and positive, got {weight!r}"
                raise ValueError(msg)

    @classmethod
    def of(cls, *values: str) -> ValueList:
        """Build an unweighted list: ValueList.of("Main St", "Oak Ave")."""
        return cls(values=tuple(values))

    @classmethod
    def weighted(cls, pairs: Sequence[tuple[str, float]]) -> ValueList:
        """Build a weighted list from (value, weight) pairs."""
        return cls(
            values=tuple(value for value, _ in pairs),
            weights=tuple(weight for _, weight in pairs),
        )

    @classmethod
    def from_raw(cls, raw: object) -> ValueList:
        """Build a ValueList from parsed locale data.

        Raises:
            ValueError: If weighted and unweighted entries are mixed, or a
                weighted entry lacks "value" or "weight"
            TypeError: If an entry is not a scalar or weighted mapping
        """
        if not isinstance(raw, (list, tuple)):
            return cls(values=(_scalar_text(raw),))

        weighted_entries = [entry for entry in raw if isinstance(entry, Mapping)]
        if not weighted_entries:
            return cls(values=tuple(_scalar_text(entry) for entry in raw))

        if len(weighted_entries) != len(raw):
            msg = "Weighted and unweighted entries cannot be mixed in one list"
            raise ValueError(msg)

        pairs: list[tuple[str, float]] = []
        for entry in weighted_entries:
            if "value" not in entry or "weight" not in entry:
                msg = f"Weighted entry needs 'value' and 'weight' keys, got {sorted(entry)}"
                raise ValueError(msg)
            weight = entry["weight"]
            if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                msg = f"Weight must be a number, got {weight!r}"
                raise ValueError(msg)
            pairs.append((_scalar_text(entry["value"]), float(weight)))
        return cls.weighted(pairs)

    @property
    def is_weighted(self) -> bool:
        """True when entries carry explicit weights."""
        return self.weights is not None

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __getitem__(self, index: int) -> str:
        return self.values[index]


class LocaleTree:
    """Immutable nested mapping of key segments to value lists.

    Thread Safety:
        Read-only after construction; safe to share across threads.

    Example:
        >>> tree = LocaleTree.from_mapping("en", {
        ...     "address": {"street_name": ["Main St", "Oak Ave"]},
        ... })
        >>> tree.leaf(("address", "streetname"))
        ValueList(values=('Main St', 'Oak Ave'), weights=None)
    """

    __slots__ = ("_entries", "_locale")

    def __init__(self, locale: LocaleCode, entries: Mapping[str, TreeNode]) -> None:
        """Initialize tree from already-built nodes.

        Args:
            locale: Locale code; normalized on construction
            entries: Mapping of key segment to ValueList or LocaleTree

        Raises:
            ValueError: If the locale is malformed, or two keys collide
                after normalization
            TypeError: If an entry is neither a ValueList nor a LocaleTree
        """
        normalized: dict[str, TreeNode] = {}
        for key, node in entries.items():
            if not isinstance(node, (ValueList, LocaleTree)):
                msg = (
                    f"Tree entry '{key}' must be ValueList or LocaleTree, "
                    f"got {type(node).__name__}"
                )
                raise TypeError(msg)
            segment = normalize_key(key)
            if not segment:
                msg = f"Invalid empty key {key!r} in locale data"
                raise ValueError(msg)
            if segment in normalized:
                msg = f"Key '{key}' collides with another key after normalization ('{segment}')"
                raise ValueError(msg)
            normalized[segment] = node
        self._locale = normalize_locale(locale)
        self._entries: Mapping[str, TreeNode] = MappingProxyType(normalized)

    @classmethod
    def from_mapping(cls, locale: LocaleCode, data: Mapping[str, object]) -> LocaleTree:
        """Build a tree from parsed locale data (e.g. a YAML document).

        Args:
            locale: Locale code the data belongs to
            data: Nested mapping in the source format described in the
                module docstring

        Returns:
            Immutable LocaleTree

        Raises:
            TypeError: If a key is not a string
        """
        entries: dict[str, TreeNode] = {}
        for key, raw in data.items():
            if not isinstance(key, str):
                msg = (
                    f"Locale data key {key!r} ({type(key).__name__}) is not a string; "
                    "quote YAML keys such as 'no', 'on' or numbers"
                )
                raise TypeError(msg)
            if isinstance(raw, Mapping):
                entries[key] = cls.from_mapping(locale, raw)
            else:
                entries[key] = ValueList.from_raw(raw)
        return cls(locale, entries)

    @property
    def locale(self) -> LocaleCode:
        """Normalized locale code."""
        return self._locale

    def lookup(self, key_path: KeyPath) -> TreeNode | None:
        """Return the node at a normalized key path, or None."""
        node: TreeNode = self
        for segment in key_path:
            if not isinstance(node, LocaleTree):
                return None
            child = node._entries.get(segment)
            if child is None:
                return None
            node = child
        return node

    def leaf(self, key_path: KeyPath) -> ValueList | None:
        """Return the ValueList at a normalized key path.

        Returns None when the path is missing or names a subtree.
        """
        node = self.lookup(key_path)
        return node if isinstance(node, ValueList) else None

    def iter_leaves(self, prefix: KeyPath = ()) -> Iterator[tuple[KeyPath, ValueList]]:
        """Yield (key_path, ValueList) for every leaf, depth first."""
        for segment, node in self._entries.items():
            path = (*prefix, segment)
            if isinstance(node, ValueList):
                yield path, node
            else:
                yield from node.iter_leaves(path)

    def keys(self) -> Iterator[str]:
        """Normalized top-level segments."""
        return iter(self._entries)

    def __contains__(self, segment: object) -> bool:
        return isinstance(segment, str) and normalize_key(segment) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LocaleTree(locale={self._locale!r}, keys={len(self._entries)})"
