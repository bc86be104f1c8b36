"""Tests for localedata.tree: key normalization, ValueList and LocaleTree."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fakerengine.localedata.tree import (
    LocaleTree,
    ValueList,
    format_key_path,
    normalize_key,
    split_key_path,
)
from tests.strategies import identifiers

# ============================================================================
# KEY NORMALIZATION
# ============================================================================


class TestNormalizeKey:
    """Test normalize_key and key path helpers."""

    @pytest.mark.parametrize("spelling", ["streetName", "street_name", "STREET-NAME", "StreetName"])
    def test_spellings_collapse(self, spelling: str) -> None:
        """camelCase, snake_case and kebab-case address one key."""
        assert normalize_key(spelling) == "streetname"

    def test_split_dotted_path(self) -> None:
        """Dotted path split and normalized per segment."""
        assert split_key_path("Address.street_name") == ("address", "streetname")

    def test_split_sequence_path(self) -> None:
        """Sequences are accepted as already split."""
        assert split_key_path(["Name", "firstName"]) == ("name", "firstname")

    @pytest.mark.parametrize("bad", ["", "Address.", ".city", "a..b", "_"])
    def test_split_rejects_empty_segments(self, bad: str) -> None:
        """Empty segments (after normalization) raise ValueError."""
        with pytest.raises(ValueError, match="Invalid key path"):
            split_key_path(bad)

    def test_format_key_path(self) -> None:
        """Segments join back with dots."""
        assert format_key_path(("address", "city")) == "address.city"

    @given(name=identifiers())
    def test_normalize_is_idempotent(self, name: str) -> None:
        """PROPERTY: normalizing twice changes nothing."""
        once = normalize_key(name)
        assert normalize_key(once) == once
        assert "_" not in once
        assert "-" not in once


# ============================================================================
# VALUE LISTS
# ============================================================================


class TestValueList:
    """Test ValueList construction and validation."""

    def test_of_builds_uniform_list(self) -> None:
        """ValueList.of() stores values without weights."""
        values = ValueList.of("Main St", "Oak Ave")
        assert values.values == ("Main St", "Oak Ave")
        assert not values.is_weighted
        assert len(values) == 2
        assert values[1] == "Oak Ave"
        assert list(values) == ["Main St", "Oak Ave"]

    def test_weighted_builds_pairs(self) -> None:
        """ValueList.weighted() splits (value, weight) pairs."""
        values = ValueList.weighted([("a", 3.0), ("b", 1.0)])
        assert values.values == ("a", "b")
        assert values.weights == (3.0, 1.0)
        assert values.is_weighted

    def test_weight_count_must_match(self) -> None:
        """Mismatched lengths raise ValueError."""
        with pytest.raises(ValueError, match="2 values but 1 weights"):
            ValueList(values=("a", "b"), weights=(1.0,))

    @pytest.mark.parametrize("weight", [0.0, -1.0, float("inf"), float("nan")])
    def test_non_positive_or_non_finite_weight_rejected(self, weight: float) -> None:
        """Weights must be finite and positive."""
        with pytest.raises(ValueError, match="finite and positive"):
            ValueList(values=("a",), weights=(weight,))

    def test_empty_list_allowed(self) -> None:
        """An empty list is valid data; selection reports it later."""
        assert len(ValueList.of()) == 0


class TestValueListFromRaw:
    """Test ValueList.from_raw conversions of parsed YAML."""

    def test_list_of_strings(self) -> None:
        """Plain list becomes a uniform list."""
        assert ValueList.from_raw(["x", "y"]) == ValueList.of("x", "y")

    def test_scalar_becomes_singleton(self) -> None:
        """A scalar is a one-element list."""
        assert ValueList.from_raw("only") == ValueList.of("only")

    def test_null_becomes_empty_string(self) -> None:
        """YAML null is the empty string, not a missing value."""
        assert ValueList.from_raw(None) == ValueList.of("")
        assert ValueList.from_raw([None]) == ValueList.of("")

    def test_numbers_and_bools_become_text(self) -> None:
        """Numeric and boolean scalars are rendered as text."""
        assert ValueList.from_raw([12, 1.5, True, False]).values == ("12", "1.5", "true", "false")

    def test_weighted_entries(self) -> None:
        """Mappings with value and weight make a weighted list."""
        values = ValueList.from_raw([{"value": "A", "weight": 2}, {"value": "B", "weight": 0.5}])
        assert values == ValueList.weighted([("A", 2.0), ("B", 0.5)])

    def test_mixed_entries_rejected(self) -> None:
        """Weighted and plain entries cannot share a list."""
        with pytest.raises(ValueError, match="cannot be mixed"):
            ValueList.from_raw(["A", {"value": "B", "weight": 1}])

    def test_weighted_entry_needs_both_keys(self) -> None:
        """A weighted entry missing 'weight' is rejected."""
        with pytest.raises(ValueError, match="'value' and 'weight'"):
            ValueList.from_raw([{"value": "A"}])

    def test_weight_must_be_number(self) -> None:
        """A textual or boolean weight is rejected."""
        with pytest.raises(ValueError, match="Weight must be a number"):
            ValueList.from_raw([{"value": "A", "weight": "heavy"}])
        with pytest.raises(ValueError, match="Weight must be a number"):
            ValueList.from_raw([{"value": "A", "weight": True}])

    def test_unsupported_entry_type(self) -> None:
        """Nested lists are not scalar values."""
        with pytest.raises(TypeError, match="Unsupported locale data value"):
            ValueList.from_raw([["nested"]])


# ============================================================================
# LOCALE TREES
# ============================================================================


class TestLocaleTree:
    """Test LocaleTree construction and lookup."""

    @pytest.fixture
    def tree(self) -> LocaleTree:
        return LocaleTree.from_mapping(
            "pt-br",
            {
                "address": {
                    "street_name": ["Rua A", "Rua B"],
                    "city_prefix": [""],
                    "street": {"suffix": ["Rua"]},
                },
                "name": {"firstName": ["Ana"]},
            },
        )

    def test_locale_normalized(self, tree: LocaleTree) -> None:
        """Tree locale uses the canonical form."""
        assert tree.locale == "pt_BR"

    def test_leaf_lookup(self, tree: LocaleTree) -> None:
        """leaf() returns the ValueList at a normalized path."""
        assert tree.leaf(("address", "streetname")) == ValueList.of("Rua A", "Rua B")

    def test_camel_case_source_keys(self, tree: LocaleTree) -> None:
        """camelCase source keys are normalized too."""
        assert tree.leaf(("name", "firstname")) == ValueList.of("Ana")

    def test_empty_string_leaf_is_present(self, tree: LocaleTree) -> None:
        """A [""] leaf is a real value, distinct from a missing key."""
        assert tree.leaf(("address", "cityprefix")) == ValueList.of("")

    def test_missing_path(self, tree: LocaleTree) -> None:
        """Missing keys give None."""
        assert tree.leaf(("address", "zipcode")) is None
        assert tree.lookup(("nowhere",)) is None

    def test_subtree_is_not_a_leaf(self, tree: LocaleTree) -> None:
        """A nested mapping is reachable by lookup() but not leaf()."""
        assert isinstance(tree.lookup(("address", "street")), LocaleTree)
        assert tree.leaf(("address", "street")) is None

    def test_path_through_leaf(self, tree: LocaleTree) -> None:
        """Descending past a leaf yields None."""
        assert tree.lookup(("address", "streetname", "extra")) is None

    def test_iter_leaves(self, tree: LocaleTree) -> None:
        """iter_leaves() walks every leaf depth first."""
        paths = [path for path, _ in tree.iter_leaves()]
        assert paths == [
            ("address", "streetname"),
            ("address", "cityprefix"),
            ("address", "street", "suffix"),
            ("name", "firstname"),
        ]

    def test_mapping_protocol(self, tree: LocaleTree) -> None:
        """keys(), len() and membership use normalized segments."""
        assert list(tree.keys()) == ["address", "name"]
        assert len(tree) == 2
        assert "Address" in tree
        assert "phone" not in tree
        assert 42 not in tree

    def test_repr(self, tree: LocaleTree) -> None:
        """repr shows locale and key count."""
        assert repr(tree) == "LocaleTree(locale='pt_BR', keys=2)"

    def test_colliding_keys_rejected(self) -> None:
        """Two source keys with one normalized form are an error."""
        with pytest.raises(ValueError, match="collides"):
            LocaleTree.from_mapping("en", {"street_name": ["a"], "streetName": ["b"]})

    def test_empty_key_rejected(self) -> None:
        """A key that normalizes to nothing is an error."""
        with pytest.raises(ValueError, match="Invalid empty key"):
            LocaleTree.from_mapping("en", {"_": ["a"]})

    def test_entry_type_checked(self) -> None:
        """Direct construction accepts only ValueList or LocaleTree nodes."""
        with pytest.raises(TypeError, match="must be ValueList or LocaleTree"):
            LocaleTree("en", {"a": ["raw list"]})  # type: ignore[dict-item]

    @pytest.mark.parametrize("key", [False, True, None, 404, 1.5])
    def test_non_string_key_rejected(self, key: object) -> None:
        """Keys YAML parsed as bool, null or number are not silently renamed."""
        with pytest.raises(TypeError, match="is not a string; quote YAML keys"):
            LocaleTree.from_mapping("en", {"name": {key: ["x"]}})  # type: ignore[dict-item]

    @given(
        keys=st.lists(
            identifiers().filter(normalize_key), min_size=1, max_size=5, unique_by=normalize_key
        ),
    )
    def test_every_source_key_is_found(self, keys: list[str]) -> None:
        """PROPERTY: each leaf is found under its normalized key."""
        tree = LocaleTree.from_mapping("en", {key: [key] for key in keys})
        for key in keys:
            assert tree.leaf((normalize_key(key),)) == ValueList.of(key)
