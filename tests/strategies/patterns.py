"""Hypothesis strategies for generation regex patterns.

Patterns are assembled from pieces that are valid both for Python's re
module and for the generation subset, so every generated pattern can be
checked with re.fullmatch().

Event-Emitting Strategies (HypoFuzz-Optimized):
    - generation_patterns: pattern_atom={literal|class|escape|dot|group}
    - generation_patterns: pattern_quantifier={none|star|plus|optional|exact|range}
"""

from __future__ import annotations

import string

from hypothesis import event
from hypothesis import strategies as st

__all__ = ["generation_patterns"]

_CLASSES = ("[a-z]", "[A-Z]", "[0-9]", "[a-fA-F0-9]", "[^a-z]", "[-_.]", "[]x]")
_ESCAPES = ("\\d", "\\w", "\\s", "\\D", "\\W", "\\S", "\\.", "\\-", "\\x41", "\\(")


@st.composite
def _atoms(draw: st.DrawFn, depth: int) -> str:
    kinds = ["literal", "class", "escape", "dot"]
    if depth > 0:
        kinds.append("group")
    kind = draw(st.sampled_from(kinds))
    event(f"pattern_atom={kind}")
    match kind:
        case "literal":
            return draw(st.sampled_from(string.ascii_letters + string.digits + " -_,:"))
        case "class":
            return draw(st.sampled_from(_CLASSES))
        case "escape":
            return draw(st.sampled_from(_ESCAPES))
        case "dot":
            return "."
        case _:
            # Groups only hold bounded repeats; nested unbounded repeats make
            # re.fullmatch backtrack exponentially.
            branches = draw(
                st.lists(_sequences(depth - 1, bounded=True), min_size=1, max_size=3)
            )
            opener = draw(st.sampled_from(("(", "(?:")))
            return opener + "|".join(branches) + ")"


@st.composite
def _quantified(draw: st.DrawFn, depth: int, bounded: bool) -> str:
    atom = draw(_atoms(depth))
    is_group = atom.startswith("(")
    kinds = ["none", "optional", "exact", "range"]
    if not (bounded or is_group):
        kinds += ["star", "plus"]
    kind = draw(st.sampled_from(kinds))
    event(f"pattern_quantifier={kind}")
    high_limit = 2 if is_group else 4
    match kind:
        case "none":
            return atom
        case "star":
            return atom + "*"
        case "plus":
            return atom + "+"
        case "optional":
            return atom + "?"
        case "exact":
            return atom + "{" + str(draw(st.integers(0, high_limit))) + "}"
        case _:
            low = draw(st.integers(0, high_limit))
            high = draw(st.integers(low, high_limit))
            return atom + "{" + f"{low},{high}" + "}"


@st.composite
def _sequences(draw: st.DrawFn, depth: int, bounded: bool = False) -> str:
    return "".join(draw(st.lists(_quantified(depth, bounded), min_size=1, max_size=5)))


@st.composite
def generation_patterns(draw: st.DrawFn, max_depth: int = 2) -> str:
    """Generate a regex pattern from the supported subset.

    Events emitted:
    - pattern_atom={literal|class|escape|dot|group}
    - pattern_quantifier={none|star|plus|optional|exact|range}
    """
    branches = draw(st.lists(_sequences(max_depth), min_size=1, max_size=3))
    return "|".join(branches)
