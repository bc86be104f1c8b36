"""Value selection over candidate lists.

Python 3.13+. Zero external dependencies.
"""

from fakerengine.diagnostics import EmptyCandidateListError, ErrorTemplate
from fakerengine.localedata.tree import ValueList
from fakerengine.runtime.random_source import RandomSource

__all__ = ["select"]


def select(values: ValueList, random_source: RandomSource, *, key_path: str | None = None) -> str:
    """Draw one candidate from a ValueList.

    Uniform lists draw an index with next_int(len). Weighted lists draw
    next_double() * total_weight and return the first entry whose cumulative
    weight meets or exceeds the draw.

    Args:
        values: Candidate list
        random_source: Session random source
        key_path: Key the list came from, for error messages (keyword-only)

    Returns:
        Selected string. A list whose only entry is "" returns "".

    Raises:
        EmptyCandidateListError: If the list has no entries
    """
    if not values.values:
        raise EmptyCandidateListError(ErrorTemplate.empty_candidate_list(key_path))

    if values.weights is None:
        return values.values[random_source.next_int(len(values.values))]

    total = sum(values.weights)
    draw = random_source.next_double() * total
    cumulative = 0.0
    for value, weight in zip(values.values, values.weights, strict=True):
        cumulative += weight
        if cumulative >= draw:
            return value
    # Floating-point summation can leave the final cumulative a hair below total.
    return values.values[-1]
