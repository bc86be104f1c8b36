"""Pattern generators: digit fill, letter fill and regex expansion.

Every function takes an explicit RandomSource; none keeps global state.

Python 3.13+. Zero external dependencies.
"""

from .fill import bothify, letter_alphabet, letterify, numerify
from .regex_expand import expand_node, regexify
from .regex_parser import clear_pattern_cache, parse_pattern

__all__ = [
    "bothify",
    "clear_pattern_cache",
    "expand_node",
    "letter_alphabet",
    "letterify",
    "numerify",
    "parse_pattern",
    "regexify",
]
