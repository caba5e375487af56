from typing import Callable, List, Sequence

PrefixMatch = Callable[[str, Sequence[str]], List[str]]
"""Signature of a prefix matching function: (word, candidates) -> matching candidates"""


def complete_array_elem(word: str, array: Sequence[str]) -> List[str]:
    """Return elements of array that start with word, in array order.

    Matching is case-sensitive and duplicates are preserved. A word equal to
    an element matches that element like any other prefix.
    """
    return [x for x in array if x.startswith(word)]
