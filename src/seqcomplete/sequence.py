"""
Complete a string from a sequence of choices.

Sometimes a word is formed from several pieces. For example an argument in the
form of::

    USERNAME
    UID "(" "current" ")"
    UID "(" "historical" ")"
    "EVERYONE"

with existing users budi, ujang and wati with UID 101, 102 and 103 can be
written as::

    [
        {
            "alternative": [
                ["budi", "ujang", "wati"],
                {"sequence": [
                    ["101", "102", "103"],
                    ["(current)", "(historical)"],
                ]},
                "EVERYONE",
            ],
        }
    ]

The items of the top level sequence are matched one after another against the
word. Each item that matches the word unambiguously is consumed and the
matching continues with the rest of the word. The first item that matches
ambiguously returns its candidates prefixed with everything consumed so far.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from . import flagdebug
from .choices import Choice, Context, parse_sequence
from .prefix import PrefixMatch, complete_array_elem

log = logging.getLogger(__name__)


@dataclass
class SequenceCompleter:
    sequence: Tuple[Choice, ...]
    prefix_match: PrefixMatch = complete_array_elem
    trace: bool = False

    def __post_init__(self):
        self.sequence = parse_sequence(self.sequence)

    @classmethod
    def from_env(cls, sequence: Any, **kwargs) -> SequenceCompleter:
        """Create completer with trace enabled from SEQCOMPLETE_DEBUG environment variable"""
        flagdebug.add_from_env()
        return cls(sequence, trace=flagdebug.debug("sequence") > 0, **kwargs)

    def _trace(self, txt: str):
        if self.trace:
            flagdebug.trace("sequence", txt)

    def complete(self, word: Optional[str] = "") -> List[str]:
        word = word or ""
        remaining = word
        consumed: List[str] = []
        for index, item in enumerate(self.sequence):
            context = Context(
                index=index,
                completed_item_words=tuple(consumed),
                cur_word=remaining,
                orig_word=word,
            )
            array = item.expand(context)
            matches = list(self.prefix_match(remaining, array))
            self._trace(f"item={index} word={remaining!r} array={array} matches={matches}")
            if len(matches) == 1:
                # The word is completed unambiguously by this item.
                # Move on to get more of the word from the next item.
                consumed.append(matches[0])
                remaining = remaining[len(matches[0]) :]
                continue
            if len(matches) > 1:
                prefix = "".join(consumed)
                ret = [prefix + x for x in matches]
                self._trace(f"item={index} is ambiguous, returning {ret}")
                return ret
            # The word may already contain this item and the next ones.
            already = [x for x in array if remaining.startswith(x)]
            if len(already) != 1:
                self._trace(f"item={index} does not match word={remaining!r}")
                break
            consumed.append(already[0])
            remaining = remaining[len(already[0]) :]
        ret = ["".join(consumed)] if consumed else []
        log.debug(f"word={word!r} consumed={consumed} result={ret}")
        return ret


def complete_sequence(
    sequence: Any,
    word: Optional[str] = "",
    prefix_match: PrefixMatch = complete_array_elem,
    trace: bool = False,
) -> List[str]:
    """Complete word from a sequence of items"""
    return SequenceCompleter(sequence, prefix_match=prefix_match, trace=trace).complete(
        word
    )
