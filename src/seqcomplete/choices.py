"""
Grammar items and their expansion into candidate strings.

A grammar item is one of:

* a string - a single candidate,
* a list of strings - multiple candidates,
* a callable - called on each expansion and returns another item,
* a mapping ``{"alternative": [...]}`` - candidates of all the items,
* a mapping ``{"sequence": [...]}`` - cross product of candidates of the items.

Raw items are converted with parse_item() into Choice objects.
"""

from __future__ import annotations

import inspect
import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Tuple

from typing_extensions import override

from .common_base import andjoin
from .exceptions import ConfigurationError

log = logging.getLogger(__name__)

MAPPING_KEYS = ("alternative", "sequence")


@dataclass(frozen=True)
class Context:
    """Snapshot of the completion state passed to generators"""

    index: int = -1
    """Index of the top level sequence item being expanded"""
    completed_item_words: Tuple[str, ...] = ()
    """Strings already consumed by the previous top level items"""
    cur_word: str = ""
    """The part of the word not yet consumed"""
    orig_word: str = ""
    """The word as given by the user"""


class Choice(ABC):
    @abstractmethod
    def expand(self, context: Context) -> List[str]:
        """Return the candidate strings of this item"""
        raise NotImplementedError


@dataclass(frozen=True)
class Literal(Choice):
    value: str

    @override
    def expand(self, context: Context) -> List[str]:
        return [self.value]


@dataclass(frozen=True)
class Choices(Choice):
    values: Tuple[str, ...]

    @override
    def expand(self, context: Context) -> List[str]:
        return list(self.values)


def _takes_context(func: Callable[..., Any]) -> bool:
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # Some builtins have no signature.
        return False
    # Only a required positional parameter receives the context.
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
        for p in sig.parameters.values()
    )


@dataclass(frozen=True)
class Generator(Choice):
    func: Callable[..., Any]
    takes_context: bool = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "takes_context", _takes_context(self.func))

    @override
    def expand(self, context: Context) -> List[str]:
        log.debug(f"Calling {self.func!r} with {context}")
        ret = self.func(context) if self.takes_context else self.func()
        return parse_item(ret).expand(context)


@dataclass(frozen=True)
class Alternative(Choice):
    items: Tuple[Choice, ...]

    @override
    def expand(self, context: Context) -> List[str]:
        return [x for item in self.items for x in item.expand(context)]


@dataclass(frozen=True)
class Sequence(Choice):
    items: Tuple[Choice, ...]

    @override
    def expand(self, context: Context) -> List[str]:
        sets = [item.expand(context) for item in self.items]
        if not sets:
            return []
        if len(sets) == 1:
            return sets[0]
        # First item varies slowest.
        return ["".join(x) for x in itertools.product(*sets)]


def _parse_list(item: Any, what: str) -> Tuple[Any, ...]:
    if isinstance(item, (str, bytes)) or not isinstance(item, (list, tuple)):
        raise ConfigurationError(f"{what} has to be a list of items: {item!r}", item)
    return tuple(item)


def _parse_mapping(item: Mapping[Any, Any]) -> Choice:
    unknown = [k for k in item.keys() if k not in MAPPING_KEYS]
    if unknown:
        raise ConfigurationError(
            f"Unknown keys {andjoin(repr(x) for x in unknown)} in item: {item!r}", item
        )
    if len(item) != 1:
        raise ConfigurationError(
            f"Need exactly one of alternative or sequence: {item!r}", item
        )
    if "alternative" in item:
        children = _parse_list(item["alternative"], "Alternative")
        return Alternative(tuple(parse_item(x) for x in children))
    children = _parse_list(item["sequence"], "Sequence")
    if not children:
        raise ConfigurationError(f"Sequence needs at least one item: {item!r}", item)
    return Sequence(tuple(parse_item(x) for x in children))


def parse_item(item: Any) -> Choice:
    """Convert raw grammar item into Choice object"""
    if isinstance(item, Choice):
        return item
    if isinstance(item, str):
        return Literal(item)
    if isinstance(item, (list, tuple)):
        for x in item:
            if not isinstance(x, str):
                raise ConfigurationError(
                    f"Invalid item: list elements have to be strings, got {x!r} in {item!r}",
                    item,
                )
        return Choices(tuple(item))
    if isinstance(item, Mapping):
        return _parse_mapping(item)
    if callable(item):
        return Generator(item)
    raise ConfigurationError(f"Invalid item: {item!r}", item)


def parse_sequence(sequence: Any) -> Tuple[Choice, ...]:
    """Convert raw top level sequence into a tuple of Choice objects"""
    return tuple(parse_item(x) for x in _parse_list(sequence, "Sequence"))


def expand(item: Any, context: Optional[Context] = None) -> List[str]:
    """Expand raw or parsed item into the list of candidate strings"""
    return parse_item(item).expand(context or Context())
