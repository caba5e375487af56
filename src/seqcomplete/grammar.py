"""
Load grammar from YAML or JSON.

All scalars are loaded as strings, so that ``- [101, 102]`` are two strings.
A callable can be referenced with the ``!generator`` tag::

    - !generator mypackage.mymodule:list_users
    - ["(current)", "(historical)"]
"""

from __future__ import annotations

import functools
import importlib
import sys
from pathlib import Path
from typing import Any, Callable, Tuple

import yaml

from .choices import Choice, parse_sequence
from .exceptions import GrammarLoadError


def import_generator(path: str) -> Callable[..., Any]:
    """Import callable given in the form of module.path:function.attribute"""
    modname, _, attrs = path.partition(":")
    if not modname or not attrs:
        raise GrammarLoadError(
            f"Generator has to be in the form of module:function: {path!r}", path
        )
    try:
        mod = importlib.import_module(modname)
        ret = functools.reduce(getattr, attrs.split("."), mod)
    except (ImportError, AttributeError) as e:
        raise GrammarLoadError(f"Could not import generator {path!r}: {e}", path) from e
    if not callable(ret):
        raise GrammarLoadError(f"Generator {path!r} is not callable: {ret!r}", path)
    return ret


class GrammarLoader(yaml.BaseLoader):
    pass


def _generator_constructor(loader: GrammarLoader, node: yaml.Node) -> Callable[..., Any]:
    return import_generator(loader.construct_scalar(node))  # pyright: ignore


GrammarLoader.add_constructor("!generator", _generator_constructor)


def loads(text: str) -> Tuple[Choice, ...]:
    try:
        data = yaml.load(text, Loader=GrammarLoader)
    except yaml.YAMLError as e:
        raise GrammarLoadError(f"Could not parse grammar: {e}", text) from e
    if data is None:
        raise GrammarLoadError("Grammar is empty", text)
    return parse_sequence(data)


def load(file: str) -> Tuple[Choice, ...]:
    """Load grammar from file, - means stdin"""
    if file == "-":
        return loads(sys.stdin.read())
    try:
        text = Path(file).read_text()
    except OSError as e:
        raise GrammarLoadError(f"Could not read grammar file {file}: {e}", file) from e
    return loads(text)
