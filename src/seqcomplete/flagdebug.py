import logging
import os
import sys
from typing import Counter, Optional

import click

log = logging.getLogger(__name__)

ENVNAME = "SEQCOMPLETE_DEBUG"

DEBUGFLAGS: Counter[str] = Counter()


def trace(name: str, txt: str):
    print(f"{name.upper()}: {txt}", flush=True, file=sys.stderr)


def add(txt: Optional[str]):
    if txt:
        DEBUGFLAGS.update(txt.lower().split(","))


def add_from_env(envname: str = ENVNAME):
    add(os.environ.get(envname, ""))


def debug(name: str) -> int:
    if "all" in DEBUGFLAGS:
        return 100
    return DEBUGFLAGS[name.lower()]


def logdebug(name: str, txt: str, ths: int = 0) -> bool:
    if debug(name) > ths:
        trace(name, txt)
        return True
    return False


def click_debug_option(envname: str = ENVNAME):
    return click.option(
        "--debug",
        hidden=True,
        expose_value=False,
        is_eager=True,
        default=lambda: add_from_env(envname),
        callback=lambda _a, _b, value: add(value),
        help="Comma separated list of debug flags",
    )
