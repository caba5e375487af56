import logging
import traceback
from typing import Any, Callable, List, Optional

import click
from click.shell_completion import CompletionItem
from typing_extensions import override

from . import flagdebug
from .common_base import composed, print_version, shell_completion
from .exceptions import ConfigurationError
from .sequence import SequenceCompleter

log = logging.getLogger(__name__)

EPILOG = "Licensed under GNU GPL version 3 or later."

Completor = Callable[[click.Context, click.Parameter, str], List[CompletionItem]]


def completer_completor(completer: SequenceCompleter) -> Completor:
    def completor_cb(
        ctx: click.Context, param: click.Parameter, incomplete: str
    ) -> List[CompletionItem]:
        try:
            return [CompletionItem(x) for x in completer.complete(incomplete)]
        except ConfigurationError:
            # Never break the shell. Show the error with SEQCOMPLETE_DEBUG=completion.
            flagdebug.logdebug("completion", traceback.format_exc())
            return []

    return completor_cb


def sequence_completor(sequence: Any) -> Completor:
    """Create click shell_complete callback completing from a sequence of items"""
    return completer_completor(SequenceCompleter.from_env(sequence))


class SequenceParamType(click.ParamType):
    """Click parameter that accepts only full completions of a sequence of items"""

    name = "word"

    def __init__(self, sequence: Any):
        self.completer = SequenceCompleter.from_env(sequence)

    @override
    def convert(
        self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]
    ) -> str:
        try:
            completions = self.completer.complete(value)
        except ConfigurationError as e:
            self.fail(str(e), param, ctx)
        if value not in completions:
            hint = f", did you mean one of: {', '.join(completions)}" if completions else ""
            self.fail(f"{value!r} is not a valid value{hint}", param, ctx)
        return value

    @override
    def shell_complete(
        self, ctx: click.Context, param: click.Parameter, incomplete: str
    ) -> List[CompletionItem]:
        return completer_completor(self.completer)(ctx, param, incomplete)


def click_callback_wrap_exit(cb: Callable[[], None]):
    """Execute a callback from click callback function and exit"""

    def wrap(ctx: click.Context, param: click.Parameter, value: str):
        if not value or ctx.resilient_parsing:
            return
        cb()
        ctx.exit()

    return wrap


def main_options():
    return composed(
        click.option(
            "--version",
            is_flag=True,
            callback=click_callback_wrap_exit(print_version),
            expose_value=False,
            is_eager=True,
            help="Print program version then exit.",
        ),
        click.option(
            "--autocomplete-info",
            is_flag=True,
            callback=click_callback_wrap_exit(shell_completion.print),
            expose_value=False,
            is_eager=True,
            help="Print shell completion information.",
        ),
        click.option(
            "--autocomplete-install",
            is_flag=True,
            callback=click_callback_wrap_exit(shell_completion.install),
            expose_value=False,
            is_eager=True,
            help="Install shell completion.",
        ),
    )


def help_h_option():
    return click.help_option("-h", "--help")


def verbose_option():
    return click.option(
        "-v",
        "--verbose",
        count=True,
        expose_value=False,
        is_eager=True,
        callback=lambda ctx, opt, value: (
            logging.root.setLevel(max(logging.NOTSET, logging.root.level - 10 * value))
        ),
        help="Be more verbose",
    )


def quiet_option():
    return click.option(
        "-q",
        "--quiet",
        count=True,
        expose_value=False,
        is_eager=True,
        callback=lambda ctx, opt, value: (
            logging.root.setLevel(
                min(logging.CRITICAL + 10, logging.root.level + 10 * value)
            )
        ),
        help="Be more quiet",
    )


def logging_config(format: Optional[str] = None, datefmt: Optional[str] = None):
    def wrapper(f):
        logging.basicConfig(
            level=logging.root.level - 10,
            format=format
            or "%(levelname)s %(name)s:%(funcName)s:%(lineno)d: %(message)s",
            datefmt=datefmt,
        )
        return f

    return wrapper


def h_help_quiet_verbose_logging_options(
    format: Optional[str] = None, datefmt: Optional[str] = None
):
    return composed(
        logging_config(format=format, datefmt=datefmt),
        verbose_option(),
        quiet_option(),
        help_h_option(),
    )
