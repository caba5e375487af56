#!/usr/bin/env python3
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import click
import clickdc
from click.shell_completion import BashComplete, CompletionItem

from . import flagdebug
from . import grammar as grammarlib
from .choices import Choice, Context
from .common_click import (
    EPILOG,
    completer_completor,
    h_help_quiet_verbose_logging_options,
    main_options,
)
from .exceptions import ConfigurationError
from .sequence import SequenceCompleter

log = logging.getLogger(__name__)

# Problem: bash COMP_WORDBREAKS splits on colon `:` and `=`, which are common in grammars.
# Solution: use bash-completion helpers.
BashComplete.source_template = r"""\
    %(complete_func)s() {
        local cword words=()
        # __reassemble_comp_words_by_ref renamed to _comp__reassemble_words in newer bash-completion
        if [[ $(type -t __reassemble_comp_words_by_ref) == function ]]; then
            __reassemble_comp_words_by_ref "=:" words cword
        elif [[ $(type -t _comp__reassemble_words) == function ]]; then
            _comp__reassemble_words "=:" words cword
        else
            words=("${COMP_WORDS[@]}")
            cword=${COMP_CWORD}
        fi
        local IFS=$'\n'
        response=$(COMP_WORDS="${words[*]}" COMP_CWORD="$cword" %(complete_var)s=bash_complete $1)
        for completion in $response; do
            IFS=',' read type value <<< "$completion"
            case $type in
                dir) COMPREPLY=(); compopt -o dirnames; ;;
                file) COMPREPLY=(); compopt -o default; ;;
                plain) COMPREPLY+=("$value"); ;;
                nospace) compopt -o nospace; ;;
            esac
        done
    }
    %(complete_func)s_setup() {
        complete -o nosort -F %(complete_func)s %(prog_name)s
    }
    %(complete_func)s_setup;
"""


def load_grammar(source: str, expr: bool) -> Tuple[Choice, ...]:
    return grammarlib.loads(source) if expr else grammarlib.load(source)


def word_completor(
    ctx: click.Context, param: click.Parameter, incomplete: str
) -> List[CompletionItem]:
    """Complete WORD from the grammar given earlier on the command line"""
    source = ctx.params.get("grammar")
    expr = bool(ctx.params.get("expr"))
    # Reading stdin here would block the interactive shell.
    if not source or (source == "-" and not expr):
        return []
    try:
        sequence = load_grammar(source, expr)
    except ConfigurationError as e:
        flagdebug.logdebug("completion", f"{e}")
        return []
    return completer_completor(SequenceCompleter.from_env(sequence))(
        ctx, param, incomplete
    )


@dataclass
class Args:
    zero: bool = clickdc.option(
        "-z", help="Separate completions with NUL character instead of a newline"
    )
    expand: bool = clickdc.option(
        help="Print candidates of each item of the grammar separated by an empty line and exit."
        " Generators are called with an empty context, without words of the previous items."
    )


def print_expansion(completer: SequenceCompleter, sep: str):
    for index, item in enumerate(completer.sequence):
        if index:
            click.echo(sep, nl=False)
        for x in item.expand(Context(index=index)):
            click.echo(x + sep, nl=False)


@click.command(
    "seqcomplete",
    help="""
Complete WORD from a sequence of choices given in GRAMMAR file.

\b
GRAMMAR is a YAML or JSON list of items. An item can be:
  - a string, a single string to choose from,
  - a list of strings, multiple strings to choose from,
  - !generator module:function, a function that returns an item,
  - {alternative: [items...]}, strings of any of the items,
  - {sequence: [items...]}, concatenation of strings of all the items.

Each completion is printed on a separate line.
Exits with 1 when there are no completions.

\b
Examples:
    seqcomplete -e '[[101, 102, 103], ["(current)", "(historical)"]]' 101
    seqcomplete grammar.yml 101
""",
    epilog=EPILOG,
)
@click.option(
    "-e",
    "--expr",
    is_flag=True,
    help="GRAMMAR is a YAML string, not a file",
)
@click.argument("grammar")
@click.argument("word", default="", shell_complete=word_completor)
@clickdc.adddc("args", Args)
@flagdebug.click_debug_option()
@h_help_quiet_verbose_logging_options()
@main_options()
def cli(args: Args, expr: bool, grammar: str, word: str):
    log.debug(f"args={args} expr={expr} grammar={grammar!r} word={word!r}")
    sep = "\0" if args.zero else "\n"
    try:
        completer = SequenceCompleter(
            load_grammar(grammar, expr), trace=flagdebug.debug("sequence") > 0
        )
        if args.expand:
            print_expansion(completer, sep)
            return
        completions = completer.complete(word)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="GRAMMAR")
    for x in completions:
        click.echo(x + sep, nl=False)
    if not completions:
        click.get_current_context().exit(1)


def main():
    cli(max_content_width=9999)


if __name__ == "__main__":
    main()
