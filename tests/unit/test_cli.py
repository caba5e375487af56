from typing import List

import click
import pytest
from click.testing import CliRunner

from seqcomplete.choices import Context
from seqcomplete.common_click import SequenceParamType, sequence_completor
from seqcomplete.entry import cli

UIDS = "[[101, 102, 103], ['(current)', '(historical)']]"

runner = CliRunner()


def run(*args: str, code: int = 0, **kwargs) -> List[str]:
    ret = runner.invoke(cli, args, prog_name="seqcomplete", **kwargs)
    assert ret.exit_code == code, f"{args} {ret.output} {ret.exception}"
    return ret.output.splitlines()


def test_cli_help():
    assert "GRAMMAR" in "\n".join(run("--help"))
    assert "GRAMMAR" in "\n".join(run("-h"))


def test_cli_expr():
    assert run("-e", UIDS, "101") == ["101(current)", "101(historical)"]
    assert run("-e", UIDS, "101(h") == ["101(historical)"]
    assert run("-e", UIDS) == ["101", "102", "103"]


def test_cli_no_completions():
    assert run("-e", "[alpha, beta]", "zzz", code=1) == []


def test_cli_zero():
    ret = runner.invoke(cli, ["-z", "-e", UIDS, "10"])
    assert ret.exit_code == 0
    assert ret.output == "101\0" "102\0" "103\0"


def test_cli_expand():
    assert run("--expand", "-e", UIDS) == [
        "101",
        "102",
        "103",
        "",
        "(current)",
        "(historical)",
    ]


def test_cli_file(tmp_path):
    file = tmp_path / "grammar.yml"
    file.write_text("- {alternative: [EVERYONE, [budi, wati]]}\n")
    assert run(str(file), "") == ["EVERYONE", "budi", "wati"]
    assert run(str(file), "w") == ["wati"]


def test_cli_stdin():
    assert run("-", "b", input="- [budi, ujang]\n") == ["budi"]


@pytest.mark.parametrize(
    "args",
    [
        ["-e", "[{}]", ""],
        ["-e", "[a, b", ""],
        ["/nonexistent/seqcomplete/grammar.yml", ""],
        ["-e", "- !generator os:nonexistentfunction", ""],
    ],
)
def test_cli_invalid_grammar(args):
    ret = runner.invoke(cli, args)
    assert ret.exit_code == 2, ret.output
    assert "GRAMMAR" in ret.output


def test_cli_shell_complete():
    ret = runner.invoke(
        cli,
        [],
        prog_name="seqcomplete",
        env={
            "_SEQCOMPLETE_COMPLETE": "bash_complete",
            "COMP_WORDS": f'seqcomplete -e "{UIDS}" 101',
            "COMP_CWORD": "3",
        },
    )
    assert ret.exit_code == 0, ret.output
    assert ret.output.splitlines() == ["plain,101(current)", "plain,101(historical)"]


def test_cli_shell_complete_invalid_grammar():
    ret = runner.invoke(
        cli,
        [],
        prog_name="seqcomplete",
        env={
            "_SEQCOMPLETE_COMPLETE": "bash_complete",
            "COMP_WORDS": "seqcomplete -e [{}] 1",
            "COMP_CWORD": "3",
        },
    )
    assert ret.exit_code == 0, ret.output
    assert ret.output == ""


USERS = [{"alternative": [["budi", "wati"], {"sequence": [["101"], ["(x)", "(y)"]]}]}]


@click.command()
@click.argument("user", type=SequenceParamType(USERS))
@click.option("--other", shell_complete=sequence_completor(USERS))
def usercmd(user: str, other: str):
    click.echo(user)


def test_cli_sequence_param_type():
    assert runner.invoke(usercmd, ["budi"]).output == "budi\n"
    assert runner.invoke(usercmd, ["101(y)"]).output == "101(y)\n"
    ret = runner.invoke(usercmd, ["101"])
    assert ret.exit_code == 2
    assert "101(x), 101(y)" in ret.output
    ret = runner.invoke(usercmd, ["nobody"])
    assert ret.exit_code == 2
    assert "'nobody' is not a valid value" in ret.output


def test_cli_sequence_completor():
    ctx = click.Context(usercmd)
    param = next(x for x in usercmd.params if x.name == "other")
    assert [x.value for x in param.shell_complete(ctx, "1")] == ["101(x)", "101(y)"]
    user = next(x for x in usercmd.params if x.name == "user")
    assert [x.value for x in user.shell_complete(ctx, "w")] == ["wati"]
    assert [x.value for x in user.shell_complete(ctx, "z")] == []


def test_cli_sequence_completor_hides_errors():
    completor = sequence_completor(["a", lambda: 1])
    ctx = click.Context(usercmd)
    assert completor(ctx, usercmd.params[0], "a") == []


def test_cli_shell_complete_stdin_grammar_is_not_read():
    ret = runner.invoke(
        cli,
        [],
        prog_name="seqcomplete",
        input="- [101, 102]\n",
        env={
            "_SEQCOMPLETE_COMPLETE": "bash_complete",
            "COMP_WORDS": "seqcomplete - 1",
            "COMP_CWORD": "2",
        },
    )
    assert ret.exit_code == 0, ret.output
    assert ret.output == ""


def slot_context(ctx: Context):
    return [f"{ctx.index}:{len(ctx.completed_item_words)}:{ctx.cur_word!r}"]


def test_cli_expand_generator_gets_empty_context():
    generator = f"!generator {__name__}:slot_context"
    grammar = f"- {generator}\n- [a, b]\n- {generator}\n"
    assert run("--expand", "-e", grammar) == ["0:0:''", "", "a", "b", "", "2:0:''"]


def test_cli_epilog():
    assert "GNU GPL version 3 or later" in "\n".join(run("--help"))


def test_cli_bash_source():
    ret = runner.invoke(
        cli,
        [],
        prog_name="seqcomplete",
        env={"_SEQCOMPLETE_COMPLETE": "bash_source"},
    )
    assert ret.exit_code == 0, ret.output
    assert "__reassemble_comp_words_by_ref" in ret.output
    assert "_SEQCOMPLETE_COMPLETE=bash_complete" in ret.output
    assert "complete -o nosort -F _seqcomplete_completion seqcomplete" in ret.output
