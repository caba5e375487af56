# Only basic import functions, so that completion is as fast as possible.
import os
import subprocess
import sys
from typing import Any, Iterable, List

PROGNAME = "seqcomplete"


def composed(*decs):
    """Merge decorators into one decorator"""

    def deco(f):
        for dec in reversed(decs):
            f = dec(f)
        return f

    return deco


def andjoin(arr: Iterable[Any], fin: str = " and ") -> str:
    arr = list(arr)
    if not len(arr):
        return ""
    if len(arr) == 1:
        return str(arr[0])
    return ", ".join(str(x) for x in arr[:-1]) + fin + str(arr[-1])


def get_version():
    # Load lazily, to optimize for import speed.
    import importlib.metadata

    return importlib.metadata.version(PROGNAME)


def print_version():
    # Copied from version_option()
    print(f"{os.path.basename(sys.argv[0])}, version {get_version()}")


def eprint(*args, **kwargs):
    print(*args, file=sys.stderr, **kwargs)


class shell_completion:
    @staticmethod
    def install_script() -> List[str]:
        dir = "~/.local/share/bash-completion/completions"
        script: List[str] = []
        script.append(f"mkdir -vp {dir}")
        name = PROGNAME
        upname = name.upper().replace("-", "_")
        script.append(
            f"echo 'eval \"$(_{upname}_COMPLETE=bash_source {name})\"' > {dir}/{name}"
        )
        return script

    @staticmethod
    def install():
        for line in shell_completion.install_script():
            eprint(f"+ {line}")
            subprocess.check_call(["bash", "-c", line])

    @staticmethod
    def print():
        print("This project uses click python module.")
        print(
            "See https://click.palletsprojects.com/en/8.1.x/shell-completion/ on how to install completion."
        )
        print("For bash-completion, execute the following:")
        for line in shell_completion.install_script():
            print(f"   {line}")
