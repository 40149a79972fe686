"""Callable wrappers bound to one executable name.

    class Repo:
        git = Executable("git")

    Repo().git("status", ["--short"])       # tolerant
    Repo().git.strict("rev-parse", "HEAD")  # raises CommandFailedError
"""

from flow_exec.process import CommandRunner


def flatten(args) -> list[str]:
    """Flatten nested lists/tuples into a flat list of string tokens."""
    tokens = []
    for arg in args:
        if isinstance(arg, (list, tuple)):
            tokens.extend(flatten(arg))
        else:
            tokens.append(str(arg))
    return tokens


class Executable:
    def __init__(self, name: str, runner: CommandRunner | None = None):
        self.name = name
        self.runner = runner

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        runner = getattr(obj, "runner", None)
        if isinstance(runner, CommandRunner):
            return Executable(self.name, runner)
        return self

    def _runner(self) -> CommandRunner:
        return self.runner or CommandRunner()

    def __call__(self, *args) -> str:
        return self._runner().run(self.name, flatten(args))

    def strict(self, *args) -> str:
        return self._runner().run_strict(self.name, flatten(args))

    def __repr__(self) -> str:
        return f"Executable({self.name!r})"
