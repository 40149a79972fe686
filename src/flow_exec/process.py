"""Run an executable, capturing stdout + stderr live. The single subprocess seam."""

import shlex
import shutil
import subprocess
import sys
import threading
from dataclasses import dataclass

from flow_exec import log
from flow_exec.lines import LineBuffer
from flow_exec.sink import IndentingSink

CHUNK_SIZE = 4096


class ExecutableError(RuntimeError):
    """Base class for failures running an executable."""


class ResolutionError(ExecutableError):
    def __init__(self, name: str):
        super().__init__(f"Unable to locate the executable `{name}`")
        self.name = name


class SpawnError(ExecutableError):
    def __init__(self, command: "Command", cause: OSError):
        super().__init__(f"Unable to start `{command.line}`: {cause}")
        self.command = command
        self.cause = cause


class CommandFailedError(ExecutableError):
    def __init__(self, command: "Command", output: str, returncode: int):
        super().__init__(f"{command.line}\n\n{output}")
        self.command = command
        self.output = output
        self.returncode = returncode


@dataclass(frozen=True)
class Command:
    executable: str
    arguments: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.arguments]

    @property
    def line(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class ExecutionResult:
    command: Command
    output: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


def resolve(name: str) -> str | None:
    """Look `name` up on the current PATH. Not cached."""
    return shutil.which(name)


def _pump(stream, buffer: LineBuffer, chunk_size: int, label: str) -> None:
    try:
        while True:
            try:
                chunk = stream.read1(chunk_size)
            except (OSError, ValueError) as e:
                # Exit status stays the authoritative failure signal.
                log.debug(f"reading {label} stopped early: {e}")
                break
            if not chunk:
                break
            buffer.feed(chunk)
        buffer.finish()
    finally:
        stream.close()


class CommandRunner:
    """Runs executables in tolerant (`run`) or strict (`run_strict`) mode.

    Settings left as None are taken from the ambient state in `log` once per
    invocation: verbosity, indentation, the warning channel and the console
    streams.
    """

    def __init__(
        self,
        verbose: bool | None = None,
        indent: str | None = None,
        warn=None,
        stdout=None,
        stderr=None,
        chunk_size: int = CHUNK_SIZE,
    ):
        self.verbose = verbose
        self.indent = indent
        self.warn = warn
        self.stdout = stdout
        self.stderr = stderr
        self.chunk_size = chunk_size

    def run(self, name: str, args=()) -> str:
        """Run and return the combined output. Non-zero exit is only reported."""
        result = self.execute(name, args)
        if not result.success:
            self.report_failure(result)
        return result.output

    def run_strict(self, name: str, args=()) -> str:
        """Run and return the combined output. Raises CommandFailedError on non-zero exit."""
        result = self.execute(name, args)
        if not result.success:
            raise CommandFailedError(result.command, result.output, result.returncode)
        return result.output

    def report_failure(self, result: ExecutionResult) -> None:
        warn = self.warn or log.warning
        warn(f"[!] Failed: {result.command.line}")

    def execute(self, name: str, args=()) -> ExecutionResult:
        """Resolve, spawn and capture. Raises ResolutionError or SpawnError."""
        path = resolve(name)
        if not path:
            raise ResolutionError(name)
        command = Command(path, tuple(str(a) for a in args))

        verbose = log.is_verbose() if self.verbose is None else self.verbose
        indent = " " * log.indentation_level() if self.indent is None else self.indent
        if verbose:
            out_console = sys.stdout if self.stdout is None else self.stdout
            err_console = sys.stderr if self.stderr is None else self.stderr
            log.echo(out_console, f"{indent}$ {command.line}\n")
            out_sink = IndentingSink(out_console, indent)
            err_sink = IndentingSink(err_console, indent)
        else:
            out_sink, err_sink = IndentingSink(), IndentingSink()

        try:
            proc = subprocess.Popen(
                command.argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise SpawnError(command, e) from e

        proc.stdin.close()
        readers = [
            threading.Thread(
                target=_pump,
                args=(proc.stdout, LineBuffer(out_sink), self.chunk_size, "stdout"),
            ),
            threading.Thread(
                target=_pump,
                args=(proc.stderr, LineBuffer(err_sink), self.chunk_size, "stderr"),
            ),
        ]
        for reader in readers:
            reader.start()

        returncode = proc.wait()
        for reader in readers:
            reader.join()

        output = out_sink.contents() + err_sink.contents()
        return ExecutionResult(command=command, output=output, returncode=returncode)


def run(name: str, *args) -> str:
    return CommandRunner().run(name, args)


def run_strict(name: str, *args) -> str:
    return CommandRunner().run_strict(name, args)
