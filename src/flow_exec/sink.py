"""Line store that optionally echoes to the console with a fixed indent."""

from flow_exec import log


class IndentingSink:
    def __init__(self, console=None, indent: str = ""):
        self.console = console
        self.indent = indent
        self._lines: list[str] = []

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def append(self, line: str) -> None:
        """Store a line and, when attached to a console, echo it indented.

        A console that fails to accept a write is detached; the line is kept.
        """
        if self.console is None:
            self._lines.append(line)
            return
        with log.console_lock:
            self._lines.append(line)
            try:
                log.echo(self.console, self.indent + line)
            except (OSError, ValueError):
                self.console = None

    def contents(self) -> str:
        # Stored lines carry their own "\n"; that is the separator.
        return "".join(self._lines)
