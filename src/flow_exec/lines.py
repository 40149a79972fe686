"""Reassemble complete lines from arbitrarily sized stream reads."""

import codecs


class LineBuffer:
    """Accumulates chunks from one stream and forwards completed lines to a sink.

    The sink is anything with an ``append(line)`` method. Emitted lines always
    end with ``"\\n"``.
    """

    def __init__(self, sink, encoding: str = "utf-8"):
        self.sink = sink
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._partial = ""

    def feed(self, chunk: bytes) -> None:
        self._emit(self._decoder.decode(chunk))

    def finish(self) -> None:
        """Flush whatever is left once the stream reaches EOF."""
        self._emit(self._decoder.decode(b"", final=True))
        if self._partial:
            remainder, self._partial = self._partial, ""
            self.sink.append(remainder + "\n")

    def _emit(self, text: str) -> None:
        if not text:
            return
        buf = self._partial + text
        start = 0
        while True:
            end = buf.find("\n", start)
            if end == -1:
                break
            self.sink.append(buf[start : end + 1])
            start = end + 1
        self._partial = buf[start:]
