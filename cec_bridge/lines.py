import codecs
from typing import Iterable, Iterator

LINE_TERMINATOR = "\n"


class LineBuffer:
    """Splits an arbitrarily chunked stream into lines.

    Partial lines are kept in a backlog until their terminator arrives;
    `close()` flushes whatever is left as one final line.
    """

    def __init__(self, encoding="utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._backlog = ""

    @property
    def backlog(self) -> str:
        return self._backlog

    def feed(self, chunk: str | bytes) -> list[str]:
        if isinstance(chunk, bytes):
            chunk = self._decoder.decode(chunk)

        self._backlog += chunk
        lines = []
        n = self._backlog.find(LINE_TERMINATOR)
        while n >= 0:
            lines.append(self._backlog[:n].removesuffix("\r"))
            self._backlog = self._backlog[n + 1 :]
            n = self._backlog.find(LINE_TERMINATOR)

        return lines

    def close(self) -> list[str]:
        self._backlog += self._decoder.decode(b"", final=True)
        if not self._backlog:
            return []

        line, self._backlog = self._backlog, ""
        return [line.removesuffix("\r")]


def iter_lines(chunks: Iterable[str | bytes]) -> Iterator[str]:
    buffer = LineBuffer()
    for chunk in chunks:
        yield from buffer.feed(chunk)

    yield from buffer.close()
