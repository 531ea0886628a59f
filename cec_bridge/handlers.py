import re
from dataclasses import dataclass
from typing import Any, Callable

LineCallback = Callable[[str], Any]


@dataclass(frozen=True)
class ContainsHandler:
    contains: str
    callback: LineCallback

    def matches(self, line: str) -> bool:
        return self.contains in line


@dataclass(frozen=True)
class MatchHandler:
    match: re.Pattern | str
    callback: LineCallback

    def matches(self, line: str) -> bool:
        return re.search(self.match, line) is not None


@dataclass(frozen=True)
class FuncHandler:
    fn: Callable[[str], Any]
    callback: LineCallback

    def matches(self, line: str) -> bool:
        return bool(self.fn(line))


Handler = ContainsHandler | MatchHandler | FuncHandler


class HandlerRegistry:
    """Ordered list of line handlers. Every handler that matches a line fires."""

    def __init__(self, handlers: list[Handler] | None = None):
        self._handlers: list[Handler] = list(handlers or [])

    def register(self, handler: Handler) -> Handler:
        self._handlers.append(handler)
        return handler

    def dispatch(self, line: str) -> int:
        executed = 0
        for handler in list(self._handlers):
            if handler.matches(line):
                handler.callback(line)
                executed += 1

        return executed

    def __len__(self) -> int:
        return len(self._handlers)
