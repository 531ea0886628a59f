import logging
import re
from dataclasses import dataclass

from cec_bridge.events import EventEmitter
from cec_bridge.handlers import MatchHandler
from cec_bridge.monitor import CecMonitor

KEY_DOWN_RE = re.compile(r"^DEBUG:[ \[\d\]\t]+key pressed: (.+?) \(([0-9a-fA-F]+)\)")
KEY_UP_RE = re.compile(r"^DEBUG:[ \[\d\]\t]+key released: (.+?) \(([0-9a-fA-F]+)\)")

NO_KEY_CODE = -1


@dataclass(frozen=True)
class KeyEvent:
    key: str
    key_code: int
    repeat: bool = False


@dataclass
class KeyState:
    current_key: str = ""
    current_code: int = NO_KEY_CODE
    # code of the last completed keypress
    previous_code: int = NO_KEY_CODE

    def press(self, key: str, code: int):
        self.current_key = key
        self.current_code = code

    def complete(self):
        self.previous_code = self.current_code
        self.current_key = ""
        self.current_code = NO_KEY_CODE


class Remote(EventEmitter):
    """Turns cec-client key diagnostics into keyboard-like events.

    Events:
        keydown: a key went down; `repeat` when the same key is still held.
        keyup: a key was released.
        keypress: a held key was released; `repeat` when the previous
            completed press was the same key.
        keypress.<name>: same as keypress, per key name as printed by cec-client.
    """

    def __init__(self, monitor: CecMonitor):
        super().__init__()
        self.monitor = monitor
        self.state = KeyState()

        monitor.handlers.register(MatchHandler(KEY_DOWN_RE, self._on_key_down))
        monitor.handlers.register(MatchHandler(KEY_UP_RE, self._on_key_up))

    def _on_key_down(self, line: str):
        result = KEY_DOWN_RE.search(line)
        if result is None:
            return

        key, code = result.group(1), int(result.group(2), 16)
        logging.debug(f'received keydown for "{key}" ({code:x})')
        self.emit("keydown", KeyEvent(key, code, repeat=self.state.current_key == key))
        self.state.press(key, code)

    def _on_key_up(self, line: str):
        result = KEY_UP_RE.search(line)
        if result is None:
            return

        key, code = result.group(1), int(result.group(2), 16)
        logging.debug(f'received keyup for "{key}" ({code:x})')
        self.emit("keyup", KeyEvent(key, code))

        if self.state.current_code != code:
            return

        logging.debug(f'emitted keypress for "{key}" ({code:x})')
        event = KeyEvent(key, code, repeat=self.state.previous_code == code)
        self.state.complete()
        self.emit("keypress", event)
        self.emit(f"keypress.{key}", event)
