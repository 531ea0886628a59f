import logging

import uinput

from cec_bridge._utils import to_enum
from cec_bridge.cec_types import UserControlButton
from cec_bridge.remote import KeyEvent, Remote


class UInputKeyboard:
    """Replays remote key presses as clicks on a virtual uinput keyboard."""

    def __init__(self, keymap: dict[UserControlButton, str]):
        self.keymap = dict({})
        self.keys = list()
        for k, v in keymap.items():
            if hasattr(uinput, v):
                key = getattr(uinput, v)
                self.keymap.setdefault(k, key)
                self.keys.append(key)
            else:
                logging.error(f"Unknown uinput key {v} for {k.name}")

        self.device = uinput.Device(self.keys)

    def attach(self, remote: Remote):
        remote.on("keypress", self.on_keypress)

    def on_keypress(self, event: KeyEvent):
        button = to_enum(event.key_code, UserControlButton)
        if button is None:
            logging.debug(f"No button for key code {event.key_code:x}")
            return

        self.emit_key(button)

    def emit_key(self, key: UserControlButton):
        ev = self.keymap.get(key)
        if ev is not None:
            self.device.emit_click(ev)

    def close(self):
        self.device.destroy()
        logging.debug("uinput device closed")
