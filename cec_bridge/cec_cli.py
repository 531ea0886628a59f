import atexit
import logging
import signal
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Protocol

from cec_bridge._utils import CancellationToken
from cec_bridge.cec_types import LogicalAddress, UserControlButton
from cec_bridge.commander import REQUEST_TIMEOUT_SEC, Commander
from cec_bridge.errors import CecBridgeError
from cec_bridge.monitor import CecMonitor
from cec_bridge.packet import ParsedPacket, addr_to_str
from cec_bridge.process import CLIENT_NAME, CecClient
from cec_bridge.remote import KeyEvent, Remote

READY_TIMEOUT_SEC = 30


class OsKeyboardController(Protocol):
    def __init__(self, keymap: dict[UserControlButton, str]):
        pass

    def attach(self, remote: Remote) -> None:
        pass

    def close(self) -> None:
        pass


class CecCli:
    def __init__(
        self,
        name: str,
        address: LogicalAddress,
        monitor_mode=False,
        client_name=CLIENT_NAME,
        keyboard: OsKeyboardController | None = None,
    ):
        self.token = CancellationToken()
        self.monitor = CecMonitor(name, address, monitor_mode)
        self.client = CecClient(self.monitor, client_name)
        self.commander = Commander(self.monitor)
        self.remote = Remote(self.monitor)
        self.keyboard = keyboard
        if keyboard is not None:
            keyboard.attach(self.remote)

        self.monitor.on("stop", lambda _: self.token.cancel())
        self.monitor.on("ACTIVE_SOURCE", self._log_active_source)
        self.monitor.on("ROUTING_CHANGE", self._log_routing_change)
        self.monitor.on("SET_OSD_NAME", self._log_osd_name)
        self.remote.on("keypress", self._log_keypress)

    def attach_on_process_exit(self):
        def on_exit(*args):
            self.token.cancel()

        atexit.register(on_exit)
        signal.signal(signal.SIGTERM, on_exit)
        signal.signal(signal.SIGINT, on_exit)

    def start(self) -> bool:
        try:
            self.client.start()
        except CecBridgeError as exc:
            logging.error(exc)
            return False

        if not self.client.wait_ready(READY_TIMEOUT_SEC, self.token):
            logging.error("cec-client did not become ready")
            self.stop()
            return False

        logging.info(
            f"Ready as {self.monitor.device_name} "
            f"({self.monitor.device_address.name})"
        )
        return True

    def stop(self):
        self.client.stop()
        if self.keyboard is not None:
            self.keyboard.close()

    def print_power_status(self, target=LogicalAddress.TV):
        try:
            status = self.commander.get_power_state(target).result(
                REQUEST_TIMEOUT_SEC + 1
            )
            logging.info(f"{target.name} power status: {status.name}")
        except (CecBridgeError, FutureTimeoutError) as exc:
            logging.error(f"{target.name} power status: {exc}")

    def standby(self):
        if not self.commander.broadcast_standby():
            logging.error("Unable to broadcast standby")

    def run(self):
        self.attach_on_process_exit()
        logging.debug("Start listening for remote presses")
        while self.token.is_running:
            self.client.join(1)

        self.stop()

    def _log_active_source(self, packet: ParsedPacket, address: int):
        logging.info(f"Active source {addr_to_str(address)} (from {packet.source:x})")

    def _log_routing_change(self, packet: ParsedPacket, old: int, new: int):
        logging.info(f"Routing change {addr_to_str(old)} -> {addr_to_str(new)}")

    def _log_osd_name(self, packet: ParsedPacket, name: str):
        logging.info(f"Device {packet.source:x} is named {name!r}")

    def _log_keypress(self, event: KeyEvent):
        logging.debug(f"keypress {event.key} ({event.key_code:x})")
