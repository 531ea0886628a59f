import logging
import re
import threading
from typing import Callable

from cec_bridge._utils import to_enum
from cec_bridge.cec_types import OPCODE_NAMES, LogicalAddress, OperationCode
from cec_bridge.events import EventEmitter
from cec_bridge.handlers import ContainsHandler, HandlerRegistry, MatchHandler
from cec_bridge.lines import LineBuffer
from cec_bridge.packet import (
    INVALID_BYTE,
    ParsedPacket,
    decode_string,
    encode_boolean_param,
    encode_command,
    encode_integer_param,
    encode_operation,
    encode_string_param,
    parse_traffic,
    to_word,
)

READY_TEXT = "waiting for input"
TRAFFIC_RE = re.compile(r"^TRAFFIC:")
LOGICAL_ADDRESS_ASSIGN_RE = re.compile(
    r"^DEBUG:[ \[\d\]\t]+AllocateLogicalAddresses - device '\d', "
    r"type '[\w ]+', LA '(\w)'"
)

Writer = Callable[[str], bool]


class CecMonitor(EventEmitter):
    """Reads and writes the cec-client text interface.

    Lines fed into the monitor run through `handlers`; TRAFFIC lines are
    decoded into packets and re-emitted as events. Outbound commands are
    encoded and handed to the writer (normally `CecClient.write`).

    Events: `ready`, `stop`, `data`, `line`, `polling`, `packet`,
    `SET_OSD_NAME`, `ROUTING_CHANGE`, `ACTIVE_SOURCE`,
    `REPORT_PHYSICAL_ADDRESS` and `op.<OPCODE_NAME>`.
    """

    def __init__(
        self,
        device_name: str = "cec-bridge",
        device_address: LogicalAddress = LogicalAddress.RecordingDevice1,
        monitor_mode: bool = False,
        writer: Writer | None = None,
    ):
        super().__init__()
        self.device_name = device_name
        self.device_address = device_address
        self.monitor_mode = monitor_mode
        self.writer = writer
        self.ready = False
        self._buffer = LineBuffer()
        self._dispatch_lock = threading.RLock()
        self.handlers = HandlerRegistry(
            [
                ContainsHandler(READY_TEXT, self._on_ready),
                MatchHandler(TRAFFIC_RE, self.process_traffic),
                MatchHandler(LOGICAL_ADDRESS_ASSIGN_RE, self.set_device_address),
            ]
        )

    @property
    def dispatch_lock(self) -> threading.RLock:
        """Held while a line is dispatched. Hold it to send and subscribe without missing a reply."""
        return self._dispatch_lock

    # region lifecycle

    def feed(self, chunk: str | bytes) -> None:
        """Push raw adapter output; complete lines are processed right away."""
        for line in self._buffer.feed(chunk):
            self._receive(line)

    def end(self) -> None:
        """The adapter output has ended: flush the last partial line, then stop."""
        for line in self._buffer.close():
            self._receive(line)
        self.on_close()

    def stop(self) -> None:
        logging.debug("stop (by parent)")
        self.ready = False
        self.emit("stop", self)

    def on_close(self) -> None:
        logging.debug("stop (by child)")
        self.ready = False
        self.emit("stop", self)

    def _receive(self, line: str) -> None:
        self.emit("data", line)
        logging.debug(f'rx: "{line}"')
        self.process_line(line)

    def _on_ready(self, line: str) -> None:
        logging.debug("ready")
        self.ready = True
        self.emit("ready", self)

    # endregion

    # region sending

    def send(self, message: str) -> bool:
        if self.writer is None:
            logging.error(f'Unable to send "{message}": no cec-client attached')
            return False

        logging.debug(f'tx: "{message}"')
        return self.writer(message)

    def send_command(self, *command: int) -> bool:
        """Send raw numbers; the header byte (source and target) is included by the caller."""
        return self.send(encode_command(*command))

    def execute_operation(
        self,
        target: LogicalAddress,
        opcode: OperationCode,
        params: list[int] | None = None,
    ) -> bool:
        return self.send(encode_operation(self.device_address, target, opcode, params))

    def execute_operation_with_boolean(
        self, target: LogicalAddress, opcode: OperationCode, param: bool
    ) -> bool:
        return self.execute_operation(target, opcode, encode_boolean_param(param))

    def execute_operation_with_integer(
        self, target: LogicalAddress, opcode: OperationCode, param: int
    ) -> bool:
        return self.execute_operation(target, opcode, encode_integer_param(param))

    def execute_operation_with_string(
        self, target: LogicalAddress, opcode: OperationCode, param: str
    ) -> bool:
        return self.execute_operation(target, opcode, encode_string_param(param))

    def execute_broadcast_operation(
        self, opcode: OperationCode, params: list[int] | None = None
    ) -> bool:
        return self.execute_operation(LogicalAddress.Broadcast, opcode, params)

    # endregion

    # region receiving

    def set_device_address(self, line: str) -> None:
        result = LOGICAL_ADDRESS_ASSIGN_RE.search(line)
        if result is None:
            return

        address = to_enum(int(result.group(1), 16), LogicalAddress)
        if address is None:
            logging.error(f"Adapter granted unknown logical address {result.group(1)}")
            return

        self.device_address = address
        logging.debug(f"device address set to {address:x} ({address.name})")

    def process_line(self, line: str) -> int:
        with self._dispatch_lock:
            self.emit("line", line)
            executed = self.handlers.dispatch(line)

        if executed > 0:
            logging.debug(f"executed {executed} handlers")

        return executed

    def process_traffic(self, traffic: str) -> bool:
        packet = parse_traffic(traffic)
        logging.debug(f"parsed packet {packet}")
        return self.process_packet(packet)

    def process_packet(self, packet: ParsedPacket) -> bool:
        """Emit events for a decoded packet. Returns True if a semantic event was emitted."""
        if packet.is_polling:
            self.emit("polling", packet)
            return False

        if (
            not self.monitor_mode
            and packet.target != self.device_address
            and packet.target != LogicalAddress.Broadcast
        ):
            return False

        self.emit("packet", packet)

        args = packet.args
        match packet.opcode:
            case OperationCode.SET_OSD_NAME:
                if len(args) >= 1:
                    self.emit("SET_OSD_NAME", packet, decode_string(args))
                    return True

            case OperationCode.ROUTING_CHANGE:
                if len(args) >= 4 and INVALID_BYTE not in args[:4]:
                    old = to_word(args[0], args[1])
                    new = to_word(args[2], args[3])
                    self.emit("ROUTING_CHANGE", packet, old, new)
                    return True

            case OperationCode.ACTIVE_SOURCE:
                if len(args) >= 2 and INVALID_BYTE not in args[:2]:
                    self.emit("ACTIVE_SOURCE", packet, to_word(args[0], args[1]))
                    return True

            case OperationCode.REPORT_PHYSICAL_ADDRESS:
                if len(args) >= 2 and INVALID_BYTE not in args[:2]:
                    device_type = args[2] if len(args) > 2 else None
                    self.emit(
                        "REPORT_PHYSICAL_ADDRESS",
                        packet,
                        to_word(args[0], args[1]),
                        device_type,
                    )
                    return True

            case _:
                name = OPCODE_NAMES.get(packet.opcode)
                if name is not None:
                    self.emit(f"op.{name}", name, packet, *args)
                    return True

        logging.debug(f"unhandled opcode {packet.opcode:x}")
        return False

    # endregion
