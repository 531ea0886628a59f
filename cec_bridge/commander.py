import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from cec_bridge._utils import Timer, to_enum
from cec_bridge.cec_types import (
    LogicalAddress,
    OperationCode,
    PowerStatus,
    UserControlButton,
)
from cec_bridge.errors import CecRequestError, CecTimeoutError
from cec_bridge.monitor import CecMonitor
from cec_bridge.packet import ParsedPacket

REQUEST_TIMEOUT_SEC = 5.0
T = TypeVar("T")


@dataclass(eq=False)
class PendingRequest(Generic[T]):
    event: str
    resolver: Callable[[ParsedPacket], T]
    future: Future = field(default_factory=Future)
    timer: Any = None


class Commander:
    """Executes common actions on other devices of the bus.

    Queries return a `concurrent.futures.Future` that is resolved from the
    monitor's dispatch thread; never block on it from inside an event listener.
    Pending queries waiting for the same reply are answered one reply each,
    oldest first.
    """

    def __init__(self, monitor: CecMonitor):
        self.monitor = monitor
        self._pending: dict[str, list[PendingRequest]] = {}
        self._lock = threading.Lock()

    def broadcast_standby(self) -> bool:
        """Turn off all devices on the bus."""
        return self.monitor.execute_operation(
            LogicalAddress.Broadcast, OperationCode.STANDBY
        )

    def set_power_state(
        self, state: PowerStatus, target: LogicalAddress = LogicalAddress.TV
    ) -> bool:
        if state == PowerStatus.StandBy:
            return self.monitor.execute_operation(target, OperationCode.STANDBY)
        if state == PowerStatus.On:
            return self.monitor.execute_operation(target, OperationCode.IMAGE_VIEW_ON)

        return False

    def get_power_state(
        self, target: LogicalAddress = LogicalAddress.TV
    ) -> Future[PowerStatus]:
        return self.request(
            lambda: self.monitor.execute_operation(
                target, OperationCode.GIVE_DEVICE_POWER_STATUS
            ),
            OperationCode.REPORT_POWER_STATUS,
            _power_status_of,
        )

    def press_button(
        self, button: UserControlButton, target: LogicalAddress = LogicalAddress.TV
    ) -> bool:
        """Press and release `button`. No confirmation from the bus is awaited."""
        if not self.monitor.execute_operation(
            target, OperationCode.USER_CONTROL_PRESSED, [button]
        ):
            logging.debug("Unable to send the user control key-down operation.")
            return False

        if not self.monitor.execute_operation(
            target, OperationCode.USER_CONTROL_RELEASE
        ):
            logging.debug("Unable to send the user control key-release operation.")
            return False

        return True

    def request(
        self,
        send: Callable[[], bool],
        opcode: OperationCode,
        resolver: Callable[[ParsedPacket], T],
        timeout: float = REQUEST_TIMEOUT_SEC,
    ) -> Future[T]:
        """Call `send` and resolve with `resolver(packet)` on the next `opcode` reply.

        The reply subscription exists before `send` runs and no line is
        dispatched in between, so a fast reply is never missed. When `send`
        fails the future fails with `CecRequestError` and nothing stays
        registered.
        """
        with self.monitor.dispatch_lock:
            pending = self._subscribe(opcode, resolver)
            if not send():
                self._unsubscribe(pending)
                pending.future.set_exception(
                    CecRequestError(f"Unable to send the request for {opcode.name}.")
                )
                return pending.future

            self._arm(pending, timeout)

        return pending.future

    def wait_for_operation_response(
        self,
        opcode: OperationCode,
        resolver: Callable[[ParsedPacket], T],
        timeout: float = REQUEST_TIMEOUT_SEC,
    ) -> Future[T]:
        """Resolve with `resolver(packet)` on the next `op.<opcode>` event or fail after `timeout`."""
        with self.monitor.dispatch_lock:
            pending = self._subscribe(opcode, resolver)
            self._arm(pending, timeout)

        return pending.future

    def _subscribe(self, opcode: OperationCode, resolver) -> PendingRequest:
        pending = PendingRequest(f"op.{opcode.name}", resolver)
        with self._lock:
            queue = self._pending.setdefault(pending.event, [])
            if not queue:
                self.monitor.on(pending.event, self._on_response)
            queue.append(pending)

        return pending

    def _unsubscribe(self, pending: PendingRequest) -> bool:
        """Drop `pending` from its queue. False if a reply or timeout already took it."""
        with self._lock:
            queue = self._pending.get(pending.event, [])
            if pending not in queue:
                return False

            queue.remove(pending)
            if not queue:
                del self._pending[pending.event]
                self.monitor.off(pending.event, self._on_response)

        return True

    def _arm(self, pending: PendingRequest, timeout: float):
        if pending.future.done():
            return

        pending.timer = Timer.start(timeout, lambda: self._on_timeout(pending))

    def _on_response(self, name: str, packet: ParsedPacket, *args):
        event = f"op.{name}"
        with self._lock:
            queue = self._pending.get(event)
            if not queue:
                return

            pending = queue.pop(0)
            if not queue:
                del self._pending[event]
                self.monitor.off(event, self._on_response)

        if pending.timer is not None:
            pending.timer.cancel()
        try:
            pending.future.set_result(pending.resolver(packet))
        except Exception as exc:
            pending.future.set_exception(exc)

    def _on_timeout(self, pending: PendingRequest):
        if not self._unsubscribe(pending):
            return

        logging.debug(f"timeout waiting for {pending.event}")
        pending.future.set_exception(
            CecTimeoutError("Target cec-device took too long to respond to the request.")
        )


def _power_status_of(packet: ParsedPacket) -> PowerStatus:
    if not packet.args:
        return PowerStatus.Unknown

    return to_enum(packet.args[0], PowerStatus, PowerStatus.Unknown)
