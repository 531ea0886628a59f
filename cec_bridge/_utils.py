import threading
import time
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class CancellationToken:
    def __init__(self):
        self.is_running = True

    @property
    def is_cancelled(self):
        return not self.is_running

    def cancel(self):
        self.is_running = False


class Time:
    @staticmethod
    def ts():
        return time.monotonic()

    @staticmethod
    def sleep(sec: float):
        if sec > 0:
            time.sleep(sec)


class Timer:
    @staticmethod
    def start(seconds: float, fn: Callable[[], None]):
        """Run `fn` once after `seconds` on a daemon thread. The result has `cancel()`."""
        timer = threading.Timer(seconds, fn)
        timer.daemon = True
        timer.start()
        return timer


def wait_for(
    seconds: float,
    fn: Callable[[], bool],
    token: CancellationToken = None,
    sleep_sec=0.0,
) -> bool:
    """Poll `fn` until it is truthy, the deadline passes or `token` is cancelled."""
    end_time = Time.ts() + seconds
    while token is None or token.is_running:
        if fn():
            return True
        if Time.ts() >= end_time:
            return False
        Time.sleep(sleep_sec)

    return False


def to_enum(value: int | str, enum_cls: Generic[T], default_val: T = None) -> T:
    return enum_cls(value) if value in enum_cls._value2member_map_ else default_val
