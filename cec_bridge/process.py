import logging
import signal
import subprocess
import threading

from cec_bridge._utils import CancellationToken, wait_for
from cec_bridge.cec_types import client_type_for_address
from cec_bridge.errors import CecClientError
from cec_bridge.monitor import CecMonitor

CLIENT_NAME = "cec-client"
READ_CHUNK_SIZE = 4096


class CecClient:
    """Runs cec-client and connects its pipes to a monitor."""

    def __init__(
        self,
        monitor: CecMonitor,
        client_name: str = CLIENT_NAME,
        params: list[str] | None = None,
    ):
        self.monitor = monitor
        self.client_name = client_name
        self.params = list(params or [])
        self._proc: subprocess.Popen | None = None
        self._reader: threading.Thread | None = None
        self._write_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._proc is not None and self._proc.poll() is None

    def command_line(self) -> list[str]:
        args = [self.client_name, *self.params]
        if self.monitor.device_name is not None:
            args += ["-o", self.monitor.device_name]
            args += ["-t", client_type_for_address(self.monitor.device_address).value]

        return args

    def start(self):
        args = self.command_line()
        logging.debug(f"spawn: {' '.join(args)}")
        try:
            self._proc = subprocess.Popen(
                args,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                bufsize=0,
            )
        except OSError as exc:
            raise CecClientError(f"Unable to start {self.client_name}: {exc}") from exc

        self.monitor.writer = self.write
        self._reader = threading.Thread(
            target=self._read_output, name="cec-client-reader", daemon=True
        )
        self._reader.start()

    def wait_ready(self, seconds: float, token: CancellationToken = None) -> bool:
        return wait_for(
            seconds, lambda: self.monitor.ready, token, sleep_sec=0.05
        )

    def write(self, message: str) -> bool:
        if not self.running or self._proc.stdin is None:
            logging.error(f'Unable to write "{message}": {self.client_name} is not running')
            return False

        with self._write_lock:
            try:
                self._proc.stdin.write((message + "\n").encode("utf-8"))
                self._proc.stdin.flush()
            except OSError as exc:
                logging.error(f'Failed to write "{message}" to {self.client_name}: {exc}')
                return False

        return True

    def stop(self, timeout: float = 2.0):
        self.monitor.stop()
        if not self.running:
            return

        self._proc.send_signal(signal.SIGINT)
        try:
            self._proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logging.error(f"{self.client_name} did not exit, killing it")
            self._proc.kill()
            self._proc.wait()

    def join(self, timeout: float | None = None):
        if self._reader is not None:
            self._reader.join(timeout)

    def _read_output(self):
        stdout = self._proc.stdout
        try:
            while chunk := stdout.read(READ_CHUNK_SIZE):
                try:
                    self.monitor.feed(chunk)
                except Exception:
                    logging.exception("Failed to process cec-client output")
        finally:
            try:
                self.monitor.end()
            except Exception:
                logging.exception("Failed to close cec-client output")
            logging.debug(f"{self.client_name} exited with {self._proc.wait()}")
