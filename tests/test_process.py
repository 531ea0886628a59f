import logging
import sys

from cec_bridge.cec_types import LogicalAddress
from cec_bridge.monitor import CecMonitor
from cec_bridge.process import CecClient

FAKE_CLIENT = """
import sys
print("waiting for input", flush=True)
print("TRAFFIC: [            2891]\\t<< 0f:36", flush=True)
line = sys.stdin.readline().strip()
sys.stdout.write("DEBUG: got " + line)
"""


def test__CecClient_should_build_command_line():
    monitor = CecMonitor("kodi", LogicalAddress.PlaybackDevice2)
    client = CecClient(monitor, "cec-client", ["-d", "8"])

    assert client.command_line() == ["cec-client", "-d", "8", "-o", "kodi", "-t", "p"]


def test__CecClient_should_map_address_to_type():
    def type_of(address):
        return CecClient(CecMonitor("x", address)).command_line()[-1]

    assert type_of(LogicalAddress.AudioSystem) == "a"
    assert type_of(LogicalAddress.Tuner3) == "t"
    assert type_of(LogicalAddress.RecordingDevice1) == "r"
    assert type_of(LogicalAddress.FreeUse) == "r"


def test__CecClient_write_should_fail_when_not_running():
    client = CecClient(CecMonitor())
    assert client.running is False
    assert client.write("tx 10:36") is False


def test__CecClient_should_pump_process_output_into_monitor():
    monitor = CecMonitor()
    events = []
    monitor.on("data", lambda line: events.append(line))
    monitor.on("op.STANDBY", lambda name, packet: events.append(name))
    monitor.on("stop", lambda m: events.append("stop"))

    client = CecClient(monitor, sys.executable, ["-c", FAKE_CLIENT])
    client.start()
    try:
        assert client.wait_ready(10) is True
        assert monitor.send("tx 10:36") is True
        client.join(10)
    finally:
        client.stop()

    assert events[:4] == [
        "waiting for input",
        "TRAFFIC: [            2891]\t<< 0f:36",
        "STANDBY",
        "DEBUG: got tx 10:36",
    ]
    assert "stop" in events


def test__CecClient_should_log_failing_stop_listener(caplog):
    monitor = CecMonitor()

    def on_stop(m):
        raise RuntimeError("listener failed")

    monitor.on("stop", on_stop)
    client = CecClient(monitor, sys.executable, ["-c", "print('bye')"])

    with caplog.at_level(logging.DEBUG):
        client.start()
        client.join(10)

    assert client._reader.is_alive() is False
    assert "Failed to close cec-client output" in caplog.text
    assert "listener failed" in caplog.text
    assert f"{sys.executable} exited with 0" in caplog.text
