import threading
from unittest.mock import Mock

from cec_bridge.cec_cli import CecCli
from cec_bridge.cec_types import LogicalAddress


def create_cli(**kwargs):
    cli = CecCli("kodi", LogicalAddress.PlaybackDevice1, **kwargs)
    cli.monitor.writer = Mock(return_value=True)
    return cli


def test__CecCli_should_wire_components():
    keyboard = Mock()
    cli = create_cli(keyboard=keyboard)

    assert cli.commander.monitor is cli.monitor
    assert cli.remote.monitor is cli.monitor
    assert cli.client.command_line()[-4:] == ["-o", "kodi", "-t", "p"]
    keyboard.attach.assert_called_once_with(cli.remote)


def test__CecCli_should_cancel_token_on_stop():
    cli = create_cli()

    cli.monitor.end()

    assert cli.token.is_cancelled is True


def test__CecCli_should_broadcast_standby():
    cli = create_cli()

    cli.standby()

    cli.monitor.writer.assert_called_once_with("tx 4f:36")


def test__CecCli_should_log_power_status(caplog):
    cli = create_cli()
    reply = threading.Timer(
        0.05, cli.monitor.process_line, ["TRAFFIC: [   12]\t<< 04:90:00"]
    )
    cli.monitor.writer.side_effect = lambda message: reply.start() or True

    with caplog.at_level("INFO"):
        cli.print_power_status()

    assert "TV power status: On" in caplog.text
