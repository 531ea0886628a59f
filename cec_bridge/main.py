import logging
import sys
from argparse import ArgumentParser

from cec_bridge.cec_cli import CecCli
from cec_bridge.cec_types import LogicalAddress, UserControlButton
from cec_bridge.process import CLIENT_NAME

KEYMAP = {
    UserControlButton.Select: "KEY_ENTER",
    UserControlButton.Back: "KEY_ESC",
    UserControlButton.Up: "KEY_UP",
    UserControlButton.Right: "KEY_RIGHT",
    UserControlButton.Down: "KEY_DOWN",
    UserControlButton.Left: "KEY_LEFT",
}


def parse_address(value: str) -> LogicalAddress:
    if value in LogicalAddress.__members__:
        return LogicalAddress[value]

    return LogicalAddress(int(value, 0))


def create_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Bridge cec-client traffic to events")
    parser.add_argument("-n", "--name", default="cec-bridge", help="OSD name on the bus")
    parser.add_argument(
        "-a",
        "--address",
        type=parse_address,
        default=LogicalAddress.RecordingDevice1,
        help="Requested logical address (name or number)",
    )
    parser.add_argument(
        "-m", "--monitor", action="store_true", help="Decode traffic for all devices"
    )
    parser.add_argument("--client", default=CLIENT_NAME, help="cec-client executable")
    parser.add_argument(
        "-p", "--power-status", action="store_true", help="Print TV power status and exit"
    )
    parser.add_argument(
        "-s", "--standby", action="store_true", help="Put all devices in standby and exit"
    )
    parser.add_argument(
        "-k", "--keyboard", action="store_true", help="Forward remote keys to uinput"
    )
    parser.add_argument(
        "--debug",
        dest="level",
        action="store_const",
        default=logging.INFO,
        help="Print debug messages",
        const=logging.DEBUG,
    )
    return parser


def main(argv=None):
    args = create_parser().parse_args(argv)

    logging.basicConfig(stream=sys.stdout, level=args.level)

    keyboard = None
    if args.keyboard:
        from cec_bridge.keyboard import UInputKeyboard

        keyboard = UInputKeyboard(KEYMAP)

    control = CecCli(
        args.name,
        args.address,
        monitor_mode=args.monitor,
        client_name=args.client,
        keyboard=keyboard,
    )

    if not control.start():
        return 1

    if args.power_status or args.standby:
        if args.power_status:
            control.print_power_status()
        if args.standby:
            control.standby()
        control.stop()
        return 0

    control.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
