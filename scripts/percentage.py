import sys

import setproctitle
from loguru import logger

from upower_dbus import UPower, UPowerError


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if "-v" in argv:
        logger.enable("upower_dbus")

    try:
        upower = UPower(1000)
    except UPowerError as e:
        print(f"failed to get dbus connection: {e}", file=sys.stderr)
        return 1

    with upower:
        try:
            on_battery = upower.on_battery()
        except UPowerError as e:
            print(f"could not get battery status: {e}", file=sys.stderr)
            return 1

        if not on_battery:
            print("battery is not active")
            return 0

        try:
            percentage = upower.get_percentage()
        except UPowerError as e:
            print(f"could not get battery percentage: {e}", file=sys.stderr)
            return 1

    print(f"battery is at {percentage}%")
    return 0


if __name__ == "__main__":
    setproctitle.setproctitle("upower-percentage")
    sys.exit(main())
