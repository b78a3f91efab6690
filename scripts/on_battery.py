import sys

import setproctitle
from loguru import logger

from upower_dbus import UPower, UPowerError


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if "-v" in argv:
        logger.enable("upower_dbus")

    try:
        with UPower(1000) as upower:
            on_battery = upower.on_battery()
    except UPowerError as e:
        print(f"failed to get battery status: {e}", file=sys.stderr)
        return 1

    print("system is using battery" if on_battery else "system is on AC")
    return 0


if __name__ == "__main__":
    setproctitle.setproctitle("upower-on-battery")
    sys.exit(main())
