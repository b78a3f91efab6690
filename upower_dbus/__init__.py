"""
Typed, synchronous access to UPower battery and power status over D-Bus.

    from upower_dbus import UPower

    with UPower(1000) as upower:
        if upower.on_battery():
            print(upower.get_percentage())
"""

from loguru import logger

from .constants import DEFAULT_TIMEOUT_MS, DISPLAY_DEVICE_PATH
from .errors import BusConnectionError, NoDisplayDeviceError, RequestError, TransportError, UPowerError
from .upower import DeviceState, UPower

__version__ = "0.1.0"

__all__ = [
    "UPower",
    "DeviceState",
    "UPowerError",
    "BusConnectionError",
    "RequestError",
    "TransportError",
    "NoDisplayDeviceError",
    "DEFAULT_TIMEOUT_MS",
    "DISPLAY_DEVICE_PATH",
]

# Silent unless the application opts in with logger.enable("upower_dbus")
logger.disable(__name__)
