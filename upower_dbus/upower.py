"""
Synchronous UPower client over the D-Bus system bus.

Every query is a single blocking round trip bounded by the timeout given to
the constructor. Nothing is cached and nothing is retried.

The client is not thread-safe; guard it with a lock when sharing it.
"""

import contextlib
from enum import IntEnum

import dbus
import dbus.bus
from loguru import logger

from .constants import (
    DBUS_PROPERTIES,
    DEFAULT_TIMEOUT_MS,
    DEVICE_IFACE,
    NO_DEVICE_PATHS,
    UPOWER_IFACE,
    UPOWER_NAME,
    UPOWER_PATH,
)
from .errors import BusConnectionError, NoDisplayDeviceError, RequestError, TransportError


class DeviceState(IntEnum):
    UNKNOWN = 0
    CHARGING = 1
    DISCHARGING = 2
    EMPTY = 3
    FULLY_CHARGED = 4
    PENDING_CHARGE = 5
    PENDING_DISCHARGE = 6


# Accepted D-Bus reply types per Python result type
_DBUS_TYPES = {
    bool: (dbus.Boolean,),
    float: (dbus.Double,),
    int: (dbus.Byte, dbus.Int16, dbus.UInt16, dbus.Int32, dbus.UInt32, dbus.Int64, dbus.UInt64),
    str: (dbus.String, dbus.ObjectPath),
}


def _open_bus(address=None):
    if address is None:
        return dbus.SystemBus(private=True)
    return dbus.bus.BusConnection(address)


def _decode(value, kind, what):
    if not isinstance(value, _DBUS_TYPES[kind]):
        raise TransportError(
            what, f"expected {kind.__name__}, got {type(value).__name__} {value!r}"
        )
    return kind(value)


class UPower:
    """
    Reads power status from org.freedesktop.UPower.

    Device getters come in pairs: ``get_x()`` reads from the display device,
    ``get_x_of(path)`` reads from the given device object.
    """

    def __init__(self, timeout_ms: int = DEFAULT_TIMEOUT_MS, bus_address: str | None = None):
        self._bus = None
        if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int) or timeout_ms < 0:
            raise ValueError(f"timeout_ms must be a non-negative integer, got {timeout_ms!r}")

        self._timeout_ms = timeout_ms
        try:
            self._bus = _open_bus(bus_address)
        except dbus.exceptions.DBusException as e:
            logger.debug(f"[UPower] system bus unavailable: {e}")
            raise BusConnectionError(e.get_dbus_message() or str(e)) from e
        logger.debug(f"[UPower] connected to {bus_address or 'system bus'} (timeout {timeout_ms} ms)")

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __del__(self):
        self.close()

    def __repr__(self):
        state = "closed" if self.closed else "open"
        return f"<UPower timeout_ms={self._timeout_ms} {state}>"

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    @property
    def closed(self) -> bool:
        return getattr(self, "_bus", None) is None

    def close(self) -> None:
        bus = getattr(self, "_bus", None)
        if bus is None:
            return
        self._bus = None
        bus.close()
        logger.debug("[UPower] connection closed")

    # Helpers

    @contextlib.contextmanager
    def _request(self, what: str):
        """Translate dbus-python failures raised inside the block into UPowerError."""
        if self._bus is None:
            raise BusConnectionError("client is closed")
        logger.debug(f"[UPower] {what}")
        try:
            yield
        except dbus.exceptions.DBusException as e:
            logger.debug(f"[UPower] {what} failed: {e}")
            raise TransportError(what, e.get_dbus_message() or str(e), e.get_dbus_name()) from e
        except (TypeError, ValueError) as e:
            logger.debug(f"[UPower] {what} could not be sent: {e}")
            raise RequestError(what, str(e)) from e

    def _get_object(self, path):
        return self._bus.get_object(UPOWER_NAME, dbus.ObjectPath(path), introspect=False)

    def _get_prop(self, path, iface, prop):
        return self._get_object(path).Get(
            iface, prop, dbus_interface=DBUS_PROPERTIES, timeout=self._timeout_ms / 1000
        )

    def _call_root(self, method):
        return getattr(self._get_object(UPOWER_PATH), method)(
            dbus_interface=UPOWER_IFACE, timeout=self._timeout_ms / 1000
        )

    def _read_root_property(self, prop, kind):
        what = f"reading {UPOWER_IFACE}.{prop}"
        with self._request(what):
            value = self._get_prop(UPOWER_PATH, UPOWER_IFACE, prop)
        return _decode(value, kind, what)

    def _read_device_property(self, path, prop, kind):
        """Read ``prop`` from ``path``, or from the display device when ``path`` is None."""
        if path is None:
            path = self.resolve_display_device()
            if path is None:
                raise NoDisplayDeviceError()

        what = f"reading {DEVICE_IFACE}.{prop} of {path}"
        with self._request(what):
            value = self._get_prop(path, DEVICE_IFACE, prop)
        return _decode(value, kind, what)

    # Root object

    def resolve_display_device(self) -> str | None:
        """Return the display device path, or None if UPower reports none."""
        what = "calling GetDisplayDevice"
        with self._request(what):
            path = self._call_root("GetDisplayDevice")
        path = _decode(path, str, what)
        if path in NO_DEVICE_PATHS:
            return None
        return path

    def on_battery(self) -> bool:
        return self._read_root_property("OnBattery", bool)

    def lid_is_present(self) -> bool:
        return self._read_root_property("LidIsPresent", bool)

    def lid_is_closed(self) -> bool:
        return self._read_root_property("LidIsClosed", bool)

    def daemon_version(self) -> str:
        return self._read_root_property("DaemonVersion", str)

    def get_critical_action(self) -> str:
        """Action UPower takes on critical battery: PowerOff, Hibernate or HybridSleep."""
        what = "calling GetCriticalAction"
        with self._request(what):
            action = self._call_root("GetCriticalAction")
        return _decode(action, str, what)

    # Devices

    def get_percentage(self) -> float:
        return self._read_device_property(None, "Percentage", float)

    def get_percentage_of(self, path: str) -> float:
        return self._read_device_property(path, "Percentage", float)

    def get_energy(self) -> float:
        return self._read_device_property(None, "Energy", float)

    def get_energy_of(self, path: str) -> float:
        return self._read_device_property(path, "Energy", float)

    def get_energy_full(self) -> float:
        return self._read_device_property(None, "EnergyFull", float)

    def get_energy_full_of(self, path: str) -> float:
        return self._read_device_property(path, "EnergyFull", float)

    def get_energy_rate(self) -> float:
        return self._read_device_property(None, "EnergyRate", float)

    def get_energy_rate_of(self, path: str) -> float:
        return self._read_device_property(path, "EnergyRate", float)

    def get_online(self) -> bool:
        return self._read_device_property(None, "Online", bool)

    def get_online_of(self, path: str) -> bool:
        return self._read_device_property(path, "Online", bool)

    def get_time_to_empty(self) -> int:
        return self._read_device_property(None, "TimeToEmpty", int)

    def get_time_to_empty_of(self, path: str) -> int:
        return self._read_device_property(path, "TimeToEmpty", int)

    def get_time_to_full(self) -> int:
        return self._read_device_property(None, "TimeToFull", int)

    def get_time_to_full_of(self, path: str) -> int:
        return self._read_device_property(path, "TimeToFull", int)

    def get_state(self) -> DeviceState:
        return self._state(None)

    def get_state_of(self, path: str) -> DeviceState:
        return self._state(path)

    def _state(self, path):
        state = self._read_device_property(path, "State", int)
        if 0 <= state < len(DeviceState):
            return DeviceState(state)
        return DeviceState.UNKNOWN
