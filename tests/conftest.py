"""
Pytest fixtures: a fake system bus serving the UPower objects.
"""

import dbus
import pytest

import upower_dbus.upower
from upower_dbus.constants import DISPLAY_DEVICE_PATH, UPOWER_PATH

BATTERY_PATH = "/org/freedesktop/UPower/devices/battery_BAT0"
LINE_POWER_PATH = "/org/freedesktop/UPower/devices/line_power_AC"


class FakeObject:
    """A remote object answering Properties.Get and root method calls."""

    def __init__(self, bus, path):
        self.bus = bus
        self.path = path

    def _reply(self, timeout):
        self.bus.timeouts.append(timeout)
        if self.bus.hang:
            raise dbus.exceptions.DBusException(
                "Did not receive a reply.", name="org.freedesktop.DBus.Error.NoReply"
            )
        if self.path not in self.bus.objects:
            raise dbus.exceptions.DBusException(
                f"No such object path '{self.path}'",
                name="org.freedesktop.DBus.Error.UnknownObject",
            )
        return self.bus.objects[self.path]

    def Get(self, iface, prop, dbus_interface=None, timeout=None):
        assert dbus_interface == "org.freedesktop.DBus.Properties"
        props = self._reply(timeout).get(iface, {})
        if prop not in props:
            raise dbus.exceptions.DBusException(
                f"No such property '{prop}'", name="org.freedesktop.DBus.Error.InvalidArgs"
            )
        self.bus.requests.append((self.path, iface, prop))
        return props[prop]

    def GetDisplayDevice(self, dbus_interface=None, timeout=None):
        assert dbus_interface == "org.freedesktop.UPower"
        self._reply(timeout)
        self.bus.requests.append((self.path, dbus_interface, "GetDisplayDevice"))
        return self.bus.display_device

    def GetCriticalAction(self, dbus_interface=None, timeout=None):
        assert dbus_interface == "org.freedesktop.UPower"
        self._reply(timeout)
        return dbus.String("HybridSleep")


class FakeBus:
    def __init__(self):
        self.closed = False
        self.hang = False
        self.timeouts = []
        self.requests = []
        self.display_device = dbus.ObjectPath(DISPLAY_DEVICE_PATH)
        self.objects = {
            UPOWER_PATH: {
                "org.freedesktop.UPower": {
                    "OnBattery": dbus.Boolean(True),
                    "LidIsPresent": dbus.Boolean(True),
                    "LidIsClosed": dbus.Boolean(False),
                    "DaemonVersion": dbus.String("1.90.2"),
                },
            },
            DISPLAY_DEVICE_PATH: {
                "org.freedesktop.UPower.Device": {
                    "Percentage": dbus.Double(73.5),
                    "Energy": dbus.Double(38.22),
                    "EnergyFull": dbus.Double(52.0),
                    "EnergyRate": dbus.Double(7.8),
                    "Online": dbus.Boolean(False),
                    "TimeToEmpty": dbus.Int64(17640),
                    "TimeToFull": dbus.Int64(0),
                    "State": dbus.UInt32(2),
                },
            },
            BATTERY_PATH: {
                "org.freedesktop.UPower.Device": {
                    "Percentage": dbus.Double(41.0),
                    "Energy": dbus.Double(21.32),
                    "EnergyFull": dbus.Double(52.0),
                    "State": dbus.UInt32(1),
                },
            },
            LINE_POWER_PATH: {
                "org.freedesktop.UPower.Device": {
                    "Online": dbus.Boolean(False),
                },
            },
        }

    def get_object(self, bus_name, path, introspect=True):
        assert bus_name == "org.freedesktop.UPower"
        assert introspect is False
        return FakeObject(self, str(path))

    def set_property(self, path, iface, prop, value):
        self.objects[path][iface][prop] = value

    def close(self):
        self.closed = True


@pytest.fixture
def fake_bus(monkeypatch):
    bus = FakeBus()
    opened = []

    def open_bus(address=None):
        opened.append(address)
        return bus

    monkeypatch.setattr(upower_dbus.upower, "_open_bus", open_bus)
    bus.opened = opened
    return bus


@pytest.fixture
def upower(fake_bus):
    client = upower_dbus.upower.UPower(1000)
    yield client
    client.close()
