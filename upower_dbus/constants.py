"""
D-Bus names and paths of the UPower service.
"""

# Service identification
UPOWER_NAME = "org.freedesktop.UPower"
UPOWER_PATH = "/org/freedesktop/UPower"
UPOWER_IFACE = "org.freedesktop.UPower"

DEVICE_IFACE = "org.freedesktop.UPower.Device"
DISPLAY_DEVICE_PATH = "/org/freedesktop/UPower/devices/DisplayDevice"

DBUS_PROPERTIES = "org.freedesktop.DBus.Properties"

# GetDisplayDevice answers with one of these when there is nothing to show
NO_DEVICE_PATHS = ("", "/")

DEFAULT_TIMEOUT_MS = 1000
