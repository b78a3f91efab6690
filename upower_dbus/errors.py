class UPowerError(Exception):
    """Base class for every error raised by upower_dbus."""


class BusConnectionError(UPowerError):
    """The system bus could not be reached, or the client is closed."""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"failed to connect to the system bus: {reason}")


class RequestError(UPowerError):
    """A request message could not be built."""
    def __init__(self, what: str, reason: str):
        self.what = what
        self.reason = reason
        super().__init__(f"invalid request for {what}: {reason}")


class TransportError(UPowerError):
    """The bus answered with an error, timed out, or sent an unexpected reply."""
    def __init__(self, what: str, reason: str, dbus_name: str | None = None):
        self.what = what
        self.reason = reason
        self.dbus_name = dbus_name
        super().__init__(f"{what} failed: {reason}")


class NoDisplayDeviceError(UPowerError):
    def __init__(self):
        super().__init__("UPower has no display device")
