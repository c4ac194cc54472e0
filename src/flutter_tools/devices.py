from __future__ import annotations

from dataclasses import dataclass

from flutter_tools.runtime import context

TESTER_DEVICE_ID = "flutter-tester"


@dataclass(frozen=True)
class FlutterTesterVisibility:
    visible: bool = False


@dataclass(frozen=True)
class Device:
    id: str
    name: str
    platform: str
    is_headless: bool = False


FLUTTER_TESTER_DEVICE = Device(
    id=TESTER_DEVICE_ID,
    name="Flutter test device",
    platform="flutter-tester",
    is_headless=True,
)


class DeviceManager:
    """Enumerates devices and carries the user's ``--device-id`` filter."""

    def __init__(self, attached: tuple[Device, ...] = ()) -> None:
        self.attached = attached
        self.specified_device_id: str | None = None

    @property
    def has_specified_device_id(self) -> bool:
        return self.specified_device_id is not None

    def get_all_devices(self) -> list[Device]:
        devices = list(self.attached)
        if context.get(FlutterTesterVisibility).visible:
            devices.append(FLUTTER_TESTER_DEVICE)
        return devices

    def get_devices(self) -> list[Device]:
        """Devices matching the specified id, exactly or by id/name prefix."""
        devices = self.get_all_devices()
        wanted = self.specified_device_id
        if wanted is None:
            return devices
        exact = [device for device in devices if wanted in (device.id, device.name)]
        if exact:
            return exact
        lowered = wanted.lower()
        return [
            device
            for device in devices
            if device.id.lower().startswith(lowered)
            or device.name.lower().startswith(lowered)
        ]


context.register_default(FlutterTesterVisibility, FlutterTesterVisibility)
context.register_default(DeviceManager, DeviceManager)
