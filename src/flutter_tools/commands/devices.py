from __future__ import annotations

import typer

from flutter_tools.devices import DeviceManager
from flutter_tools.logger import Logger
from flutter_tools.runtime import context

app = typer.Typer(add_completion=False)


@app.command("devices", help="List all connected devices.")
def devices() -> None:
    manager = context.get(DeviceManager)
    logger = context.get(Logger)
    found = manager.get_devices()
    if not found:
        if manager.has_specified_device_id:
            logger.print_status(
                f"No devices found with name or id matching '{manager.specified_device_id}'."
            )
        else:
            logger.print_status("No devices detected.")
        return
    noun = "device" if len(found) == 1 else "devices"
    logger.print_status(f"{len(found)} connected {noun}:", emphasis=True)
    logger.print_status("")
    for device in found:
        suffix = " (headless)" if device.is_headless else ""
        logger.print_status(f"{device.name} • {device.id} • {device.platform}{suffix}")
