"""Galatea: the device-side helper and its SSH activation."""
from seaward.galatea.client import GalateaClient
from seaward.galatea.provider import (
    GalateaError,
    activate_galatea_for_ssh_device,
    upload_galatea_to_ssh_device,
)

__all__ = [
    "GalateaClient",
    "GalateaError",
    "activate_galatea_for_ssh_device",
    "upload_galatea_to_ssh_device",
]
