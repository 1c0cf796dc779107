"""Drive labels and vector arithmetic shared by every engine stage."""

from drivefit.drives.models import (
    DRIVES,
    Drive,
    DriveVector,
    clamp,
    clamp01,
    to_number,
)

__all__ = [
    "DRIVES",
    "Drive",
    "DriveVector",
    "clamp",
    "clamp01",
    "to_number",
]
