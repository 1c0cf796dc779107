"""drivefit: drive profiles and occupational-fit matching."""

__version__ = "0.1.0"
