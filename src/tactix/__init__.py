"""tactix — deterministic turn-based tactical combat simulator."""

__version__ = "0.1.0"
