"""Event plumbing between the simulation core and its observers."""
from .event_bus import EventBus, drain

__all__ = ["EventBus", "drain"]
