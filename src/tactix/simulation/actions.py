"""AgentAction — what an agent intends to do this tick.

Produced by :func:`tactix.simulation.decision.decide`, consumed exactly once
by the ActionResolver, then discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .vector import Vector2


@dataclass(frozen=True)
class MoveTo:
    target: Vector2


@dataclass(frozen=True)
class Attack:
    target_id: int


@dataclass(frozen=True)
class HoldPosition:
    """Do nothing this tick (the agent goes back to Idle)."""


AgentAction = Union[MoveTo, Attack, HoldPosition]
