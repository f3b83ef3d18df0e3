"""Per-tick state snapshots handed to logging and presentation code.

A TickSnapshot is a frozen copy of the roster taken after a tick completes.
It carries structured values, not console text; ``tactix.report`` formats
it for humans and ``to_dict()`` gives JSON-ready data whose ``agents`` list
uses the scenario wire format, so a snapshot can be fed back to the loader.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .state import (
    AgentState,
    Attacking,
    Dead,
    Downed,
    Idle,
    Moving,
    Suppressing,
    state_to_value,
)
from .vector import Vector2

if TYPE_CHECKING:
    from .agent import Agent, WeaponStats


def describe_state(state: AgentState) -> str:
    """Human-readable one-liner for *state*."""
    if isinstance(state, Idle):
        return "Holding Position"
    if isinstance(state, Moving):
        return f"Moving to ({state.target.x:.1f}, {state.target.y:.1f})"
    if isinstance(state, Attacking):
        return f"FIRING at Agent #{state.target_id}"
    if isinstance(state, Suppressing):
        return f"Suppressing Agent #{state.target_id}"
    if isinstance(state, Downed):
        return "DOWNED - Bleeding Out"
    if isinstance(state, Dead):
        return "KIA"
    raise TypeError(f"Not an agent state: {state!r}")


@dataclass(frozen=True)
class AgentSnapshot:
    id: int
    team: int
    position: Vector2
    health: float
    morale: float
    state: AgentState
    weapon: WeaponStats

    @property
    def description(self) -> str:
        return describe_state(self.state)

    @classmethod
    def of(cls, agent: Agent) -> AgentSnapshot:
        return cls(
            id=agent.id,
            team=agent.team,
            position=agent.position,
            health=agent.health,
            morale=agent.morale,
            state=agent.state,
            weapon=agent.weapon,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "team": self.team,
            "position": self.position.to_dict(),
            "health": self.health,
            "morale": self.morale,
            "weapon": self.weapon.to_dict(),
            "state": state_to_value(self.state),
            "description": self.description,
        }


@dataclass(frozen=True)
class TickSnapshot:
    tick: int
    agents: tuple[AgentSnapshot, ...]

    @classmethod
    def capture(cls, tick: int, agents: Iterable[Agent]) -> TickSnapshot:
        return cls(tick=tick, agents=tuple(AgentSnapshot.of(a) for a in agents))

    def to_dict(self) -> dict:
        return {"tick": self.tick, "agents": [a.to_dict() for a in self.agents]}
