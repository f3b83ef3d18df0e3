"""Agent — a single combatant on the battlefield.

Architecture
------------
Agent is a *flat dataclass*.  Every combatant shares the same fields; what
it does each tick is decided by the policy in ``decision.py`` and applied by
``resolver.py``, never by methods on the agent itself.  Only two places
mutate an Agent during a run:

  - ActionResolver: position, state, and the health of attack targets.
  - World.update_passive_stats: morale, and health-to-state transitions.

An agent whose health drops to zero stays in the roster as a corpse.  It
keeps its id and position (so snapshots and reports can show it) but is no
longer *active*: it is skipped by the decision phase, cannot be seen as an
enemy, and its pending attacks are dropped once it is Downed or Dead.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .state import AgentState, Idle, is_terminal, state_to_value
from .vector import Vector2


@dataclass(frozen=True)
class WeaponStats:
    """Immutable weapon profile owned by an agent."""

    range: float        # map units, also the agent's perception radius
    accuracy: float     # 0.0-1.0, only used when accuracy rolls are enabled
    damage: float       # health removed per hit
    fire_rate: float    # shots per tick, carried for future use

    def to_dict(self) -> dict:
        return {
            "range": self.range,
            "accuracy": self.accuracy,
            "damage": self.damage,
            "fire_rate": self.fire_rate,
        }


@dataclass
class Agent:
    """A combatant.  ``id`` is unique within a World and never reused."""

    id: int
    team: int
    position: Vector2
    weapon: WeaponStats
    health: float = 100.0
    morale: float = 1.0
    state: AgentState = field(default_factory=Idle)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def is_active(self) -> bool:
        """True if the agent may perceive-as-enemy, decide and act."""
        return self.health > 0 and not is_terminal(self.state)

    def is_enemy_of(self, other: Agent) -> bool:
        return self.team != other.team

    def to_dict(self) -> dict:
        """Serialize in the scenario wire format."""
        return {
            "id": self.id,
            "team": self.team,
            "position": self.position.to_dict(),
            "health": self.health,
            "morale": self.morale,
            "weapon": self.weapon.to_dict(),
            "state": state_to_value(self.state),
        }
