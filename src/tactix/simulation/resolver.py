"""ActionResolver — applies a tick's batch of intended actions to the World.

Architecture
------------
Actions arrive as an ordered list of ``(agent_id, AgentAction)`` pairs built
by the decision phase.  They are applied in two fixed passes:

  1. Movement pass: every MoveTo and HoldPosition, in input order.
  2. Combat pass: every Attack, in input order.

Movement always resolves before combat, whatever order the actions were
listed in, so an attack against an agent that moved this tick is evaluated
against the mover's *new* position.  Within the combat pass fire is
simultaneous: an attacker knocked to zero health earlier in the same pass
still gets its shot off.  Only agents already Downed or Dead (set by the
previous tick's passive-stats step) lose their attack.

Inconsistent references are expected, not errors.  World state can change
between decide and resolve, so:

  - MoveTo for an unknown or inactive agent is a no-op.
  - Attack from an unknown, Downed or Dead attacker is silently dropped.
  - Attack on an unknown target is logged as a miss with no effect.

Hit resolution:
  By default every attack that reaches a target hits for the attacker's
  ``weapon.damage``.  With ``config.accuracy_rolls`` enabled, the World's
  SeededRng rolls once per attack and a hit needs ``roll < accuracy``.
  Health may go negative; the passive-stats step owns Dead/Downed.

Movement:
  With ``config.move_step`` unset the agent teleports onto its target and
  goes Idle.  With a step, it advances at most ``move_step`` per tick and
  stays ``Moving`` until within ARRIVAL_EPSILON of the target.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from .actions import AgentAction, Attack, HoldPosition, MoveTo
from .state import Attacking, Idle, Moving, is_terminal

if TYPE_CHECKING:
    from .vector import Vector2
    from .world import World

# Close enough to a move target to count as arrived
ARRIVAL_EPSILON = 0.01


@dataclass(frozen=True)
class AttackOutcome:
    """Result of one Attack that made it past the attacker checks."""

    attacker_id: int
    target_id: int
    hit: bool
    damage: float = 0.0
    remaining_health: float | None = None  # None when the target was missing

    def to_dict(self) -> dict:
        return {
            "attacker_id": self.attacker_id,
            "target_id": self.target_id,
            "hit": self.hit,
            "damage": self.damage,
            "remaining_health": self.remaining_health,
        }


class ActionResolver:
    """Applies intended actions in a fixed movement-then-combat order."""

    def resolve(
        self,
        world: World,
        actions: Sequence[tuple[int, AgentAction]],
    ) -> list[AttackOutcome]:
        """Apply *actions* to *world*.  Returns the outcome of each attack."""
        for agent_id, action in actions:
            if isinstance(action, MoveTo):
                self._move(world, agent_id, action.target)
            elif isinstance(action, HoldPosition):
                self._hold(world, agent_id)

        outcomes: list[AttackOutcome] = []
        for agent_id, action in actions:
            if isinstance(action, Attack):
                outcome = self._attack(world, agent_id, action.target_id)
                if outcome is not None:
                    outcomes.append(outcome)
        return outcomes

    # -- Movement pass ------------------------------------------------------

    def _move(self, world: World, agent_id: int, target: Vector2) -> None:
        agent = world.get_agent(agent_id)
        if agent is None or not agent.is_active:
            return

        step = world.config.move_step
        if step is None:
            agent.position = target
            agent.state = Idle()
            logger.debug(f"Agent {agent_id} moved to ({target.x:.2f}, {target.y:.2f})")
            return

        offset = target - agent.position
        remaining = max(0.0, offset.length() - step)
        if remaining < ARRIVAL_EPSILON:
            agent.position = target
            agent.state = Idle()
        else:
            agent.position = agent.position + offset.normalized() * step
            agent.state = Moving(target)
        logger.debug(
            f"Agent {agent_id} advancing to ({target.x:.2f}, {target.y:.2f}), "
            f"now at ({agent.position.x:.2f}, {agent.position.y:.2f})"
        )

    def _hold(self, world: World, agent_id: int) -> None:
        agent = world.get_agent(agent_id)
        if agent is None or not agent.is_active:
            return
        agent.state = Idle()

    # -- Combat pass --------------------------------------------------------

    def _attack(self, world: World, attacker_id: int, target_id: int) -> AttackOutcome | None:
        attacker = world.get_agent(attacker_id)
        if attacker is None or is_terminal(attacker.state):
            # Attacker was removed or went down before it could shoot
            return None

        attacker.state = Attacking(target_id)
        target = world.get_agent(target_id)
        if target is None:
            logger.warning(f"Agent {attacker_id} fired at missing Agent {target_id}: miss")
            outcome = AttackOutcome(attacker_id, target_id, hit=False)
            world.publish("attack_missed", outcome.to_dict())
            return outcome

        weapon = attacker.weapon
        if world.config.accuracy_rolls and not world.rng.roll() < weapon.accuracy:
            logger.debug(f"Agent {attacker_id} missed Agent {target_id}")
            outcome = AttackOutcome(attacker_id, target_id, hit=False,
                                    remaining_health=target.health)
            world.publish("attack_missed", outcome.to_dict())
            return outcome

        target.health -= weapon.damage
        logger.debug(
            f"Agent {attacker_id} hit Agent {target_id} for {weapon.damage:.1f} "
            f"({target.health:.1f} left)"
        )
        outcome = AttackOutcome(attacker_id, target_id, hit=True,
                                damage=weapon.damage, remaining_health=target.health)
        world.publish("attack_hit", outcome.to_dict())
        return outcome
