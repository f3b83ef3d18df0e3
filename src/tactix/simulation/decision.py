"""Decision policy — maps one agent and its perception to a single action.

Fixed priority cascade, first match wins:

  1. Critical survival: badly hurt -> run to cover
  2. Self-preservation: being shot at -> run to cover
  3. Engagement: enemy in sight -> attack the first one listed
  4. Otherwise hold position

Rules 1 and 2 only fire when there is cover *and* the agent is not already
standing on it; otherwise the cascade falls through to the next rule rather
than issuing a pointless move.

decide() is a pure function of its arguments.  It must not look at other
agents' decisions for the same tick, only at the perception computed before
any agent decided.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .actions import AgentAction, Attack, HoldPosition, MoveTo

if TYPE_CHECKING:
    from .agent import Agent
    from .perception import PerceptionData
    from .vector import Vector2

# Below this health the agent drops everything and seeks cover
CRITICAL_HEALTH = 25.0

# Already "in cover" when this close to the cover position
COVER_REACHED_DISTANCE = 1.0


def _cover_move(agent: Agent, cover: Vector2 | None) -> MoveTo | None:
    if cover is None:
        return None
    if agent.position.distance(cover) > COVER_REACHED_DISTANCE:
        return MoveTo(cover)
    return None


def decide(agent: Agent, perception: PerceptionData) -> AgentAction:
    """Choose the action for *agent*.  Never called for inactive agents."""
    if agent.health < CRITICAL_HEALTH:
        move = _cover_move(agent, perception.nearest_cover)
        if move is not None:
            return move

    if perception.is_under_fire:
        move = _cover_move(agent, perception.nearest_cover)
        if move is not None:
            return move

    # TODO: pick the closest or most dangerous enemy instead of the first
    if perception.visible_enemies:
        return Attack(perception.visible_enemies[0])

    return HoldPosition()
