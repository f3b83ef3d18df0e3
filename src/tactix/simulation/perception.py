"""Perception — what each agent knows about the battlefield this tick.

Integration:
  - World calls gather_perceptions() at the start of every tick, before any
    agent decides or acts, so every agent sees the same frozen picture.
  - decide() reads only the agent and its PerceptionData.
  - World.update_passive_stats() reuses ``is_under_fire`` for morale decay.

Per observer:
  1. Nearest cover node by Euclidean distance (ties -> lowest cover id)
  2. Visible enemies: other team, active, within the observer's weapon
     range.  Listed in roster order.  An agent never sees itself.
  3. Under fire: some active enemy is currently Attacking the observer.

Every agent gets an entry, dead ones included, so downstream lookups never
miss; callers skip inactive agents themselves.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .cover import CoverNode, nearest_cover
from .state import Attacking
from .vector import Vector2

if TYPE_CHECKING:
    from .agent import Agent
    from .world import World


@dataclass(frozen=True)
class PerceptionData:
    """Read-only view of one agent's surroundings, valid for one tick."""

    visible_enemies: tuple[int, ...] = ()
    nearest_cover: Vector2 | None = None
    is_under_fire: bool = False


def perceive(
    observer: Agent,
    agents: Sequence[Agent],
    cover_nodes: Sequence[CoverNode],
) -> PerceptionData:
    """Compute PerceptionData for a single *observer*."""
    cover = nearest_cover(observer.position, cover_nodes)

    visible: list[int] = []
    under_fire = False
    for other in agents:
        if other.id == observer.id:
            continue
        if not other.is_enemy_of(observer) or not other.is_active:
            continue
        # Line of effect is unconditional for now: range is the only limit
        if observer.position.distance(other.position) <= observer.weapon.range:
            visible.append(other.id)
        if isinstance(other.state, Attacking) and other.state.target_id == observer.id:
            under_fire = True

    return PerceptionData(
        visible_enemies=tuple(visible),
        nearest_cover=cover.position if cover is not None else None,
        is_under_fire=under_fire,
    )


def gather_perceptions(world: World) -> dict[int, PerceptionData]:
    """Perceive for every agent in *world*.  Pure read, no mutation."""
    agents = world.agents
    cover_nodes = world.cover_nodes
    return {agent.id: perceive(agent, agents, cover_nodes) for agent in agents}
