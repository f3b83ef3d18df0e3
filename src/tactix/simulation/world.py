"""World — owns the roster and drives the tick pipeline.

Architecture
------------
The World is the single authoritative owner of all Agents, the cover
layout, the simulation config and the tick counter.  ``tick()`` runs one
fully synchronous step:

  1. Perceive: gather_perceptions() reads the world, mutates nothing.
  2. Decide: decide() for every *active* agent, in roster order.  Inactive
     agents (health <= 0, Downed, Dead) are skipped and never decide.
  3. Resolve: ActionResolver applies movement, then combat.
  4. UpdatePassiveStats: morale decay for agents under fire, and any agent
     at health <= 0 is moved to Dead (agents already Downed stay Downed).
  5. Advance: tick counter +1, snapshot captured and published.

Every phase finishes before the next begins; nothing else may touch the
World during ``tick()``.  The roster order is the load order and is the
tie-break order for the whole run, so the same scenario and seed always
produce the same sequence of snapshots.

Lookups by id are a linear scan over the roster, O(n) per lookup.  Rosters
are tens of agents; an id-to-slot index would be warranted past a few
hundred.

Events published (when an EventBus is attached):
  - ``attack_hit`` / ``attack_missed``: from the resolver
  - ``agent_killed``: health reached zero, agent is now Dead
  - ``tick_completed``: TickSnapshot.to_dict() after every tick
  - ``battle_over``: once, when fewer than two teams remain
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from .actions import AgentAction
from .decision import decide
from .perception import PerceptionData, gather_perceptions
from .resolver import ActionResolver
from .rng import SeededRng
from .snapshot import TickSnapshot
from .state import Dead, is_terminal

if TYPE_CHECKING:
    from tactix.comms.event_bus import EventBus

    from .agent import Agent
    from .cover import CoverNode


@dataclass(frozen=True)
class SimulationConfig:
    """Per-scenario simulation parameters."""

    rng_seed: int = 0
    tick_rate: float = 2.0              # ticks per second, presentation pacing only
    move_step: float | None = None      # None = teleport onto move targets
    accuracy_rolls: bool = False        # roll weapon accuracy per attack
    morale_decay: float = 0.05          # morale lost per tick under fire

    def to_dict(self) -> dict:
        return {
            "rng_seed": self.rng_seed,
            "tick_rate": self.tick_rate,
            "move_step": self.move_step,
            "accuracy_rolls": self.accuracy_rolls,
            "morale_decay": self.morale_decay,
        }


class World:
    """The battlefield: roster, cover layout, config and clock."""

    def __init__(
        self,
        agents: Iterable[Agent],
        cover_nodes: Iterable[CoverNode] = (),
        config: SimulationConfig | None = None,
        tick: int = 0,
        event_bus: EventBus | None = None,
    ) -> None:
        self._agents: list[Agent] = list(agents)
        self._cover_nodes: tuple[CoverNode, ...] = tuple(cover_nodes)
        self.config = config if config is not None else SimulationConfig()
        self._tick = tick
        self.rng = SeededRng(self.config.rng_seed)
        self._event_bus = event_bus
        self._resolver = ActionResolver()
        self._battle_over_published = False

        seen: set[int] = set()
        for agent in self._agents:
            if agent.id in seen:
                raise ValueError(f"Duplicate agent id {agent.id}")
            seen.add(agent.id)

    # -- Read access --------------------------------------------------------

    @property
    def agents(self) -> tuple[Agent, ...]:
        return tuple(self._agents)

    @property
    def cover_nodes(self) -> tuple[CoverNode, ...]:
        return self._cover_nodes

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def event_bus(self) -> EventBus | None:
        return self._event_bus

    def get_agent(self, agent_id: int) -> Agent | None:
        """Find an agent by id.  Linear scan, O(n)."""
        for agent in self._agents:
            if agent.id == agent_id:
                return agent
        return None

    def active_teams(self) -> set[int]:
        return {a.team for a in self._agents if a.is_alive}

    def is_battle_over(self) -> bool:
        """True when fewer than two teams still have a living member."""
        return len(self.active_teams()) < 2

    def publish(self, event_type: str, data: dict | None = None) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event_type, data)

    def snapshot(self) -> TickSnapshot:
        return TickSnapshot.capture(self._tick, self._agents)

    # -- Tick pipeline ------------------------------------------------------

    def calculate_decisions(
        self, perceptions: dict[int, PerceptionData],
    ) -> list[tuple[int, AgentAction]]:
        """Ask every active agent what it wants to do, in roster order."""
        actions: list[tuple[int, AgentAction]] = []
        for agent in self._agents:
            if not agent.is_active:
                continue
            actions.append((agent.id, decide(agent, perceptions[agent.id])))
        return actions

    def update_passive_stats(self, perceptions: dict[int, PerceptionData]) -> None:
        """Morale decay and health-to-state transitions."""
        decay = self.config.morale_decay
        for agent in self._agents:
            perception = perceptions.get(agent.id)
            if agent.is_active and perception is not None and perception.is_under_fire:
                agent.morale = min(1.0, max(0.0, agent.morale - decay))

            if agent.health <= 0 and not is_terminal(agent.state):
                agent.state = Dead()
                logger.info(f"Agent {agent.id} (team {agent.team}) killed at tick {self._tick + 1}")
                self.publish("agent_killed", {
                    "agent_id": agent.id,
                    "team": agent.team,
                    "tick": self._tick + 1,
                    "position": agent.position.to_dict(),
                })

    def tick(self) -> TickSnapshot:
        """Run one complete tick and return the resulting snapshot."""
        perceptions = gather_perceptions(self)
        actions = self.calculate_decisions(perceptions)
        self._resolver.resolve(self, actions)
        self.update_passive_stats(perceptions)

        self._tick += 1
        snap = self.snapshot()
        self.publish("tick_completed", snap.to_dict())
        return snap

    def run(self, max_ticks: int | None = None) -> list[TickSnapshot]:
        """Tick until the battle is over or *max_ticks* ticks have run."""
        snapshots: list[TickSnapshot] = []
        while not self.is_battle_over():
            if max_ticks is not None and len(snapshots) >= max_ticks:
                break
            snapshots.append(self.tick())
        if self.is_battle_over():
            self.announce_battle_over()
        return snapshots

    def announce_battle_over(self) -> None:
        """Log and publish the end of battle.  Only the first call has effect."""
        if self._battle_over_published:
            return
        self._battle_over_published = True
        survivors = sorted(self.active_teams())
        logger.info(f"Battle ended at tick {self._tick}, surviving teams: {survivors}")
        self.publish("battle_over", {"tick": self._tick, "surviving_teams": survivors})
