"""Scenario files — pydantic schema, load into a World, save back out.

The loader is the only place raw scenario data is trusted; everything past
it works with validated Agent / CoverNode / SimulationConfig values.  Field
names are snake_case; the camelCase spellings (``coverNodes``, ``rngSeed``,
``tickRate``, ...) are accepted as aliases.

Usage:
    world = load_scenario("scenarios/skirmish.json")
    world.run()
    save_scenario(world, "skirmish_after.json")

Any failure to produce a World (missing file, bad JSON, schema violation)
is raised as ScenarioLoadError with the original exception chained.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .agent import Agent, WeaponStats
from .cover import CoverNode
from .state import AgentState, Idle, state_from_value
from .vector import Vector2
from .world import SimulationConfig, World

if TYPE_CHECKING:
    from tactix.comms.event_bus import EventBus


class ScenarioLoadError(Exception):
    """The scenario could not be read or is not a valid scenario."""


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PositionModel(_Schema):
    x: float
    y: float


class WeaponModel(_Schema):
    range: float = Field(ge=0.0)
    accuracy: float = Field(ge=0.0, le=1.0)
    damage: float
    fire_rate: float = Field(default=1.0, alias="fireRate")


class AgentModel(_Schema):
    id: int = Field(ge=0)
    team: int
    position: PositionModel
    health: float = 100.0
    morale: float = 1.0
    weapon: WeaponModel
    state: Any = Field(default_factory=Idle)

    @field_validator("state")
    @classmethod
    def _parse_state(cls, value: Any) -> AgentState:
        return state_from_value(value)


class CoverNodeModel(_Schema):
    id: int = Field(ge=0)
    position: PositionModel
    protection: float = Field(ge=0.0, le=1.0)


class ConfigModel(_Schema):
    rng_seed: int = Field(default=0, ge=0, lt=2**64, alias="rngSeed")
    tick_rate: float = Field(default=2.0, gt=0.0, alias="tickRate")
    move_step: float | None = Field(default=None, gt=0.0, alias="moveStep")
    accuracy_rolls: bool = Field(default=False, alias="accuracyRolls")
    morale_decay: float = Field(default=0.05, ge=0.0, alias="moraleDecay")


class ScenarioModel(_Schema):
    """A complete scenario file."""

    agents: list[AgentModel]
    cover_nodes: list[CoverNodeModel] = Field(default_factory=list, alias="coverNodes")
    config: ConfigModel = Field(default_factory=ConfigModel)
    tick: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _unique_ids(self) -> ScenarioModel:
        for label, ids in (
            ("agent", [a.id for a in self.agents]),
            ("cover node", [c.id for c in self.cover_nodes]),
        ):
            if len(ids) != len(set(ids)):
                dupes = sorted({i for i in ids if ids.count(i) > 1})
                raise ValueError(f"Duplicate {label} ids: {dupes}")
        return self


def _agent(model: AgentModel) -> Agent:
    w = model.weapon
    return Agent(
        id=model.id,
        team=model.team,
        position=Vector2(model.position.x, model.position.y),
        weapon=WeaponStats(range=w.range, accuracy=w.accuracy, damage=w.damage,
                           fire_rate=w.fire_rate),
        health=model.health,
        morale=model.morale,
        state=model.state,
    )


def build_world(scenario: ScenarioModel, event_bus: EventBus | None = None) -> World:
    """Turn a validated ScenarioModel into a fresh World."""
    c = scenario.config
    config = SimulationConfig(
        rng_seed=c.rng_seed,
        tick_rate=c.tick_rate,
        move_step=c.move_step,
        accuracy_rolls=c.accuracy_rolls,
        morale_decay=c.morale_decay,
    )
    cover = [
        CoverNode(id=n.id, position=Vector2(n.position.x, n.position.y), protection=n.protection)
        for n in scenario.cover_nodes
    ]
    return World(
        agents=[_agent(a) for a in scenario.agents],
        cover_nodes=cover,
        config=config,
        tick=scenario.tick,
        event_bus=event_bus,
    )


def world_from_dict(data: dict[str, Any], event_bus: EventBus | None = None) -> World:
    """Validate already-parsed scenario data and build a World.

    Raises:
        ScenarioLoadError: If *data* is not a valid scenario.
    """
    try:
        scenario = ScenarioModel.model_validate(data)
    except ValidationError as e:
        raise ScenarioLoadError(f"Invalid scenario: {e}") from e
    return build_world(scenario, event_bus=event_bus)


def world_to_dict(world: World) -> dict[str, Any]:
    """Serialize *world* in the scenario format (inverse of world_from_dict)."""
    return {
        "tick": world.tick_count,
        "config": world.config.to_dict(),
        "agents": [a.to_dict() for a in world.agents],
        "cover_nodes": [c.to_dict() for c in world.cover_nodes],
    }


def load_scenario(path: str | Path, event_bus: EventBus | None = None) -> World:
    """Read a scenario JSON file and build a World from it.

    Raises:
        ScenarioLoadError: If the file is missing, unreadable, not valid JSON,
            or does not describe a valid scenario.
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ScenarioLoadError(f"Scenario file not found: {path}") from e
    except OSError as e:
        raise ScenarioLoadError(f"Cannot read scenario {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ScenarioLoadError(f"Scenario {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ScenarioLoadError(f"Scenario {path} must be a JSON object")

    world = world_from_dict(data, event_bus=event_bus)
    logger.info(
        f"Scenario loaded from {path}: {len(world.agents)} agents, "
        f"{len(world.cover_nodes)} cover nodes, seed {world.config.rng_seed}"
    )
    return world


def save_scenario(world: World, path: str | Path) -> None:
    """Write *world* to *path* as a scenario file that load_scenario accepts."""
    path = Path(path)
    path.write_text(json.dumps(world_to_dict(world), indent=2), encoding="utf-8")
    logger.info(f"Scenario saved to {path} at tick {world.tick_count}")
