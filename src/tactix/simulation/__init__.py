"""Simulation subsystem — agents, perception, decisions, resolution, world."""
from .actions import AgentAction, Attack, HoldPosition, MoveTo
from .agent import Agent, WeaponStats
from .cover import CoverNode, nearest_cover
from .decision import CRITICAL_HEALTH, COVER_REACHED_DISTANCE, decide
from .perception import PerceptionData, gather_perceptions, perceive
from .resolver import ARRIVAL_EPSILON, ActionResolver, AttackOutcome
from .rng import SeededRng
from .scenario import (
    ScenarioLoadError,
    ScenarioModel,
    load_scenario,
    save_scenario,
    world_from_dict,
    world_to_dict,
)
from .snapshot import AgentSnapshot, TickSnapshot, describe_state
from .state import (
    AgentState,
    Attacking,
    Dead,
    Downed,
    Idle,
    Moving,
    Suppressing,
    state_from_value,
    state_to_value,
)
from .vector import Vector2
from .world import SimulationConfig, World

__all__ = [
    "ARRIVAL_EPSILON",
    "COVER_REACHED_DISTANCE",
    "CRITICAL_HEALTH",
    "ActionResolver",
    "Agent",
    "AgentAction",
    "AgentSnapshot",
    "AgentState",
    "Attack",
    "AttackOutcome",
    "Attacking",
    "CoverNode",
    "Dead",
    "Downed",
    "HoldPosition",
    "Idle",
    "MoveTo",
    "Moving",
    "PerceptionData",
    "ScenarioLoadError",
    "ScenarioModel",
    "SeededRng",
    "SimulationConfig",
    "Suppressing",
    "TickSnapshot",
    "Vector2",
    "WeaponStats",
    "World",
    "decide",
    "describe_state",
    "gather_perceptions",
    "load_scenario",
    "nearest_cover",
    "perceive",
    "save_scenario",
    "state_from_value",
    "state_to_value",
    "world_from_dict",
    "world_to_dict",
]
