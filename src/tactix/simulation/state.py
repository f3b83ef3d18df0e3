"""AgentState — the closed set of behavioural states an agent can be in.

Each variant is a frozen dataclass; ``AgentState`` is their union.  The
wire form matches the scenario format:

    "Idle"                          Idle()
    {"Moving": {"x": 1, "y": 2}}    Moving(Vector2(1, 2))
    {"Attacking": 7}                Attacking(7)
    {"Suppressing": 7}              Suppressing(7)
    "Downed"                        Downed()
    "Dead"                          Dead()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .vector import Vector2


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Moving:
    target: Vector2


@dataclass(frozen=True)
class Attacking:
    target_id: int


@dataclass(frozen=True)
class Suppressing:
    target_id: int


@dataclass(frozen=True)
class Downed:
    pass


@dataclass(frozen=True)
class Dead:
    pass


AgentState = Union[Idle, Moving, Attacking, Suppressing, Downed, Dead]

# States an agent never leaves once the passive-stats step puts it there
TERMINAL_STATES = (Downed, Dead)

_UNIT_TAGS: dict[str, type] = {"Idle": Idle, "Downed": Downed, "Dead": Dead}
_TARGET_TAGS: dict[str, type] = {"Attacking": Attacking, "Suppressing": Suppressing}


def is_terminal(state: AgentState) -> bool:
    return isinstance(state, TERMINAL_STATES)


def state_from_value(value: Any) -> AgentState:
    """Parse the tagged wire form into an AgentState.

    Raises:
        ValueError: unknown tag or malformed payload.
    """
    if isinstance(value, (Idle, Moving, Attacking, Suppressing, Downed, Dead)):
        return value
    if isinstance(value, str):
        cls = _UNIT_TAGS.get(value)
        if cls is None:
            raise ValueError(f"Unknown agent state: {value!r}")
        return cls()
    if isinstance(value, dict) and len(value) == 1:
        tag, payload = next(iter(value.items()))
        if tag == "Moving":
            try:
                return Moving(Vector2.from_value(payload))
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Malformed Moving target: {payload!r}") from e
        cls = _TARGET_TAGS.get(tag)
        if cls is not None:
            if isinstance(payload, bool) or not isinstance(payload, int):
                raise ValueError(f"{tag} expects an agent id, got {payload!r}")
            return cls(payload)
        raise ValueError(f"Unknown agent state: {tag!r}")
    raise ValueError(f"Malformed agent state: {value!r}")


def state_to_value(state: AgentState) -> str | dict[str, Any]:
    """Inverse of :func:`state_from_value`."""
    if isinstance(state, Moving):
        return {"Moving": state.target.to_dict()}
    if isinstance(state, Attacking):
        return {"Attacking": state.target_id}
    if isinstance(state, Suppressing):
        return {"Suppressing": state.target_id}
    return type(state).__name__
