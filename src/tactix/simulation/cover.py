"""CoverNode — fixed map positions an agent can fall back to."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .vector import Vector2


@dataclass(frozen=True)
class CoverNode:
    id: int
    position: Vector2
    protection: float  # 0.0 (none) to 1.0 (full)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "position": self.position.to_dict(),
            "protection": self.protection,
        }


def nearest_cover(position: Vector2, nodes: Iterable[CoverNode]) -> CoverNode | None:
    """Return the cover node closest to *position*.

    Distance ties go to the lowest cover id, so the answer does not depend
    on the order the nodes were loaded in.
    """
    best: CoverNode | None = None
    best_key: tuple[float, int] | None = None
    for node in nodes:
        key = (position.distance(node.position), node.id)
        if best_key is None or key < best_key:
            best, best_key = node, key
    return best
