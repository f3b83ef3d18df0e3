"""Unit tests for gather_perceptions / perceive."""

from __future__ import annotations

import pytest

from tactix.simulation.agent import Agent, WeaponStats
from tactix.simulation.cover import CoverNode, nearest_cover
from tactix.simulation.perception import PerceptionData, gather_perceptions, perceive
from tactix.simulation.state import Attacking, Dead, Downed, Idle
from tactix.simulation.vector import Vector2
from tactix.simulation.world import World

pytestmark = pytest.mark.unit


# --------------------------------------------------------------------------
# Helpers
# --------------------------------------------------------------------------

def _make_agent(
    agent_id: int,
    team: int,
    pos: tuple[float, float] = (0.0, 0.0),
    health: float = 100.0,
    weapon_range: float = 50.0,
    **kwargs,
) -> Agent:
    return Agent(
        id=agent_id,
        team=team,
        position=Vector2(*pos),
        weapon=WeaponStats(range=weapon_range, accuracy=0.8, damage=20.0, fire_rate=1.0),
        health=health,
        **kwargs,
    )


def _cover(cover_id: int, pos: tuple[float, float]) -> CoverNode:
    return CoverNode(id=cover_id, position=Vector2(*pos), protection=0.5)


# --------------------------------------------------------------------------
# Nearest cover
# --------------------------------------------------------------------------

class TestNearestCover:
    def test_no_cover(self):
        assert nearest_cover(Vector2(0, 0), []) is None

    def test_picks_closest(self):
        nodes = [_cover(1, (10, 0)), _cover(2, (3, 4)), _cover(3, (-8, 0))]
        assert nearest_cover(Vector2(0, 0), nodes).id == 2

    def test_tie_goes_to_lowest_id(self):
        """Equidistant cover resolves to the lowest id regardless of order."""
        nodes = [_cover(9, (5, 0)), _cover(4, (-5, 0)), _cover(6, (0, 5))]
        assert nearest_cover(Vector2(0, 0), nodes).id == 4

    def test_perception_reports_cover_position(self):
        a = _make_agent(1, 1)
        p = perceive(a, [a], [_cover(1, (2, 2))])
        assert p.nearest_cover == Vector2(2, 2)

    def test_perception_without_cover(self):
        a = _make_agent(1, 1)
        assert perceive(a, [a], []).nearest_cover is None


# --------------------------------------------------------------------------
# Visible enemies
# --------------------------------------------------------------------------

class TestVisibleEnemies:
    def test_never_sees_itself(self):
        a = _make_agent(1, 1)
        assert 1 not in perceive(a, [a], []).visible_enemies

    def test_teammates_not_visible(self):
        a = _make_agent(1, 1)
        mate = _make_agent(2, 1, (5, 0))
        assert perceive(a, [a, mate], []).visible_enemies == ()

    def test_enemy_in_range_visible(self):
        a = _make_agent(1, 1, weapon_range=20.0)
        e = _make_agent(2, 2, (20, 0))
        assert perceive(a, [a, e], []).visible_enemies == (2,)

    def test_enemy_out_of_range_hidden(self):
        a = _make_agent(1, 1, weapon_range=20.0)
        e = _make_agent(2, 2, (20.5, 0))
        assert perceive(a, [a, e], []).visible_enemies == ()

    @pytest.mark.parametrize("health", [0.0, -15.0])
    def test_dead_enemy_hidden(self, health):
        """Agents with health <= 0 never appear in visible_enemies."""
        a = _make_agent(1, 1)
        corpse = _make_agent(2, 2, (5, 0), health=health)
        assert perceive(a, [a, corpse], []).visible_enemies == ()

    @pytest.mark.parametrize("state", [Downed(), Dead()])
    def test_terminal_state_enemy_hidden(self, state):
        a = _make_agent(1, 1)
        e = _make_agent(2, 2, (5, 0), state=state)
        assert perceive(a, [a, e], []).visible_enemies == ()

    def test_roster_order_preserved(self):
        a = _make_agent(1, 1)
        far = _make_agent(5, 2, (40, 0))
        near = _make_agent(3, 2, (2, 0))
        assert perceive(a, [a, far, near], []).visible_enemies == (5, 3)


# --------------------------------------------------------------------------
# Under fire
# --------------------------------------------------------------------------

class TestUnderFire:
    def test_enemy_attacking_me(self):
        a = _make_agent(1, 1)
        e = _make_agent(2, 2, (100, 0), state=Attacking(1))
        assert perceive(a, [a, e], []).is_under_fire is True

    def test_under_fire_even_from_out_of_range_enemy(self):
        a = _make_agent(1, 1, weapon_range=5.0)
        e = _make_agent(2, 2, (100, 0), state=Attacking(1))
        p = perceive(a, [a, e], [])
        assert p.is_under_fire is True
        assert p.visible_enemies == ()

    def test_enemy_attacking_someone_else(self):
        a = _make_agent(1, 1)
        mate = _make_agent(3, 1)
        e = _make_agent(2, 2, (10, 0), state=Attacking(3))
        assert perceive(a, [a, mate, e], []).is_under_fire is False

    def test_dead_attacker_does_not_count(self):
        a = _make_agent(1, 1)
        e = _make_agent(2, 2, (10, 0), health=0.0, state=Attacking(1))
        assert perceive(a, [a, e], []).is_under_fire is False

    def test_teammate_attacking_does_not_count(self):
        a = _make_agent(1, 1)
        mate = _make_agent(2, 1, state=Attacking(1))
        assert perceive(a, [a, mate], []).is_under_fire is False


# --------------------------------------------------------------------------
# gather_perceptions
# --------------------------------------------------------------------------

class TestGatherPerceptions:
    def test_total_mapping_including_dead(self):
        agents = [
            _make_agent(1, 1),
            _make_agent(2, 2, (5, 0), health=0.0, state=Dead()),
            _make_agent(3, 2, (6, 0)),
        ]
        world = World(agents)
        perceptions = gather_perceptions(world)
        assert set(perceptions) == {1, 2, 3}
        assert all(isinstance(p, PerceptionData) for p in perceptions.values())
        assert perceptions[1].visible_enemies == (3,)

    def test_does_not_mutate_world(self):
        agents = [_make_agent(1, 1), _make_agent(2, 2, (5, 0), state=Attacking(1))]
        world = World(agents, [_cover(1, (3, 3))])
        before = [a.to_dict() for a in world.agents]
        gather_perceptions(world)
        assert [a.to_dict() for a in world.agents] == before
        assert world.tick_count == 0

    def test_idle_world_defaults(self):
        world = World([_make_agent(1, 1, state=Idle())])
        assert gather_perceptions(world)[1] == PerceptionData()
