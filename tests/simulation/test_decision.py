"""Unit tests for the decide() priority cascade."""

from __future__ import annotations

import pytest

from tactix.simulation.actions import Attack, HoldPosition, MoveTo
from tactix.simulation.agent import Agent, WeaponStats
from tactix.simulation.decision import COVER_REACHED_DISTANCE, CRITICAL_HEALTH, decide
from tactix.simulation.perception import PerceptionData
from tactix.simulation.vector import Vector2

pytestmark = pytest.mark.unit


def _make_agent(health: float = 100.0, pos: tuple[float, float] = (0.0, 0.0)) -> Agent:
    return Agent(
        id=1,
        team=1,
        position=Vector2(*pos),
        weapon=WeaponStats(range=50.0, accuracy=0.8, damage=20.0, fire_rate=1.0),
        health=health,
    )


COVER = Vector2(10.0, 0.0)


class TestCriticalSurvival:
    def test_low_health_runs_to_cover(self):
        """health 20, cover 10 away, no enemies -> MoveTo(cover)."""
        action = decide(_make_agent(health=20.0), PerceptionData(nearest_cover=COVER))
        assert action == MoveTo(COVER)

    def test_low_health_prefers_cover_over_attack(self):
        p = PerceptionData(visible_enemies=(2,), nearest_cover=COVER)
        assert decide(_make_agent(health=10.0), p) == MoveTo(COVER)

    def test_low_health_no_cover_falls_through_to_attack(self):
        p = PerceptionData(visible_enemies=(2,))
        assert decide(_make_agent(health=10.0), p) == Attack(2)

    def test_low_health_no_cover_no_enemies_holds(self):
        assert decide(_make_agent(health=10.0), PerceptionData()) == HoldPosition()

    def test_already_in_cover_does_not_move(self):
        """No move is issued when cover is within 1.0."""
        agent = _make_agent(health=10.0, pos=(9.5, 0.0))
        p = PerceptionData(visible_enemies=(2,), nearest_cover=COVER)
        assert decide(agent, p) == Attack(2)

    def test_exactly_at_threshold_distance_does_not_move(self):
        agent = _make_agent(health=10.0, pos=(10.0 - COVER_REACHED_DISTANCE, 0.0))
        assert decide(agent, PerceptionData(nearest_cover=COVER)) == HoldPosition()

    def test_threshold_is_strict(self):
        """Exactly CRITICAL_HEALTH is not critical."""
        agent = _make_agent(health=CRITICAL_HEALTH)
        assert decide(agent, PerceptionData(nearest_cover=COVER)) == HoldPosition()


class TestSelfPreservation:
    def test_under_fire_runs_to_cover(self):
        p = PerceptionData(visible_enemies=(2,), nearest_cover=COVER, is_under_fire=True)
        assert decide(_make_agent(), p) == MoveTo(COVER)

    def test_under_fire_in_cover_fights_back(self):
        agent = _make_agent(pos=(10.2, 0.3))
        p = PerceptionData(visible_enemies=(2,), nearest_cover=COVER, is_under_fire=True)
        assert decide(agent, p) == Attack(2)

    def test_under_fire_no_cover_fights_back(self):
        p = PerceptionData(visible_enemies=(4, 2), is_under_fire=True)
        assert decide(_make_agent(), p) == Attack(4)


class TestEngagement:
    def test_attacks_first_visible_enemy(self):
        p = PerceptionData(visible_enemies=(7, 3, 5), nearest_cover=COVER)
        assert decide(_make_agent(), p) == Attack(7)

    def test_healthy_not_under_fire_ignores_cover(self):
        assert decide(_make_agent(), PerceptionData(nearest_cover=COVER)) == HoldPosition()


class TestPurity:
    def test_same_input_same_output(self):
        agent = _make_agent(health=40.0)
        p = PerceptionData(visible_enemies=(2, 3), nearest_cover=COVER, is_under_fire=True)
        results = {decide(agent, p) for _ in range(20)}
        assert results == {MoveTo(COVER)}

    def test_does_not_mutate_agent(self):
        agent = _make_agent(health=20.0)
        before = agent.to_dict()
        decide(agent, PerceptionData(visible_enemies=(2,), nearest_cover=COVER))
        assert agent.to_dict() == before
