"""Console formatting for tick snapshots.

Pure presentation: takes the structured TickSnapshot produced by the core
and renders the fixed-width report printed by the CLI.  Two runs of the
same scenario produce byte-identical reports.
"""

from __future__ import annotations

import json

from tactix.simulation.snapshot import AgentSnapshot, TickSnapshot

_RULE = "=" * 40


def format_agent_row(agent: AgentSnapshot) -> str:
    icon = "💀" if agent.health <= 0 else "🟢"
    return (
        f"{icon} [Agent {agent.id:02d} | T{agent.team}] "
        f"HP: {agent.health:>5.1f} | Mor: {agent.morale * 100.0:>3.0f}% | {agent.description}"
    )


def format_tick_report(snapshot: TickSnapshot) -> str:
    lines = [
        _RULE,
        f"           TICK {snapshot.tick} REPORT",
        _RULE,
    ]
    lines.extend(format_agent_row(a) for a in snapshot.agents)
    lines.append("-" * 40)
    return "\n".join(lines)


def format_tick_json(snapshot: TickSnapshot) -> str:
    """One JSON line per snapshot, keys sorted for stable output."""
    return json.dumps(snapshot.to_dict(), sort_keys=True)
