"""EventBus — pub/sub channel for simulation events.

The World and its ActionResolver publish what happens during a tick
(``attack_hit``, ``attack_missed``, ``agent_killed``, ``tick_completed``,
``battle_over``) so presentation code can observe a run without the core
knowing who is listening.  Publishing never blocks and never fails the
tick: a full subscriber queue drops its oldest message.

Messages are dicts of the form ``{"type": <event>, "data": <payload>}``.
"""

from __future__ import annotations

import queue
import threading


class EventBus:
    """Fan-out of simulation events to per-subscriber queues."""

    def __init__(self, maxsize: int = 1000) -> None:
        self._lock = threading.Lock()
        self._maxsize = maxsize
        self._subscribers: list[tuple[queue.Queue, frozenset[str] | None]] = []

    def subscribe(self, *event_types: str) -> queue.Queue:
        """Return a Queue receiving events of *event_types* (all if none given)."""
        q: queue.Queue = queue.Queue(maxsize=self._maxsize)
        wanted = frozenset(event_types) if event_types else None
        with self._lock:
            self._subscribers.append((q, wanted))
        return q

    def unsubscribe(self, q: queue.Queue) -> None:
        with self._lock:
            self._subscribers = [(s, w) for s, w in self._subscribers if s is not q]

    def publish(self, event_type: str, data: dict | None = None) -> None:
        msg: dict = {"type": event_type}
        if data is not None:
            msg["data"] = data
        with self._lock:
            for q, wanted in self._subscribers:
                if wanted is not None and event_type not in wanted:
                    continue
                # Each subscriber gets its own envelope
                envelope = dict(msg)
                try:
                    q.put_nowait(envelope)
                except queue.Full:
                    # Drop oldest so the latest tick is always observable
                    try:
                        q.get_nowait()
                    except queue.Empty:
                        pass
                    try:
                        q.put_nowait(envelope)
                    except queue.Full:
                        # Still full; drop this message
                        pass


def drain(q: queue.Queue) -> list[dict]:
    """Pop every message currently waiting in *q*."""
    messages: list[dict] = []
    while True:
        try:
            messages.append(q.get_nowait())
        except queue.Empty:
            return messages
