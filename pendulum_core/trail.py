#!/usr/bin/env python3
"""
Fading trail of the end effector.

Samples go in at the newest end and expire from the oldest end once their age
exceeds the time-to-live. Opacity fades linearly from 1 at age 0 to 0 at age
ttl. Timestamps come from the monotonic simulation clock, so the deque stays
ordered oldest-to-newest without any sorting.
"""
from collections import deque
from typing import Deque, Iterator, List, Tuple
from .data_models import TrailSample


class TrailBuffer:
    """Time-windowed record of past end-effector positions."""

    def __init__(self):
        self._samples: Deque[TrailSample] = deque()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[TrailSample]:
        return iter(self._samples)

    def append(self, position: Tuple[float, float], timestamp: float) -> None:
        """Push a fully opaque sample at the newest end."""
        self._samples.append(TrailSample((position[0], position[1]), timestamp, 1.0))

    def expire(self, current_time: float, ttl: float) -> None:
        """
        Drop samples from the oldest end while they are older than ttl.

        A sample of age exactly ttl is kept (it is drawn fully transparent).
        Call after append so the newest sample survives its own tick.
        """
        samples = self._samples
        while samples and current_time - samples[0].timestamp > ttl:
            samples.popleft()

    def refresh_opacity(self, current_time: float, ttl: float) -> None:
        for sample in self._samples:
            sample.opacity = 1.0 - (current_time - sample.timestamp) / ttl

    def clear(self) -> None:
        self._samples.clear()

    def samples(self) -> List[Tuple[float, float, float]]:
        """Snapshot of (x, y, opacity), oldest first."""
        return [(s.position[0], s.position[1], s.opacity) for s in self._samples]
