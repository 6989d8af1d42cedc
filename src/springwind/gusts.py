from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import List, Optional, Protocol

import numpy as np

from springwind.config import WindConfig

logger = logging.getLogger(__name__)

EPS = 1e-9


class RandomSource(Protocol):
    def uniform(self, low: float, high: float) -> float: ...


def normalize(v) -> np.ndarray:
    v = np.asarray(v, dtype=float)
    n = float(np.linalg.norm(v))
    if n < EPS:
        return np.zeros(3)
    return v / n


@dataclass(eq=False)
class GustEvent:
    """One gust: ramps linearly up to `peak` over `rise` s, then back to 0 over `sit` s."""
    orientation: np.ndarray
    rise: float
    sit: float
    peak: float
    elapsed: float = 0.0
    total: float = field(init=False)

    def __post_init__(self):
        self.orientation = np.asarray(self.orientation, dtype=float)
        self.total = self.rise + self.sit

    @property
    def intensity(self) -> float:
        if self.elapsed < self.rise:
            return self.peak * self.elapsed / self.rise
        return self.peak * (1.0 - (self.elapsed - self.rise) / self.sit)

    @property
    def expired(self) -> bool:
        return self.elapsed >= self.total


@dataclass
class EngineState:
    # 0 so the first enabled tick spawns straight away
    spawn_countdown: float = 0.0
    enabled: bool = True
    gusts: List[GustEvent] = field(default_factory=list)


class GustGenerator:
    def __init__(self, config: WindConfig, rng: Optional[RandomSource] = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

    def tick(self, state: EngineState, dt: float, enabled: bool = True) -> None:
        """
        Advance the gust timeline by dt.

        While disabled this is a strict no-op: neither the countdown nor any
        gust ages, so re-enabling resumes exactly where the wind stopped.
        At most one gust spawns per tick however large dt is.
        """
        if not enabled:
            return

        state.spawn_countdown -= dt
        if state.spawn_countdown <= 0.0:
            self.spawn(state)

        # age first, then drop expired ones; surviving gusts keep their order
        for g in state.gusts:
            g.elapsed += dt
        state.gusts[:] = [g for g in state.gusts if not g.expired]

    def spawn(self, state: EngineState) -> GustEvent:
        """
        Reset the countdown and append a new gust to `state`.

        Draw order: interval, jitter x/y/z, rise, sit, strength.
        """
        c = self.config
        u = self.rng.uniform

        state.spawn_countdown = float(u(*c.interval_range)) * c.time_factor

        p = c.orientation_random_power
        base = normalize(c.base_orientation)
        jitter = np.array([u(-p, p), u(-p, p), u(-p, p)], dtype=float)
        orientation = normalize(base + jitter)
        if not orientation.any():
            # base cancelled exactly by jitter
            orientation = base

        gust = GustEvent(
            orientation=orientation,
            rise=float(u(*c.rise_range)),
            sit=float(u(*c.sit_range)),
            peak=float(u(*c.strength_range)) * c.strength_factor,
        )
        state.gusts.append(gust)
        logger.debug(
            "Spawned gust dir=%s peak=%.4f rise=%.3fs sit=%.3fs (next in %.3fs)",
            np.round(gust.orientation, 3), gust.peak, gust.rise, gust.sit, state.spawn_countdown,
        )
        return gust
