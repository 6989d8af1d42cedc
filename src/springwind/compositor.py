from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np

from springwind.errors import NoJointsError
from springwind.gusts import GustEvent, normalize
from springwind.joints import JointRuntime


@dataclass(frozen=True, eq=False)
class JointBinding:
    joint: Any
    direction: np.ndarray   # gravity at capture time, restored on disable
    magnitude: float

    def __post_init__(self):
        d = np.array(self.direction, dtype=float)
        d.flags.writeable = False
        object.__setattr__(self, "direction", d)


def capture(joints: Sequence[Any], runtime: JointRuntime) -> List[JointBinding]:
    if len(joints) == 0:
        raise NoJointsError("no affected joints found")
    bindings = []
    for j in joints:
        d, m = runtime.read_gravity(j)
        bindings.append(JointBinding(j, d, float(m)))
    return bindings


def composite(gusts: Iterable[GustEvent]) -> Tuple[np.ndarray, float]:
    """
    Sum every live gust into one (direction, magnitude) pair.

    The direction is NOT renormalized: overlapping gusts push harder
    sideways than a single one.
    """
    direction = np.zeros(3)
    magnitude = 0.0
    for g in gusts:
        direction += g.orientation
        magnitude += g.intensity
    return direction, magnitude


def apply(bindings: Sequence[JointBinding], runtime: JointRuntime,
          direction: np.ndarray, magnitude: float) -> None:
    for b in bindings:
        runtime.write_gravity(b.joint, normalize(b.direction + direction), b.magnitude + magnitude)


def restore(bindings: Sequence[JointBinding], runtime: JointRuntime) -> None:
    for b in bindings:
        runtime.write_gravity(b.joint, b.direction.copy(), b.magnitude)
