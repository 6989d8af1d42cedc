"""
Host-side collaborators: the joint runtime (gravity read/write) and a small
bone hierarchy used to discover which spring joints a character has.

The wind engine only ever talks to these through JointRuntime; everything
else here is a plain in-memory stand-in for a real avatar runtime.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Protocol, Sequence, Tuple

import numpy as np


class JointRuntime(Protocol):
    def read_gravity(self, joint: Any) -> Tuple[np.ndarray, float]: ...

    def write_gravity(self, joint: Any, direction: np.ndarray, magnitude: float) -> None: ...


@dataclass(eq=False)
class SpringJoint:
    name: str
    gravity_dir: np.ndarray = field(default_factory=lambda: np.array([0.0, -1.0, 0.0]))
    gravity_power: float = 0.0

    def __post_init__(self):
        self.gravity_dir = np.asarray(self.gravity_dir, dtype=float)


class InMemoryJointRuntime:
    def __init__(self):
        self.writes = 0

    def read_gravity(self, joint: SpringJoint) -> Tuple[np.ndarray, float]:
        return joint.gravity_dir.copy(), float(joint.gravity_power)

    def write_gravity(self, joint: SpringJoint, direction: np.ndarray, magnitude: float) -> None:
        joint.gravity_dir = np.array(direction, dtype=float)
        joint.gravity_power = float(magnitude)
        self.writes += 1


@dataclass(eq=False)
class Bone:
    name: str
    spring: Optional[SpringJoint] = None
    children: List["Bone"] = field(default_factory=list)

    def add(self, child: "Bone") -> "Bone":
        self.children.append(child)
        return child

    def walk(self) -> Iterator["Bone"]:
        # depth-first, self first
        yield self
        for c in self.children:
            yield from c.walk()

    def find(self, name: str) -> Optional["Bone"]:
        for b in self.walk():
            if b.name == name:
                return b
        return None


@dataclass
class Avatar:
    root: Bone
    runtime: Optional[JointRuntime] = None


def collect_joints(root: Bone, affected: Optional[Sequence[Bone]] = None) -> List[SpringJoint]:
    """
    Spring joints the wind should act on.

    With a non-empty `affected` list only joints under those bones are used
    (in list order; a joint under two listed bones appears twice). Otherwise
    every joint under `root`.
    """
    sources = list(affected) if affected else [root]
    joints: List[SpringJoint] = []
    for bone in sources:
        joints.extend(b.spring for b in bone.walk() if b.spring is not None)
    return joints


def chain(name: str, n: int, gravity_dir=(0.0, -1.0, 0.0), gravity_power: float = 0.0) -> Bone:
    """Strand of `n` bones, each carrying a spring joint (hair/cloth demo rig)."""
    head = Bone(name)
    bone = head
    for i in range(n):
        bone = bone.add(Bone(f"{name}.{i:02d}", spring=SpringJoint(
            f"{name}.{i:02d}", np.array(gravity_dir, dtype=float), float(gravity_power),
        )))
    return head


def build_rig(strands: int, joints_per_strand: int, gravity_dir=(0.0, -1.0, 0.0),
              gravity_power: float = 0.0) -> Avatar:
    root = Bone("root")
    head = root.add(Bone("head"))
    for s in range(strands):
        head.add(chain(f"hair{s}", joints_per_strand, gravity_dir, gravity_power))
    # a joint the wind can be told to skip via `affected`
    root.add(Bone("chest")).add(Bone("bust", spring=SpringJoint("bust", np.array(gravity_dir, dtype=float),
                                                                 float(gravity_power))))
    return Avatar(root=root, runtime=InMemoryJointRuntime())
