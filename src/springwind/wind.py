"""
Per-character wind source.

Owns one EngineState (gusts + spawn countdown) and the joint bindings
captured at load time. The host calls `update(dt)` once per frame.

Load failures never raise into the host: they are logged and leave the
source inert (`active == False`), so the character simply gets no wind.
"""
from __future__ import annotations
import dataclasses
import logging
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from springwind import compositor
from springwind.compositor import JointBinding
from springwind.config import WindConfig
from springwind.errors import MissingRuntimeError, WindError
from springwind.gusts import EngineState, GustEvent, GustGenerator, RandomSource
from springwind.joints import Avatar, Bone, JointRuntime, collect_joints

logger = logging.getLogger(__name__)


class WindSource:
    def __init__(self, config: Optional[WindConfig] = None, rng: Optional[RandomSource] = None,
                 name: str = "character"):
        # own copy, so setters and the enable flag stay per character
        self.config = dataclasses.replace(config) if config is not None else WindConfig()
        self.name = name
        self.state = EngineState(enabled=self.config.enable_wind)
        self.generator = GustGenerator(self.config, rng)
        self.active = True
        self._runtime: Optional[JointRuntime] = None
        self._bindings: List[JointBinding] = []
        self._force: Tuple[np.ndarray, float] = (np.zeros(3), 0.0)

    # --- enable flag -------------------------------------------------------

    @property
    def enable_wind(self) -> bool:
        return self.state.enabled

    @enable_wind.setter
    def enable_wind(self, value: bool) -> None:
        value = bool(value)
        if value == self.state.enabled:
            return
        self.state.enabled = value
        if value:
            logger.info("%s: wind enabled", self.name)
        else:
            logger.info("%s: wind disabled, restoring %d joints", self.name, len(self._bindings))
            self.disable()

    def disable(self) -> None:
        """Write every joint's baseline back. Gusts and countdown stay frozen as they are."""
        self._force = (np.zeros(3), 0.0)
        if self._runtime is not None:
            compositor.restore(self._bindings, self._runtime)

    # --- load / unload -----------------------------------------------------

    def load(self, joints: Sequence[Any], runtime: Optional[JointRuntime]) -> bool:
        self._bindings = []
        self._runtime = None
        try:
            if runtime is None:
                raise MissingRuntimeError("no joint runtime available")
            self.config.validate()
            bindings = compositor.capture(joints, runtime)
        except WindError as exc:
            logger.warning("%s: %s, wind disabled for this character", self.name, exc)
            self.active = False
            return False

        self._runtime = runtime
        self._bindings = bindings
        self.active = True
        logger.info("%s: bound %d spring joints", self.name, len(bindings))
        return True

    def load_avatar(self, avatar: Avatar, affected: Optional[Sequence[Bone]] = None) -> bool:
        if avatar.runtime is None:
            logger.error("%s: avatar '%s' has no joint runtime, aborting", self.name, avatar.root.name)
            self._bindings = []
            self._runtime = None
            self.active = False
            return False
        return self.load(collect_joints(avatar.root, affected), avatar.runtime)

    def unload(self) -> None:
        # gusts and countdown are kept across unload/load
        self._bindings = []
        self._runtime = None

    # --- per frame ---------------------------------------------------------

    def update(self, dt: float) -> None:
        if not self.active or not self.enable_wind:
            return

        self.generator.tick(self.state, dt, self.state.enabled)
        direction, magnitude = compositor.composite(self.state.gusts)
        self._force = (direction, magnitude)
        if self._runtime is not None:
            compositor.apply(self._bindings, self._runtime, direction, magnitude)

    # --- read access -------------------------------------------------------

    @property
    def loaded(self) -> bool:
        return self._runtime is not None

    @property
    def bindings(self) -> Tuple[JointBinding, ...]:
        return tuple(self._bindings)

    @property
    def runtime(self) -> Optional[JointRuntime]:
        return self._runtime

    @property
    def gusts(self) -> List[GustEvent]:
        return self.state.gusts

    @property
    def spawn_countdown(self) -> float:
        return self.state.spawn_countdown

    @property
    def current_force(self) -> Tuple[np.ndarray, float]:
        return self._force[0].copy(), self._force[1]

    @property
    def base_orientation(self) -> np.ndarray:
        return np.array(self.config.base_orientation, dtype=float)

    @base_orientation.setter
    def base_orientation(self, value) -> None:
        x, y, z = value
        self.config.base_orientation = (float(x), float(y), float(z))

    @property
    def strength_factor(self) -> float:
        return self.config.strength_factor

    @strength_factor.setter
    def strength_factor(self, value: float) -> None:
        self.config.strength_factor = float(value)

    @property
    def time_factor(self) -> float:
        return self.config.time_factor

    @time_factor.setter
    def time_factor(self, value: float) -> None:
        self.config.time_factor = float(value)

    @property
    def orientation_random_power(self) -> float:
        return self.config.orientation_random_power

    @orientation_random_power.setter
    def orientation_random_power(self, value: float) -> None:
        self.config.orientation_random_power = float(value)
