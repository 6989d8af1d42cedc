from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Optional, Tuple

import yaml

from springwind.errors import WindConfigError


Range = Tuple[float, float]

RANGE_FIELDS = ("strength_range", "interval_range", "rise_range", "sit_range")


def _pair(value) -> Range:
    lo, hi = value
    return float(lo), float(hi)


def _opt_float(v):
    return None if v is None else float(v)


@dataclass
class WindConfig:
    enable_wind: bool = True
    base_orientation: Tuple[float, float, float] = (1.0, 0.0, 0.0)  # world space
    orientation_random_power: float = 0.2                         # 0..~1
    strength_range: Range = (0.03, 0.06)
    interval_range: Range = (0.7, 1.9)   # s between gusts
    rise_range: Range = (0.4, 0.6)       # s to peak
    sit_range: Range = (1.3, 1.8)        # s peak -> 0
    strength_factor: float = 1.0
    time_factor: float = 1.0
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, d: dict) -> "WindConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise WindConfigError(f"unknown wind settings: {sorted(unknown)}")

        kw = {}
        for k, v in d.items():
            if k in RANGE_FIELDS:
                kw[k] = _pair(v)
            elif k == "base_orientation":
                x, y, z = v
                kw[k] = (float(x), float(y), float(z))
            elif k == "enable_wind":
                kw[k] = bool(v)
            elif k == "seed":
                kw[k] = None if v is None else int(v)
            else:
                kw[k] = float(v)
        return cls(**kw)

    def validate(self) -> "WindConfig":
        for name in RANGE_FIELDS:
            lo, hi = getattr(self, name)
            if lo > hi:
                raise WindConfigError(f"{name}: min {lo} > max {hi}")
        return self


@dataclass
class SimulationConfig:
    dt: float = 1.0 / 60.0
    total_time: float = 20.0
    real_time: bool = False
    log_hz: int = 20


@dataclass
class RigConfig:
    strands: int = 4
    joints_per_strand: int = 5
    gravity_dir: Tuple[float, float, float] = (0.0, -1.0, 0.0)
    gravity_power: float = 0.0
    affected: Tuple[str, ...] = ()   # strand names; empty = whole rig


@dataclass
class Schedule:
    disable_at: Optional[float] = None
    enable_at: Optional[float] = None

    def validate(self) -> "Schedule":
        if self.disable_at is not None and self.enable_at is not None and self.enable_at <= self.disable_at:
            raise WindConfigError(f"schedule: enable_at {self.enable_at} must come after disable_at {self.disable_at}")
        return self


def load_config(path: str) -> dict:
    """
    Read a run configuration from YAML.

    Returns a dict with "simulation", "wind", "rig" and "schedule" entries,
    each already converted to its dataclass. Missing sections use defaults.
    """
    with open(path, "r") as f:
        cfg = yaml.safe_load(f) or {}

    sim = cfg.get("simulation", {})
    rig = cfg.get("rig", {})
    sched = cfg.get("schedule", {})

    return {
        "simulation": SimulationConfig(
            dt=float(sim.get("dt", SimulationConfig.dt)),
            total_time=float(sim.get("total_time", SimulationConfig.total_time)),
            real_time=bool(sim.get("real_time", SimulationConfig.real_time)),
            log_hz=int(sim.get("log_hz", SimulationConfig.log_hz)),
        ),
        "wind": WindConfig.from_dict(cfg.get("wind", {})).validate(),
        "rig": RigConfig(
            strands=int(rig.get("strands", RigConfig.strands)),
            joints_per_strand=int(rig.get("joints_per_strand", RigConfig.joints_per_strand)),
            gravity_dir=tuple(float(c) for c in rig.get("gravity_dir", RigConfig.gravity_dir)),
            gravity_power=float(rig.get("gravity_power", RigConfig.gravity_power)),
            affected=tuple(rig.get("affected") or ()),
        ),
        "schedule": Schedule(
            disable_at=_opt_float(sched.get("disable_at")),
            enable_at=_opt_float(sched.get("enable_at")),
        ).validate(),
    }
