# src/run_wind.py
from __future__ import annotations
import argparse
import logging
import time
from typing import Dict, List

import numpy as np

from springwind.config import load_config
from springwind.joints import build_rig
from springwind.metrics import baseline_restored, summarize, tilt_deg
from springwind.wind import WindSource


class TraceLogger:
    def __init__(self):
        self.rows: Dict[str, List[float]] = {
            k: [] for k in ["t", "magnitude", "live_gusts", "dir_x", "dir_y", "dir_z", "tilt_deg", "enabled"]
        }

    def log(self, t: float, wind: WindSource):
        _, magnitude = wind.current_force
        self.rows["t"].append(t)
        self.rows["magnitude"].append(magnitude)
        self.rows["live_gusts"].append(len(wind.gusts))
        self.rows["enabled"].append(1.0 if wind.enable_wind else 0.0)

        if wind.bindings:
            b = wind.bindings[0]
            d, _ = wind.runtime.read_gravity(b.joint)
        else:
            b, d = None, np.zeros(3)
        self.rows["dir_x"].append(float(d[0]))
        self.rows["dir_y"].append(float(d[1]))
        self.rows["dir_z"].append(float(d[2]))
        self.rows["tilt_deg"].append(tilt_deg(d, b.direction) if b is not None else 0.0)


def run(cfg: dict, pace: bool = True) -> dict:
    sim = cfg["simulation"]
    rig = cfg["rig"]
    sched = cfg["schedule"].validate()

    avatar = build_rig(rig.strands, rig.joints_per_strand, rig.gravity_dir, rig.gravity_power)
    affected = [avatar.root.find(n) for n in rig.affected]
    missing = [n for n, b in zip(rig.affected, affected) if b is None]
    if missing:
        print(f"Unknown bones in rig.affected: {missing}")
        affected = [b for b in affected if b is not None]

    wind = WindSource(cfg["wind"], name="demo")
    if not wind.load_avatar(avatar, affected):
        print("Wind could not be attached; nothing to simulate.")
        return {"wind": wind, "log": TraceLogger().rows, "restored": False}

    logger = TraceLogger()
    dt = sim.dt
    t = 0.0
    next_log_t = 0.0
    log_dt = 1.0 / sim.log_hz
    restored = None

    wall_start = time.perf_counter()

    while t < sim.total_time:
        # Wind toggles from the schedule
        if sched.disable_at is not None and wind.enable_wind and sched.disable_at <= t and (
                sched.enable_at is None or t < sched.enable_at):
            wind.enable_wind = False
            restored = baseline_restored(wind.runtime, wind.bindings)
        if sched.enable_at is not None and not wind.enable_wind and t >= sched.enable_at:
            wind.enable_wind = True

        wind.update(dt)
        t += dt

        if t >= next_log_t:
            logger.log(t, wind)
            next_log_t += log_dt

        if pace and sim.real_time:
            # pace to real time
            sleep_s = wall_start + t - time.perf_counter()
            if sleep_s > 0:
                time.sleep(sleep_s)

    return {"wind": wind, "log": logger.rows, "restored": restored}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Gust-driven wind on a spring-bone rig")
    parser.add_argument("--config", default="configs/baseline.yaml")
    parser.add_argument("--no-plot", action="store_true")
    parser.add_argument("--no-real-time", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    cfg = load_config(args.config)
    out = run(cfg, pace=not args.no_real_time)
    wind = out["wind"]
    if not out["log"]["t"]:
        return

    metrics = summarize(out["log"])
    print("\n=== Wind Summary ===")
    print(f"Bound joints: {len(wind.bindings)}")
    for k, v in metrics.items():
        if isinstance(v, float):
            print(f"{k}: {v:.3f}")
        else:
            print(f"{k}: {v}")
    if out["restored"] is not None:
        print(f"Baseline restored on disable: {'YES' if out['restored'] else 'NO'}")

    if not args.no_plot:
        from plots import plot_results
        plot_results(out["log"])


if __name__ == "__main__":
    main()
