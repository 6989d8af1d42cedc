import numpy as np


def rmse(arr):
    a = np.asarray(arr, dtype=float)
    return float(np.sqrt(np.mean(a * a))) if a.size else float("nan")


def peak(arr):
    a = np.asarray(arr, dtype=float)
    return float(np.max(np.abs(a))) if a.size else float("nan")


def tilt_deg(direction, baseline):
    """Angle between a written gravity direction and its baseline (deg)."""
    d = np.asarray(direction, dtype=float)
    b = np.asarray(baseline, dtype=float)
    nd, nb = np.linalg.norm(d), np.linalg.norm(b)
    if nd < 1e-9 or nb < 1e-9:
        return 0.0
    c = float(np.clip(np.dot(d, b) / (nd * nb), -1.0, 1.0))
    return float(np.degrees(np.arccos(c)))


def baseline_restored(runtime, bindings, tol=1e-9):
    """
    True when every bound joint currently holds exactly its captured
    gravity (direction and magnitude, within `tol`).
    """
    for b in bindings:
        d, m = runtime.read_gravity(b.joint)
        if abs(m - b.magnitude) > tol:
            return False
        if not np.allclose(d, b.direction, atol=tol, rtol=0.0):
            return False
    return True


def summarize(log):
    """
    Reduce a TraceLogger-style log (dict of lists) to the numbers the
    driver prints: overlay magnitude stats, live gust counts and joint tilt.
    """
    overlay = np.asarray(log["magnitude"], dtype=float)
    live = np.asarray(log["live_gusts"], dtype=float)
    tilt = np.asarray(log["tilt_deg"], dtype=float)
    return {
        "samples": int(overlay.size),
        "peak_overlay": peak(overlay),
        "rms_overlay": rmse(overlay),
        "mean_live_gusts": float(np.mean(live)) if live.size else float("nan"),
        "max_live_gusts": int(np.max(live)) if live.size else 0,
        "mean_tilt_deg": float(np.mean(tilt)) if tilt.size else float("nan"),
        "max_tilt_deg": peak(tilt),
    }
