import numpy as np
import pytest

from springwind.config import RigConfig, Schedule, SimulationConfig, WindConfig
from springwind.errors import WindConfigError
from springwind.metrics import peak, rmse, summarize, tilt_deg

from run_wind import run


def _cfg(**schedule):
    return {
        "simulation": SimulationConfig(dt=1.0 / 60.0, total_time=10.0, real_time=False, log_hz=20),
        "wind": WindConfig(seed=0),
        "rig": RigConfig(strands=2, joints_per_strand=3, affected=("head",)),
        "schedule": Schedule(**schedule),
    }


def test_rmse_and_peak():
    assert rmse([3.0, -3.0]) == pytest.approx(3.0)
    assert peak([0.1, -0.4, 0.2]) == pytest.approx(0.4)
    assert np.isnan(rmse([]))


def test_tilt_deg():
    assert tilt_deg([1, 0, 0], [0, 1, 0]) == pytest.approx(90.0)
    assert tilt_deg([0, 2, 0], [0, 1, 0]) == pytest.approx(0.0)
    assert tilt_deg([0, 0, 0], [0, 1, 0]) == 0.0


def test_run_drives_the_rig():
    out = run(_cfg(), pace=False)
    log = out["log"]
    assert len(out["wind"].bindings) == 6
    assert len(log["t"]) == pytest.approx(200, abs=2)
    m = summarize(log)
    assert m["max_live_gusts"] >= 1
    assert 0.0 < m["peak_overlay"]
    assert m["max_tilt_deg"] > 0.0
    assert out["restored"] is None


def test_disabled_window_holds_baseline():
    out = run(_cfg(disable_at=4.0, enable_at=6.0), pace=False)
    log = out["log"]
    assert out["restored"] is True
    off = [i for i, e in enumerate(log["enabled"]) if e == 0.0]
    assert off
    assert all(log["magnitude"][i] == 0.0 for i in off)
    assert all(log["tilt_deg"][i] == pytest.approx(0.0) for i in off)
    assert log["enabled"][-1] == 1.0


def test_unknown_affected_bone_still_runs(capsys):
    cfg = _cfg()
    cfg["rig"] = RigConfig(strands=1, joints_per_strand=2, affected=("head", "tail"))
    out = run(cfg, pace=False)
    assert "tail" in capsys.readouterr().out
    assert len(out["wind"].bindings) == 2


def test_run_rejects_reenable_before_disable():
    with pytest.raises(WindConfigError):
        run(_cfg(disable_at=6.0, enable_at=4.0), pace=False)


def test_disable_without_reenable_stays_off():
    out = run(_cfg(disable_at=4.0), pace=False)
    assert out["restored"] is True
    assert out["log"]["enabled"][-1] == 0.0
    assert out["log"]["magnitude"][-1] == 0.0
