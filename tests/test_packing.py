import numpy as np
import pytest

from diskpack.configuration import random_configuration
from diskpack.disk import Disk
from diskpack.errors import DegenerateGeometryError
from diskpack.metrics import bounding_box
from diskpack.packing import PackingController, PackingHistory, PackingPhase
from diskpack.params import RunParams


def test_history_counts_consecutive_stable_cycles():
    h = PackingHistory(prev_area=100.0)
    assert h.record(50.0, 1e-3) == pytest.approx(0.5)
    assert (h.cycle_count, h.stable_count) == (1, 0)
    h.record(50.01, 1e-3)
    h.record(50.02, 1e-3)
    assert (h.cycle_count, h.stable_count) == (3, 2)
    h.record(40.0, 1e-3)
    assert (h.cycle_count, h.stable_count) == (4, 0)
    assert h.prev_area == 40.0
    assert h.areas == [50.0, 50.01, 50.02, 40.0]


def test_zero_disks_cannot_be_packed():
    with pytest.raises(DegenerateGeometryError):
        PackingController([], RunParams(N=0))


def test_cycle_start_randomises_velocities(rng):
    disks = [Disk.at(2.0, 2.0, 0.5), Disk.at(5.0, 5.0, 0.5)]
    PackingController(disks, RunParams(), rng)
    for d in disks:
        assert np.all(np.abs(d.v) <= 0.5)
        assert np.any(d.v != 0.0)


def test_step_runs_until_stop_time(rng):
    params = RunParams(dt=0.1, T=1, stop_time=0.25, max_cycles=5)
    ctl = PackingController([Disk.at(5.0, 5.0, 1.0)], params, rng)
    assert ctl.step() is PackingPhase.RUNNING_CYCLE
    assert ctl.t == pytest.approx(0.1)
    assert ctl.step() is PackingPhase.RUNNING_CYCLE
    ctl.step()
    assert ctl.history.cycle_count == 1
    # 새 사이클은 t = 0 에서 다시 시작하고 상자는 경계 상자로 줄어듦
    assert ctl.t == 0.0
    assert ctl.box.Lx == pytest.approx(2.0)
    assert ctl.box.Ly == pytest.approx(2.0)


def test_cycle_recentres_disks(rng):
    disks = [Disk.at(4.0, 6.0, 0.5), Disk.at(6.0, 3.0, 0.7)]
    params = RunParams(dt=0.01, T=10, stop_time=0.5, max_cycles=1)
    PackingController(disks, params, rng).run()
    bb = bounding_box(disks)
    assert bb.xmin == pytest.approx(0.0, abs=1e-9)
    assert bb.ymin == pytest.approx(0.0, abs=1e-9)


def test_single_disk_converges_by_stability(rng):
    params = RunParams(dt=0.01, T=20, stop_time=0.5, stable_threshold=3, max_cycles=100)
    cycles = []
    done = []
    ctl = PackingController([Disk.at(5.0, 5.0, 0.5)], params, rng,
                            on_cycle=lambda c, a: cycles.append((c, a)), on_converged=done.append)
    result = ctl.run()
    assert result.stable
    assert result.cycles == 4
    assert result.area == pytest.approx(1.0)
    assert [c for c, _ in cycles] == [1, 2, 3, 4]
    assert done == [result]
    assert ctl.converged
    # 수렴 후 step() 은 아무것도 하지 않음
    assert ctl.step() is PackingPhase.CONVERGED
    assert ctl.history.cycle_count == 4


def test_max_cycles_bounds_the_run(rng):
    params = RunParams(dt=0.01, T=50, stop_time=0.2, max_cycles=2)
    disks = random_configuration(3, params.box, rng=rng)
    result = PackingController(disks, params, rng).run()
    assert result.cycles == 2


def test_four_disk_packing_terminates_and_shrinks():
    params = RunParams(dt=0.01, T=100, stop_time=5.0, max_cycles=40, seed=42)
    rng = np.random.default_rng(params.seed)
    disks = random_configuration(4, params.box, params.r_min, params.r_max, rng)
    initial_area = bounding_box(disks).area

    ctl = PackingController(disks, params, rng)
    result = ctl.run()
    areas = ctl.history.areas

    assert result.cycles <= params.max_cycles
    assert len(areas) == result.cycles
    assert result.area <= params.box.area
    assert result.area <= areas[0] * 1.01
    # 상자는 매 사이클 경계 상자로 줄어들므로 면적은 (잡음 범위 안에서) 늘지 않음
    previous = params.box.area
    for area in areas:
        assert area <= previous * 1.01
        previous = area
    assert result.area == pytest.approx(areas[-1])
    # 겹치지 않는 4개의 원판이 차지하는 면적보다 작아질 수는 없음
    assert result.area >= sum(np.pi * d.R ** 2 for d in disks)
    assert initial_area > 0.0


def test_current_result_before_convergence(rng):
    params = RunParams(dt=0.1, T=1, stop_time=1.0)
    disks = [Disk.at(2.0, 2.0, 0.5), Disk.at(6.0, 6.0, 0.5)]
    ctl = PackingController(disks, params, rng)
    ctl.step()
    partial = ctl.current_result()
    assert not partial.stable
    assert partial.cycles == 0
    assert partial.area == pytest.approx(bounding_box(disks).area)
    assert partial.disks is disks


def test_run_returns_the_converged_result(rng):
    params = RunParams(dt=0.1, T=5, stop_time=0.2, max_cycles=1)
    ctl = PackingController([Disk.at(5.0, 5.0, 0.5)], params, rng)
    result = ctl.run()
    assert result is ctl.result
    assert ctl.current_result() is result
