import logging

from diskpack.disk import Disk
from diskpack.packing import PackingResult
from diskpack.params import RunParams
from diskpack.recorder import (
    NullRecorder,
    PackingRecorder,
    StepRecorder,
    metrics_path,
    open_step_recorder,
)


def test_step_rows(tmp_path, box):
    params = RunParams(out_file=str(tmp_path / "out.csv"))
    rec = StepRecorder(params)
    rec.record(0.01, [Disk.at(1.0, 2.0, 0.5), Disk.at(3.0, 4.0, 0.25)], box)
    rec.close()
    lines = (tmp_path / "out.csv").read_text().splitlines()
    assert lines[0].startswith("# dt=0.0100")
    assert lines[1] == "# t,i,x,y,r"
    assert lines[2:] == ["0.01000,0,1.00000,2.00000,0.50000", "0.01000,1,3.00000,4.00000,0.25000"]
    assert not metrics_path(params.out_file).exists()


def test_instrumented_metrics_go_to_separate_file(tmp_path, pair, box):
    params = RunParams(out_file=str(tmp_path / "out.csv"))
    rec = StepRecorder(params, instrumented=True)
    rec.record(0.5, pair, box)
    rec.close()
    path = tmp_path / "out_metrics.csv"
    assert metrics_path(params.out_file) == path
    lines = path.read_text().splitlines()
    assert lines[1] == "# t,U,K,xMin,xMax,yMin,yMax,width,height"
    assert lines[2] == "0.50000,20.00000,0.00000,3.00000,6.80000,4.00000,6.00000,3.80000,2.00000"
    # 원판 행에는 지표 열이 없음
    disk_rows = (tmp_path / "out.csv").read_text().splitlines()[2:]
    assert all(len(row.split(",")) == 5 for row in disk_rows)


def test_packing_blocks(tmp_path):
    params = RunParams(out_file=str(tmp_path / "pack.csv"))
    disks = [Disk.at(1.0, 1.0, 0.5)]
    rec = PackingRecorder(params, disks)
    rec.on_cycle(1, 4.0)
    rec.on_cycle(2, 1.0)
    rec.on_converged(PackingResult(disks=disks, area=1.0, cycles=2, stable=True))
    rec.close()
    text = (tmp_path / "pack.csv").read_text()
    assert "# initial positions\n# i,x,y,r\n0,1.00000,1.00000,0.50000\n# cycle,area\n1,4.00000\n2,1.00000\n" in text
    assert text.endswith("# final positions\n# i,x,y,r\n0,1.00000,1.00000,0.50000\n# final area=1.00000\n")


def test_unwritable_destination_degrades(tmp_path, caplog, box):
    params = RunParams(out_file=str(tmp_path / "no" / "such" / "dir" / "out.csv"))
    with caplog.at_level(logging.ERROR, logger="diskpack"):
        rec = open_step_recorder(params)
    assert isinstance(rec, NullRecorder)
    assert "continuing without logging" in caplog.text
    rec.record(0.0, [Disk.at(1, 1, 1)], box)
    rec.close()


def test_step_rows_carry_time_after_the_step(tmp_path):
    from diskpack.world import World

    params = RunParams(N=1, T=2, dt=0.1, out_file=str(tmp_path / "out.csv"))
    w = World(params, disks=[Disk.at(5.0, 5.0, 0.5)])
    rec = StepRecorder(params)
    w.step(on_step=rec)
    rec.close()
    rows = (tmp_path / "out.csv").read_text().splitlines()[2:]
    assert [row.split(",")[0] for row in rows] == ["0.10000", "0.20000"]


def test_metrics_file_failure_keeps_disk_log(tmp_path, caplog, box):
    (tmp_path / "out_metrics.csv").mkdir()
    params = RunParams(out_file=str(tmp_path / "out.csv"))
    with caplog.at_level(logging.ERROR, logger="diskpack"):
        rec = open_step_recorder(params, instrumented=True)
    assert isinstance(rec, StepRecorder)
    assert rec.metrics is None
    assert "continuing without step metrics" in caplog.text
    rec.record(0.5, [Disk.at(1.0, 2.0, 0.5)], box)
    rec.close()
    lines = (tmp_path / "out.csv").read_text().splitlines()
    assert lines[-1] == "0.50000,0,1.00000,2.00000,0.50000"
