import logging

import main
from diskpack.logging_config import setup_logging


def test_simulate_writes_step_log(tmp_path):
    out = tmp_path / "out.csv"
    code = main.main(["simulate", "--N", "3", "--T", "2", "--max-invocations", "5", "--seed", "1",
                      "--out-file", str(out), "--instrumented", "--log-level", "WARNING"])
    assert code == 0
    rows = [line for line in out.read_text().splitlines() if not line.startswith("#")]
    assert len(rows) == 3 * 2 * 5
    assert (tmp_path / "out_metrics.csv").exists()


def test_pack_writes_cycle_series(tmp_path, capsys):
    out = tmp_path / "pack.csv"
    code = main.main(["pack", "--N", "2", "--stop-time", "0.2", "--T", "20", "--max-cycles", "3",
                      "--seed", "5", "--out-file", str(out), "--log-level", "WARNING"])
    assert code == 0
    text = out.read_text()
    assert "# cycle,area\n1," in text
    assert "# final area=" in text
    assert "after 3 cycles" in capsys.readouterr().out


def test_missing_input_file_keeps_running(tmp_path):
    code = main.main(["simulate", "--in-file", str(tmp_path / "missing.txt"), "--max-invocations", "2",
                      "--out-file", str(tmp_path / "out.csv"), "--log-level", "ERROR"])
    assert code == 0


def test_infeasible_layout_exits_nonzero(tmp_path):
    code = main.main(["simulate", "--N", "100", "--Lx", "2", "--Ly", "2",
                      "--out-file", str(tmp_path / "out.csv"), "--log-level", "CRITICAL"])
    assert code == 1


def test_setup_logging_is_idempotent(tmp_path):
    setup_logging(logging.DEBUG, str(tmp_path / "run.log"))
    setup_logging(logging.INFO)
    logger = logging.getLogger("diskpack")
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1


def test_closing_viewer_early_still_writes_final_block(tmp_path, rng):
    from diskpack.disk import Disk
    from diskpack.packing import PackingController
    from diskpack.params import RunParams
    from diskpack.recorder import PackingRecorder

    params = RunParams(dt=0.1, T=1, stop_time=1.0, out_file=str(tmp_path / "pack.csv"))
    disks = [Disk.at(2.0, 2.0, 0.5)]
    rec = PackingRecorder(params, disks)
    ctl = PackingController(disks, params, rng, on_cycle=rec.on_cycle, on_converged=rec.on_converged)
    ctl.step()
    main.finish_packing(ctl, rec)
    rec.close()
    text = (tmp_path / "pack.csv").read_text()
    assert "# final positions\n" in text
    assert text.endswith("# final area=1.00000\n")
