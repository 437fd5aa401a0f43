# diskpack/recorder.py
# CSV 형식 로그 출력 (원판 상태, 스텝별 지표, 패킹 사이클)
# 출력은 부가 기능이므로 파일을 열지 못해도 시뮬레이션은 계속 진행됨

from __future__ import annotations

import logging
import typing
from pathlib import Path

from diskpack.disk import Disk
from diskpack.errors import DegenerateGeometryError, LogWriteError
from diskpack.metrics import bounding_box, kinetic_energy, potential_energy
from diskpack.params import RunParams

logger = logging.getLogger(__name__)


def _open(path: Path) -> typing.TextIO:
    try:
        return path.open("w", encoding="utf-8", newline="\n")
    except OSError as exc:
        raise LogWriteError(f"Cannot write {path}: {exc}") from exc


def metrics_path(out_file: typing.Union[str, Path]) -> Path:
    p = Path(out_file)
    return p.with_name(f"{p.stem}_metrics{p.suffix or '.csv'}")


class StepRecorder:
    """스텝마다 원판 상태 't,i,x,y,r' 기록
    instrumented 이면 스텝별 지표를 별도 파일에 기록
    """
    def __init__(self, params: RunParams, instrumented: bool = False):
        self.params = params
        self.out = _open(Path(params.out_file))
        self.metrics = None
        self.out.write(f"# {params.header()}\n")
        self.out.write("# t,i,x,y,r\n")
        if instrumented:
            try:
                self.metrics = _open(metrics_path(params.out_file))
            except LogWriteError as exc:
                # 지표 파일만 포기하고 원판 기록은 계속함
                logger.error("%s; continuing without step metrics", exc)
            else:
                self.metrics.write(f"# {params.header()}\n")
                self.metrics.write("# t,U,K,xMin,xMax,yMin,yMax,width,height\n")

    def __call__(self, world) -> None:
        self.record(world.t, world.disks, world.box)

    def record(self, t: float, disks: typing.Sequence[Disk], box) -> None:
        for i, d in enumerate(disks):
            self.out.write(f"{t:.5f},{i},{d.x:.5f},{d.y:.5f},{d.R:.5f}\n")
        if self.metrics is None:
            return
        U = potential_energy(disks, box, self.params.k)
        K = kinetic_energy(disks)
        try:
            bb = bounding_box(disks)
        except DegenerateGeometryError:
            self.metrics.write(f"{t:.5f},{U:.5f},{K:.5f},,,,,,\n")
            return
        self.metrics.write(
            f"{t:.5f},{U:.5f},{K:.5f},{bb.xmin:.5f},{bb.xmax:.5f},{bb.ymin:.5f},{bb.ymax:.5f},"
            f"{bb.width:.5f},{bb.height:.5f}\n"
        )

    def close(self) -> None:
        self.out.close()
        if self.metrics is not None:
            self.metrics.close()


class PackingRecorder:
    """초기 위치, 사이클별 면적, 최종 위치 기록"""
    def __init__(self, params: RunParams, disks: typing.Sequence[Disk]):
        self.out = _open(Path(params.out_file))
        p = params
        self.out.write(f"# {p.header()},stopTime={p.stop_time:.3f},eps={p.eps:.4f},"
                       f"maxCycles={p.max_cycles},stableThreshold={p.stable_threshold}\n")
        self.out.write("# initial positions\n")
        self._positions(disks)
        self.out.write("# cycle,area\n")

    def _positions(self, disks: typing.Sequence[Disk]) -> None:
        self.out.write("# i,x,y,r\n")
        for i, d in enumerate(disks):
            self.out.write(f"{i},{d.x:.5f},{d.y:.5f},{d.R:.5f}\n")

    def on_cycle(self, cycle: int, area: float) -> None:
        self.out.write(f"{cycle},{area:.5f}\n")

    def on_converged(self, result) -> None:
        self.out.write("# final positions\n")
        self._positions(result.disks)
        self.out.write(f"# final area={result.area:.5f}\n")

    def close(self) -> None:
        self.out.close()


class NullRecorder:
    """기록하지 않는 대체 기록기"""
    def __call__(self, world) -> None: pass
    def record(self, t, disks, box) -> None: pass
    def on_cycle(self, cycle: int, area: float) -> None: pass
    def on_converged(self, result) -> None: pass
    def close(self) -> None: pass


def open_step_recorder(params: RunParams, instrumented: bool = False):
    try:
        return StepRecorder(params, instrumented)
    except LogWriteError as exc:
        logger.error("%s; continuing without logging", exc)
        return NullRecorder()


def open_packing_recorder(params: RunParams, disks: typing.Sequence[Disk]):
    try:
        return PackingRecorder(params, disks)
    except LogWriteError as exc:
        logger.error("%s; continuing without logging", exc)
        return NullRecorder()
