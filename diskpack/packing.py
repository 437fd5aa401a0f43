# diskpack/packing.py
# 상자 축소 반복으로 최소 패킹을 찾는 제어기
#   RUNNING_CYCLE -> CYCLE_DONE -> RUNNING_CYCLE (축소된 상자) | CONVERGED

from __future__ import annotations

import enum
import logging
import typing
from dataclasses import dataclass, field

import numpy

from diskpack.configuration import random_velocity
from diskpack.disk import Disk
from diskpack.errors import DegenerateGeometryError
from diskpack.geometry import BoundingBox, Box
from diskpack.integrator import advance
from diskpack.metrics import bounding_box
from diskpack.params import RunParams

logger = logging.getLogger(__name__)


class PackingPhase(enum.Enum):
    RUNNING_CYCLE = "running"
    CYCLE_DONE = "cycle_done"
    CONVERGED = "converged"


@dataclass
class PackingHistory:
    """사이클 간 면적 변화 기록
        - stable_count: 상대 면적 변화 < eps 인 연속 사이클 수
        - cycle_count: 완료된 사이클 수 (단조 증가)
    """
    prev_area: float
    stable_count: int = 0
    cycle_count: int = 0
    areas: typing.List[float] = field(default_factory=list)

    def record(self, area: float, eps: float) -> float:
        """사이클 하나를 반영하고 상대 면적 변화를 반환"""
        rel = abs(self.prev_area - area) / self.prev_area
        self.cycle_count += 1
        self.stable_count = self.stable_count + 1 if rel < eps else 0
        self.prev_area = area
        self.areas.append(area)
        return rel


@dataclass
class PackingResult:
    disks: typing.List[Disk]
    area: float
    cycles: int
    stable: bool # 안정 조건으로 끝났는지 (False 면 max_cycles 도달)


class PackingController:
    """적분 -> 경계 상자 측정 -> 재중심화 -> 상자 축소 를 반복"""
    def __init__(
            self,
            disks: typing.List[Disk],
            params: RunParams | None = None,
            rng: numpy.random.Generator | None = None,
            on_cycle: typing.Optional[typing.Callable[[int, float], None]] = None,
            on_converged: typing.Optional[typing.Callable[[PackingResult], None]] = None ):
        if len(disks) == 0:
            raise DegenerateGeometryError("nothing to pack: zero disks")
        self.disks = disks
        self.params = params or RunParams()
        self.rng = rng if rng is not None else numpy.random.default_rng(self.params.seed)
        self.on_cycle = on_cycle
        self.on_converged = on_converged

        self.box = self.params.box
        self.history = PackingHistory(prev_area=self.box.area)
        self.phase = PackingPhase.RUNNING_CYCLE
        self.t = 0.0
        self.result: PackingResult | None = None
        self._start_cycle()

    @property
    def converged(self) -> bool:
        return self.phase is PackingPhase.CONVERGED

    def _start_cycle(self) -> None:
        self.t = 0.0
        for d in self.disks:
            d.v[:] = random_velocity(self.rng)
        self.phase = PackingPhase.RUNNING_CYCLE

    def step(self) -> PackingPhase:
        """호출 1회: stop_time 을 향해 최대 T 스텝 적분, 사이클이 끝나면 판정까지 처리"""
        if self.phase is PackingPhase.CONVERGED:
            return self.phase
        p = self.params
        self.t = advance(self.disks, self.box, self.t, p.dt, p.T, p.k, p.gamma, stop_time=p.stop_time)
        if self.t >= p.stop_time:
            self.phase = PackingPhase.CYCLE_DONE
            self._finish_cycle()
        return self.phase

    def _finish_cycle(self) -> None:
        p = self.params
        bb: BoundingBox = bounding_box(self.disks)

        # 경계 상자의 원점이 (0, 0) 이 되도록 이동
        shift = numpy.array([bb.xmin, bb.ymin], dtype=float)
        for d in self.disks:
            d.r -= shift

        rel = self.history.record(bb.area, p.eps)
        h = self.history
        logger.info("cycle %d: area=%.5f rel=%.2e stable=%d", h.cycle_count, bb.area, rel, h.stable_count)
        if self.on_cycle is not None:
            self.on_cycle(h.cycle_count, bb.area)

        if h.cycle_count >= p.max_cycles or h.stable_count >= p.stable_threshold:
            self.phase = PackingPhase.CONVERGED
            self.box = bb.as_box()
            self.result = PackingResult(
                disks=self.disks,
                area=bb.area,
                cycles=h.cycle_count,
                stable=h.stable_count >= p.stable_threshold,
            )
            logger.info("converged after %d cycles, area=%.5f", h.cycle_count, bb.area)
            if self.on_converged is not None:
                self.on_converged(self.result)
            return

        self.box = bb.as_box()
        self._start_cycle()

    def current_result(self) -> PackingResult:
        """수렴 전에 멈춘 경우의 현재 상태 (stable=False)"""
        if self.result is not None:
            return self.result
        return PackingResult(
            disks=self.disks,
            area=bounding_box(self.disks).area,
            cycles=self.history.cycle_count,
            stable=False,
        )

    def run(self) -> PackingResult:
        while not self.converged:
            self.step()
        return self.result
