# diskpack/world.py
from __future__ import annotations

import logging
import typing

import numpy

from diskpack.configuration import load_configuration, random_configuration
from diskpack.disk import Disk
from diskpack.errors import ConfigLoadError
from diskpack.geometry import Box
from diskpack.integrator import advance
from diskpack.params import RunParams

logger = logging.getLogger(__name__)

StepCallback = typing.Callable[["World"], None]


class World:
    """시뮬레이션 세계 (2D 원판 + 상자)"""
    def __init__(
            self,
            params: RunParams | None = None,
            disks: typing.Optional[typing.List[Disk]] = None,
            box: Box | None = None ):
        self.params = params or RunParams()
        self.box = box or self.params.box
        self.disks: typing.List[Disk] = list(disks) if disks is not None else []
        self.t = 0.0
        self.invocations = 0

    def add_disk(self, disk: Disk) -> None:
        self.disks.append(disk)

    def initialize(self, rng: numpy.random.Generator | None = None) -> None:
        """원판 목록을 새로 만듦 (파일 또는 무작위 배치)

        파일을 읽지 못하면 오류를 기록하고 기존 원판 목록을 유지함
        InfeasiblePackingError 는 그대로 전달됨
        """
        p = self.params
        self.t = 0.0
        self.invocations = 0
        self.box = p.box
        if p.read_from_file:
            try:
                self.disks = load_configuration(p.in_file)
            except ConfigLoadError as exc:
                logger.error("%s; keeping %d existing disks", exc, len(self.disks))
        else:
            rng = rng if rng is not None else numpy.random.default_rng(p.seed)
            self.disks = random_configuration(p.N, self.box, p.r_min, p.r_max, rng, p.max_attempts)

    @property
    def should_stop(self) -> bool:
        return self.invocations >= self.params.max_invocations

    def step(self, on_step: typing.Optional[StepCallback] = None) -> None:
        """호출 1회: Verlet 스텝 T 번"""
        p = self.params
        callback = None
        if on_step is not None:
            def callback(t: float) -> None:
                # 기록기가 스텝 직후의 시간을 읽도록 먼저 갱신
                self.t = t
                on_step(self)
        self.t = advance(self.disks, self.box, self.t, p.dt, p.T, p.k, p.gamma, on_step=callback)
        self.invocations += 1

    def run(self, on_step: typing.Optional[StepCallback] = None) -> None:
        while not self.should_stop:
            self.step(on_step)
        logger.info("stopped after %d invocations at t = %.3f", self.invocations, self.t)

    def snapshot(self) -> typing.List[numpy.ndarray]:
        return [d.state().copy() for d in self.disks]

    def restore(self, snap: typing.List[numpy.ndarray]) -> None:
        for d, s in zip(self.disks, snap):
            d.set_state(s)
