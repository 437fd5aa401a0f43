# diskpack/force.py
# 각종 힘을 계산하는 함수 모음 (원판 간 스프링 반발력, 벽 반발력, 선형 항력)
# 질량 = 1 이므로 힘 = 가속도

from __future__ import annotations

import logging
import typing

import numpy

from diskpack.collision import collide, pairs, wall_overlap
from diskpack.disk import Disk
from diskpack.errors import DegenerateGeometryError
from diskpack.event import Event, WallEvent
from diskpack.geometry import Box

logger = logging.getLogger(__name__)


class Force:
    """병진 운동에 관한 힘 계산 함수 모음"""
    @staticmethod
    def pair(event: Event, k: float) -> numpy.ndarray:
        """원판 간 훅 반발력 계산

        Args:
            event (Event): 겹침 정보
            k (float): 스프링 상수

        Returns:
            numpy.ndarray: B가 받는 힘 (A는 같은 크기의 반대 방향)
        """
        f = k * event.penetration
        return numpy.array([f * event.normal[0], f * event.normal[1]], dtype=float)

    @staticmethod
    def wall(event: WallEvent, k: float) -> numpy.ndarray:
        """벽 반발력 계산. 면마다 독립적으로 더하므로 모서리에서는 두 면의 힘이 합쳐짐

        Args:
            event (WallEvent): 네 면의 침투 깊이
            k (float): 스프링 상수

        Returns:
            numpy.ndarray: 상자 안쪽으로 미는 힘
        """
        fx = 0.0
        fy = 0.0
        if event.left > 0.0: fx += k * event.left
        if event.right > 0.0: fx -= k * event.right
        if event.bottom > 0.0: fy += k * event.bottom
        if event.top > 0.0: fy -= k * event.top
        return numpy.array([fx, fy], dtype=float)

    @staticmethod
    def drag(disk: Disk, gamma: float) -> numpy.ndarray:
        """선형 항력 -γv"""
        return -gamma * disk.v


def compute_accelerations(disks: typing.Sequence[Disk], box: Box, k: float, gamma: float) -> None:
    """모든 원판의 가속도 a 를 새로 계산해 덮어씀 (위치/속도는 건드리지 않음)"""
    for d in disks:
        d.a[:] = 0.0

    for A, B in pairs(disks):
        try:
            e = collide(A, B)
        except DegenerateGeometryError as exc:
            # 방향을 정할 수 없으므로 힘 없음으로 처리
            logger.debug("skipping pair: %s", exc)
            continue
        if e is None:
            continue
        F = Force.pair(e, k)
        A.a -= F
        B.a += F

    for d in disks:
        w = wall_overlap(d, box)
        if w is not None:
            d.a += Force.wall(w, k)

    if gamma != 0.0:
        for d in disks:
            d.a += Force.drag(d, gamma)
