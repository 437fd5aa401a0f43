# diskpack/metrics.py
# 진단용 스칼라 값 계산 (위치 에너지, 운동 에너지, 경계 상자)

from __future__ import annotations

import typing

from diskpack.collision import collide, pairs, wall_overlap
from diskpack.disk import Disk
from diskpack.errors import DegenerateGeometryError
from diskpack.geometry import BoundingBox, Box


def potential_energy(disks: typing.Sequence[Disk], box: Box, k: float) -> float:
    """스프링 위치 에너지 Σ ½k·overlap² (원판 쌍 + 벽 네 면)

    힘 계산(force.py)의 -∇U 와 같은 법칙을 사용함
    """
    U = 0.0
    for A, B in pairs(disks):
        try:
            e = collide(A, B)
        except DegenerateGeometryError:
            # 중심이 일치해도 겹침 깊이 자체는 정의됨
            overlap = A.R + B.R
            U += 0.5 * k * overlap * overlap
            continue
        if e is not None:
            U += 0.5 * k * e.penetration * e.penetration

    for d in disks:
        w = wall_overlap(d, box)
        if w is None:
            continue
        for pen in w.penetrations():
            if pen > 0.0:
                U += 0.5 * k * pen * pen
    return U


def kinetic_energy(disks: typing.Sequence[Disk]) -> float:
    return sum(0.5 * float(d.v[0]*d.v[0] + d.v[1]*d.v[1]) for d in disks)


def bounding_box(disks: typing.Sequence[Disk]) -> BoundingBox:
    """모든 원판(중심 ± 반지름)을 감싸는 최소 축정렬 상자

    Raises:
        DegenerateGeometryError: 원판이 하나도 없음
    """
    if len(disks) == 0:
        raise DegenerateGeometryError("bounding box of zero disks is undefined")
    return BoundingBox(
        xmin=min(d.x - d.R for d in disks),
        xmax=max(d.x + d.R for d in disks),
        ymin=min(d.y - d.R for d in disks),
        ymax=max(d.y + d.R for d in disks),
    )
