# diskpack/collision.py
# 2D 원판-원판, 원판-벽 겹침 감지
from __future__ import annotations

import math

from diskpack.config import EPS
from diskpack.disk import Disk
from diskpack.errors import DegenerateGeometryError
from diskpack.event import Event, WallEvent
from diskpack.geometry import Box


def collide(a: Disk, b: Disk) -> Event | None:
    """두 원판이 겹치면 Event, 아니면 None

    Raises:
        DegenerateGeometryError: 겹친 두 원판의 중심이 일치해 법선을 정할 수 없음
    """
    dx = float(b.r[0] - a.r[0])
    dy = float(b.r[1] - a.r[1])
    dist = math.hypot(dx, dy)
    pen = (a.R + b.R) - dist
    if pen <= 0.0:
        return None
    if dist < EPS:
        raise DegenerateGeometryError(f"coincident centres at ({a.x:.5f}, {a.y:.5f})")

    nx, ny = dx / dist, dy / dist  # A->B

    e = Event(a, b)
    e.normal = (nx, ny)
    e.penetration = pen
    return e


def wall_overlap(disk: Disk, box: Box) -> WallEvent | None:
    """벽 네 면에 대한 침투 깊이. 어느 면에도 닿지 않으면 None"""
    x, y, R = float(disk.r[0]), float(disk.r[1]), disk.R
    left = R - x
    right = x - (box.Lx - R)
    bottom = R - y
    top = y - (box.Ly - R)
    if left <= 0.0 and right <= 0.0 and bottom <= 0.0 and top <= 0.0:
        return None
    return WallEvent(disk, left, right, bottom, top)


def pairs(disks):
    """앞 원판이 먼저 오는 모든 순서쌍 (i < j)"""
    n = len(disks)
    for i in range(n):
        for j in range(i + 1, n):
            yield disks[i], disks[j]
