# diskpack/geometry.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Box:
    """원판을 가두는 상자 [0, Lx] x [0, Ly]. 값 객체이므로 축소 시 새로 만든다."""
    Lx: float
    Ly: float

    def __post_init__(self) -> None:
        if not (self.Lx > 0.0 and self.Ly > 0.0):
            raise ValueError(f"box size must be > 0, got {self.Lx} x {self.Ly}")

    @property
    def area(self) -> float:
        return self.Lx * self.Ly


@dataclass(frozen=True)
class BoundingBox:
    """원판 전체(중심 ± 반지름)를 감싸는 최소 축정렬 상자"""
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @property
    def width(self) -> float: return self.xmax - self.xmin
    @property
    def height(self) -> float: return self.ymax - self.ymin
    @property
    def area(self) -> float: return self.width * self.height

    def as_box(self) -> Box:
        return Box(self.width, self.height)
