# diskpack/disk.py

from __future__ import annotations

from dataclasses import dataclass, field
import numpy

Vec2 = numpy.ndarray # (2,)


@dataclass(eq=False)
class Disk:
    """
    2D 원판 (단위 질량)
        - 위치 r, 속도 v, 가속도 a 는 모두 (2,) 벡터
        - 가속도는 힘 계산 때마다 덮어씀
        - 반지름 R 은 생성 후 바뀌지 않음
    상태벡터는 다음과 같이 구성됨 [x, y, vx, vy]
    """
    R: float

    # 상태
    r: Vec2 = field(default_factory=lambda: numpy.zeros(2, dtype=float)) # 위치
    v: Vec2 = field(default_factory=lambda: numpy.zeros(2, dtype=float)) # 속도
    a: Vec2 = field(default_factory=lambda: numpy.zeros(2, dtype=float)) # 가속도

    def __post_init__(self) -> None:
        self.R = float(self.R)
        if not self.R > 0.0:
            raise ValueError(f"radius must be > 0, got {self.R}")
        self.r = numpy.asarray(self.r, dtype=float).reshape(2).copy()
        self.v = numpy.asarray(self.v, dtype=float).reshape(2).copy()
        self.a = numpy.asarray(self.a, dtype=float).reshape(2).copy()

    @classmethod
    def at(cls, x: float, y: float, R: float, vx: float = 0.0, vy: float = 0.0) -> Disk:
        return cls(R=R, r=[x, y], v=[vx, vy])

    @property
    def x(self) -> float:
        return float(self.r[0])

    @property
    def y(self) -> float:
        return float(self.r[1])

    def state(self) -> numpy.ndarray:
        return numpy.array([self.r[0], self.r[1], self.v[0], self.v[1]], dtype=float)

    def set_state(self, y: numpy.ndarray) -> None:
        y = numpy.asarray(y, dtype=float).reshape(-1)
        self.r[:] = y[0:2]
        self.v[:] = y[2:4]
