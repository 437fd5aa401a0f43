# diskpack/integrator.py

# 속도 Verlet(kick-drift-kick) 적분기
# 속도를 반 스텝씩 두 번 갱신하고 그 사이에 위치를 한 번 갱신함 (2차 정확도, 심플렉틱)

import typing

from diskpack.disk import Disk
from diskpack.force import compute_accelerations
from diskpack.geometry import Box


def verlet_step(disks: typing.Sequence[Disk], box: Box, dt: float, k: float, gamma: float) -> None:
    """단일 Verlet 스텝을 수행하는 함수 (원판 상태를 제자리에서 갱신)
        disks : 원판 목록
        box   : 상자
        dt    : 시간 간격
        k     : 스프링 상수
        gamma : 항력 계수
    """
    dt = float(dt)
    if dt <= 0.0:
        raise ValueError("dt must be > 0")

    compute_accelerations(disks, box, k, gamma) # a(t)
    for d in disks:
        d.v += 0.5 * d.a * dt
        d.r += d.v * dt # 반 스텝 갱신된 속도 사용

    compute_accelerations(disks, box, k, gamma) # a(t + dt)
    for d in disks:
        d.v += 0.5 * d.a * dt


def advance(disks: typing.Sequence[Disk], box: Box, t: float, dt: float, steps: int, k: float, gamma: float,
            stop_time: typing.Optional[float] = None,
            on_step: typing.Optional[typing.Callable[[float], None]] = None) -> float:
    """steps 번 적분하고 새 시간을 반환
    stop_time 이 주어지면 마지막 스텝을 잘라 시간이 정확히 stop_time 에 멈추게 함
    """
    for _ in range(max(0, int(steps))):
        h = dt
        if stop_time is not None:
            remaining = stop_time - t
            if remaining <= 0.0:
                break
            if remaining < h:
                h = remaining
        verlet_step(disks, box, h, k, gamma)
        t = stop_time if (stop_time is not None and h != dt) else t + h
        if on_step is not None:
            on_step(t)
    return t
