# diskpack/configuration.py
# 초기 원판 배치 생성 (무작위 배치 / 텍스트 파일 읽기)

from __future__ import annotations

import logging
import math
import re
import typing
from pathlib import Path

import numpy

from diskpack import config
from diskpack.disk import Disk
from diskpack.errors import ConfigLoadError, InfeasiblePackingError, LogWriteError
from diskpack.geometry import Box

logger = logging.getLogger(__name__)

_SPLIT = re.compile(r"[,\s]+")


def random_velocity(rng: numpy.random.Generator, v_range: float = config.Particles.v_range) -> numpy.ndarray:
    """속도 성분을 [-v_range, v_range] 에서 균등하게 뽑음"""
    return rng.uniform(-v_range, v_range, size=2)


def random_configuration(
        n: int,
        box: Box,
        r_min: float = config.Particles.r_min,
        r_max: float = config.Particles.r_max,
        rng: typing.Optional[numpy.random.Generator] = None,
        max_attempts: int = config.Placement.max_attempts ) -> typing.List[Disk]:
    """서로 겹치지 않는 원판 n개를 무작위로 배치

    Args:
        n (int): 원판 개수
        box (Box): 상자
        r_min (float): 최소 반지름
        r_max (float): 최대 반지름
        rng (numpy.random.Generator, optional): 난수 생성기. None 이면 새로 만듦
        max_attempts (int): 원판 1개당 중심 위치 재시도 상한

    Raises:
        InfeasiblePackingError: 재시도 상한 안에 겹치지 않는 위치를 찾지 못함

    Returns:
        List[Disk]: 배치된 원판 (초기 속도 포함)
    """
    n = int(n)
    if n < 0:
        raise ValueError("n must be >= 0")
    if n == 0:
        return []
    if not (0.0 < r_min <= r_max):
        raise ValueError(f"need 0 < r_min <= r_max, got r_min={r_min}, r_max={r_max}")
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    rng = rng if rng is not None else numpy.random.default_rng()

    disks: typing.List[Disk] = []
    while len(disks) < n:
        R = float(rng.uniform(r_min, r_max))
        if 2.0 * R > box.Lx or 2.0 * R > box.Ly:
            raise InfeasiblePackingError(f"disk of radius {R:.4f} does not fit in a {box.Lx} x {box.Ly} box")

        for _ in range(max_attempts):
            x = float(rng.uniform(R, box.Lx - R))
            y = float(rng.uniform(R, box.Ly - R))
            if all(math.hypot(x - d.x, y - d.y) >= R + d.R for d in disks):
                break
        else:
            raise InfeasiblePackingError(
                f"could not place disk {len(disks)} of {n} after {max_attempts} attempts"
            )

        vx, vy = random_velocity(rng)
        disks.append(Disk.at(x, y, R, vx, vy))

    logger.debug("placed %d disks in a %.3f x %.3f box", n, box.Lx, box.Ly)
    return disks


def parse_configuration(text: str) -> typing.List[Disk]:
    """'x y r' 또는 'x,y,r' 형식의 줄을 읽어 원판 목록을 만듦
        - 빈 줄과 '#' 으로 시작하는 줄은 무시
        - 토큰이 3개 미만인 줄은 건너뜀, 4번째 이후 토큰은 무시
    """
    disks: typing.List[Disk] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        tok = _SPLIT.split(s)
        if len(tok) < 3:
            continue
        try:
            x, y, R = float(tok[0]), float(tok[1]), float(tok[2])
            disks.append(Disk.at(x, y, R))
        except ValueError as exc:
            logger.warning("line %d skipped: %s", lineno, exc)
    return disks


def load_configuration(path: typing.Union[str, Path]) -> typing.List[Disk]:
    """배치 파일 읽기

    Raises:
        ConfigLoadError: 파일이 없거나 읽을 수 없음
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"Could not read {path}: {exc}") from exc
    disks = parse_configuration(text)
    logger.info("loaded %d disks from %s", len(disks), path)
    return disks


def format_configuration(disks: typing.Sequence[Disk]) -> str:
    lines = ["# x,y,r"]
    lines.extend(f"{d.x:.5f},{d.y:.5f},{d.R:.5f}" for d in disks)
    return "\n".join(lines) + "\n"


def save_configuration(disks: typing.Sequence[Disk], path: typing.Union[str, Path]) -> None:
    path = Path(path)
    try:
        path.write_text(format_configuration(disks), encoding="utf-8")
    except OSError as exc:
        raise LogWriteError(f"Cannot write {path}: {exc}") from exc
