"""Run parameters: an immutable snapshot consumed by the simulation for one run."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from diskpack import config
from diskpack.errors import ConfigLoadError
from diskpack.geometry import Box


@dataclass(frozen=True)
class RunParams:
    """Parameters for a plain or packing run."""

    dt: float = config.dt
    T: int = config.steps_per_invocation
    N: int = config.Particles.N
    k: float = config.Stiffness.k
    gamma: float = config.Stiffness.gamma
    Lx: float = config.Container.Lx
    Ly: float = config.Container.Ly
    stop_time: float = config.Packing.stop_time
    r_min: float = config.Particles.r_min
    r_max: float = config.Particles.r_max
    read_from_file: bool = False
    in_file: str = config.Files.in_file
    out_file: str = config.Files.out_file
    max_invocations: int = config.max_invocations
    eps: float = config.Packing.eps
    max_cycles: int = config.Packing.max_cycles
    stable_threshold: int = config.Packing.stable_threshold
    max_attempts: int = config.Placement.max_attempts
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.dt > 0.0:
            raise ValueError("dt must be > 0")
        if self.T < 1:
            raise ValueError("T must be >= 1")
        if self.N < 0:
            raise ValueError("N must be >= 0")
        if self.k < 0.0 or self.gamma < 0.0:
            raise ValueError("k and gamma must be >= 0")
        if not (self.Lx > 0.0 and self.Ly > 0.0):
            raise ValueError("Lx and Ly must be > 0")
        if not self.stop_time > 0.0:
            raise ValueError("stop_time must be > 0")
        if not (0.0 < self.r_min <= self.r_max):
            raise ValueError("need 0 < r_min <= r_max")
        if not self.eps > 0.0:
            raise ValueError("eps must be > 0")
        if self.max_cycles < 1 or self.stable_threshold < 1:
            raise ValueError("max_cycles and stable_threshold must be >= 1")
        if self.max_invocations < 1 or self.max_attempts < 1:
            raise ValueError("max_invocations and max_attempts must be >= 1")

    @property
    def box(self) -> Box:
        return Box(self.Lx, self.Ly)

    def replace(self, **changes: Any) -> "RunParams":
        """Return a copy with ``changes`` applied; ``None`` values are ignored."""
        return dataclasses.replace(self, **{k: v for k, v in changes.items() if v is not None})

    def header(self) -> str:
        return (
            f"dt={self.dt:.4f},T={self.T},N={self.N},k={self.k:.3f},gamma={self.gamma:.3f},"
            f"Lx={self.Lx:.3f},Ly={self.Ly:.3f}"
        )


def params_from_mapping(raw: Mapping[str, Any]) -> RunParams:
    names = {f.name for f in dataclasses.fields(RunParams)}
    unknown = sorted(set(raw) - names)
    if unknown:
        raise ValueError(f"Unknown run parameters: {', '.join(unknown)}")
    return RunParams(**dict(raw))


def load_params(path: str | Path) -> RunParams:
    """Load run parameters from a YAML mapping, on top of the defaults.

    Args:
        path: YAML file, either flat or nested under a ``run`` key.

    Returns:
        A validated :class:`RunParams`.
    """
    params_path = Path(path)
    try:
        with params_path.open("r", encoding="utf-8") as handle:
            raw: Mapping[str, Any] = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise ConfigLoadError(f"Could not read {params_path}: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ValueError(f"{params_path} must contain a mapping")
    return params_from_mapping(raw.get("run", raw))
