from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__

def load_yaml(path: str | Path) -> DotDict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return DotDict(data)

def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    for k, v in overrides.items():
        if v is None:
            continue
        cfg[k] = v
    return cfg


@dataclass
class SolverConfig:
    """Knobs for one solve. ``None`` budgets mean unlimited."""

    max_steps: Optional[int] = None  # search nodes before giving up (cancelled)
    time_limit_ms: Optional[float] = None  # wall-clock budget, checked once per node
    hidden_singles: bool = False  # force hidden singles after each branching assignment
    verify: bool = True  # re-check reported solutions in the tool layer
    placeholders: str = "0."  # empty-cell characters besides '0'

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max_steps must be >= 0, got {self.max_steps}")
        if self.time_limit_ms is not None and self.time_limit_ms < 0:
            raise ValueError(f"time_limit_ms must be >= 0, got {self.time_limit_ms}")
        bad = [ch for ch in self.placeholders if "1" <= ch <= "9" or ch.isalpha()]
        if bad:
            raise ValueError(f"placeholders may not contain digits 1-9 or letters: {''.join(bad)!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: str | Path | None = None, **overrides) -> SolverConfig:
    """Defaults, then the YAML file (if any), then non-None keyword overrides."""
    cfg: Dict[str, Any] = SolverConfig().to_dict()
    if path is not None:
        cfg.update(load_yaml(path))
    merge_overrides(cfg, **overrides)
    known = {f.name for f in fields(SolverConfig)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValueError(f"unknown solver config keys: {', '.join(unknown)}")
    return SolverConfig(**cfg)
