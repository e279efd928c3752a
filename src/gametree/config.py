"""Engine configuration.

Environment-first, with defaults that give exhaustive play near the end of the
game and a shallower search in the opening. CLI flags override both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ALGORITHMS = ("alphabeta", "minimax")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class EngineConfig:
    max_depth: int = 9
    opening_depth: int = 4
    midgame_depth: int = 6
    algorithm: str = "alphabeta"
    use_ordering: bool = True
    use_shortcuts: bool = True

    def __post_init__(self) -> None:
        for name in ("max_depth", "opening_depth", "midgame_depth"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if not (self.opening_depth <= self.midgame_depth <= self.max_depth):
            raise ValueError("Depths must satisfy opening_depth <= midgame_depth <= max_depth")
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {self.algorithm!r} (expected one of {ALGORITHMS})")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        defaults = cls()
        return cls(
            max_depth=_env_int("GAMETREE_MAX_DEPTH", defaults.max_depth),
            opening_depth=_env_int("GAMETREE_OPENING_DEPTH", defaults.opening_depth),
            midgame_depth=_env_int("GAMETREE_MIDGAME_DEPTH", defaults.midgame_depth),
            algorithm=os.getenv("GAMETREE_ALGORITHM", defaults.algorithm),
        )


def data_out() -> Path:
    p = os.getenv("GAMETREE_DATA_OUT")
    return Path(p) if p else Path.cwd() / "data_raw"
