"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final, Mapping

_DEFAULT_MAX_STEPS: Final[int] = max(0, int(os.environ.get("BS_JAX_MAX_STEPS", "0")))
DEFAULT_LOG_LEVEL: Final[str] = os.environ.get("BS_JAX_LOG_LEVEL", "WARNING").upper()


@dataclass(frozen=True)
class MachineConfig:
    """Execution limits for a machine.

    - `max_steps`: abort with a step-limit error after this many cycles;
      `None` runs until `halt`.
    """

    max_steps: int | None = None

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps <= 0:
            raise ValueError("max_steps must be positive or None")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "MachineConfig":
        if environ is None:
            limit = _DEFAULT_MAX_STEPS
        else:
            limit = max(0, int(environ.get("BS_JAX_MAX_STEPS", "0")))
        return cls(max_steps=limit or None)
