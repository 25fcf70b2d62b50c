from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Stats:
    min: float = 0.0
    avg: float = 0.0
    max: float = 0.0

    @property
    def has_values(self) -> bool:
        return self.min > 0 or self.avg > 0 or self.max > 0


def _is_valid(value: float) -> bool:
    return value > 0 and math.isfinite(value)


def calculate_stats(values: Iterable[float]) -> Stats:
    """Mínimo, média e máximo só dos valores positivos e finitos (zeros se nenhum)."""
    valid = [value for value in values if _is_valid(value)]
    if not valid:
        return Stats()
    return Stats(min=min(valid), avg=sum(valid) / len(valid), max=max(valid))


__all__ = ["Stats", "calculate_stats"]
