from __future__ import annotations

"""Tipos de dados do resultado da extração (um registro por lote)."""

from dataclasses import asdict, dataclass, field
from typing import Iterable, List

from .normalizers import normalize_length_to_inches
from .stats import Stats, calculate_stats

UNKNOWN = "N/A"


@dataclass(frozen=True)
class LotRecord:
    lot_id: str = UNKNOWN
    total_weight: str = UNKNOWN
    bale_count: str = UNKNOWN
    micronaire: Stats = field(default_factory=Stats)
    fiber_length: Stats = field(default_factory=Stats)
    strength: Stats = field(default_factory=Stats)
    sci_avg: float | None = None
    source_document: str = ""

    @property
    def has_measurements(self) -> bool:
        return any(stats.has_values for stats in (self.micronaire, self.fiber_length, self.strength))

    @property
    def has_sci(self) -> bool:
        return self.sci_avg is not None and self.sci_avg > 0

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass
class LotAccumulator:
    """Listas de amostras de um lote (ou de uma aba/PDF inteiro) antes da agregação."""

    micronaire: List[float] = field(default_factory=list)
    fiber_length: List[float] = field(default_factory=list)
    strength: List[float] = field(default_factory=list)
    sci: List[float] = field(default_factory=list)
    weight: List[float] = field(default_factory=list)
    bale_count: float = 0

    @property
    def is_empty(self) -> bool:
        return not (self.micronaire or self.fiber_length or self.strength)

    @property
    def sample_count(self) -> int:
        return max(len(self.micronaire), len(self.fiber_length), len(self.strength))

    def add(
        self,
        *,
        micronaire: float = 0,
        fiber_length: float = 0,
        strength: float = 0,
        sci: float = 0,
        weight: float = 0,
        normalize_length: bool = True,
    ) -> None:
        # zeros significam "coluna ausente" e não entram nas listas
        if micronaire > 0:
            self.micronaire.append(micronaire)
        if fiber_length > 0:
            if normalize_length:
                fiber_length = normalize_length_to_inches(fiber_length)
            self.fiber_length.append(fiber_length)
        if strength > 0:
            self.strength.append(strength)
        if sci > 0:
            self.sci.append(sci)
        if weight > 0:
            self.weight.append(weight)

    def total_weight(self) -> str:
        total = sum(self.weight)
        return format_weight(total)

    def sci_average(self) -> float | None:
        stats = calculate_stats(self.sci)
        return stats.avg if stats.avg > 0 else None

    def to_record(self, *, lot_id: str, bale_count: str, source_document: str) -> LotRecord:
        return LotRecord(
            lot_id=lot_id,
            total_weight=self.total_weight(),
            bale_count=bale_count,
            micronaire=calculate_stats(self.micronaire),
            fiber_length=calculate_stats(self.fiber_length),
            strength=calculate_stats(self.strength),
            sci_avg=self.sci_average(),
            source_document=source_document,
        )


def format_weight(total: float) -> str:
    return f"{total:.2f}" if total > 0 else UNKNOWN


def format_count(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def drop_empty(records: Iterable[LotRecord]) -> list[LotRecord]:
    return [record for record in records if record.has_measurements]


__all__ = [
    "UNKNOWN",
    "LotRecord",
    "LotAccumulator",
    "Stats",
    "format_weight",
    "format_count",
    "drop_empty",
]
