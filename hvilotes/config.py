from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()


@dataclass(slots=True, frozen=True)
class Settings:
    input_dir: Path
    output: Path
    log_dir: Path
    log_retention_days: int

    @staticmethod
    def load(
        *,
        input_dir: str | Path | None = None,
        output: str | Path | None = None,
        log_dir: str | Path | None = None,
        log_retention_days: int | str | None = None,
    ) -> "Settings":
        input_dir_raw = input_dir or os.getenv("HVI_INPUT_DIR", "relatorios-hvi")
        output_raw = output or os.getenv("HVI_OUTPUT", "resumo-lotes.xlsx")
        log_dir_raw = log_dir or os.getenv("HVI_LOG_DIR", "logs/extract")

        retention_raw = log_retention_days if log_retention_days is not None else os.getenv("HVI_LOG_RETENTION_DAYS", "30")
        try:
            retention_value = int(retention_raw)
        except (TypeError, ValueError):
            raise ValueError(f"HVI_LOG_RETENTION_DAYS inválido: {retention_raw!r}") from None

        return Settings(
            input_dir=Path(input_dir_raw).expanduser(),
            output=Path(output_raw).expanduser(),
            log_dir=Path(log_dir_raw).expanduser(),
            log_retention_days=retention_value,
        )

    def with_updates(
        self,
        *,
        input_dir: str | Path | None = None,
        output: str | Path | None = None,
        log_dir: str | Path | None = None,
        log_retention_days: int | None = None,
    ) -> "Settings":
        updates: dict[str, object] = {}
        if input_dir is not None:
            updates["input_dir"] = Path(input_dir).expanduser()
        if output is not None:
            updates["output"] = Path(output).expanduser()
        if log_dir is not None:
            updates["log_dir"] = Path(log_dir).expanduser()
        if log_retention_days is not None:
            updates["log_retention_days"] = int(log_retention_days)
        if not updates:
            return self
        return replace(self, **updates)
