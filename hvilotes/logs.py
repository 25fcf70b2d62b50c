from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import List

LOG_PATTERN = "extract-*.log"


@dataclass
class LogEntry:
    run_id: str
    log_path: Path
    mtime: datetime
    size_bytes: int


def _iter_logs(log_dir: Path) -> List[LogEntry]:
    if not log_dir.exists():
        return []
    entries: List[LogEntry] = []
    for log_file in log_dir.glob(LOG_PATTERN):
        try:
            stat = log_file.stat()
        except FileNotFoundError:
            continue
        entries.append(
            LogEntry(
                run_id=log_file.stem,
                log_path=log_file,
                mtime=datetime.fromtimestamp(stat.st_mtime),
                size_bytes=stat.st_size,
            )
        )
    entries.sort(key=lambda e: e.mtime, reverse=True)
    return entries


def list_logs(log_dir: Path, limit: int | None = None) -> List[LogEntry]:
    entries = _iter_logs(log_dir)
    if limit is not None:
        entries = entries[:limit]
    return entries


def show_log(log_dir: Path, run_id: str, tail: bool = False, lines: int = 50) -> str:
    log_path = log_dir / f"{run_id}.log"
    if not log_path.exists():
        raise FileNotFoundError(f"Log {log_path} não encontrado")
    content = log_path.read_text(encoding="utf-8", errors="ignore").splitlines()
    if tail and lines > 0:
        content = content[-lines:]
    return "\n".join(content)


def cleanup_logs(log_dir: Path, max_days: int | None = None, max_mb: int | None = None) -> dict:
    deleted: List[str] = []
    entries = _iter_logs(log_dir)
    total_bytes = sum(entry.size_bytes for entry in entries)
    limit_bytes = max_mb * 1024 * 1024 if max_mb else None
    now = datetime.now()

    def _delete(entry: LogEntry) -> None:
        entry.log_path.unlink(missing_ok=True)
        deleted.append(entry.run_id)

    if max_days and max_days > 0:
        cutoff = now - timedelta(days=max_days)
        for entry in entries:
            if entry.mtime < cutoff:
                _delete(entry)
                total_bytes -= entry.size_bytes

    if limit_bytes and limit_bytes > 0:
        # mais antigos primeiro até caber no limite
        for entry in sorted(entries, key=lambda e: e.mtime):
            if total_bytes <= limit_bytes:
                break
            if entry.run_id not in deleted:
                _delete(entry)
                total_bytes -= entry.size_bytes

    return {"deleted": deleted, "remaining_bytes": total_bytes}
