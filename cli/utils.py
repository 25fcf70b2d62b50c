from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import List

from rich.console import Console


def print_examples(examples: List[tuple[str, str]]) -> None:
    console = get_console()
    console.print("Comandos frequentes do CLI:\n")
    for title, command in examples:
        console.print(f"- {title}\n  {command}\n")


def ensure_path(value: str) -> Path:
    path = Path(value).expanduser().resolve()
    if not path.exists():
        raise SystemExit(f"Arquivo/diretório inexistente: {path}")
    return path


def ensure_dir_writable(path: Path) -> None:
    target = path if path.exists() else path.parent
    while not target.exists() and target != target.parent:
        target = target.parent
    if not os.access(target, os.W_OK):
        raise SystemExit(f"Sem permissão de escrita em {target}")


def run_subprocess(cmd: list[str]) -> int:
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as exc:
        return exc.returncode
    return 0


_CONSOLE: Console | None = None


def get_console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console()
    return _CONSOLE
