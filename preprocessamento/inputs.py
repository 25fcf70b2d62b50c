from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

SUPPORTED_SUFFIXES = {".pdf", ".xlsx", ".xls"}


@dataclass
class PreparedInput:
    original: Path
    kind: str  # "pdf", "xlsx" ou "xls"


def resolve_input_paths(
    *,
    input_dirs: Sequence[Path] | None = None,
    files: Sequence[Path] | None = None,
    limit: int | None = None,
) -> List[PreparedInput]:
    """Arquivos dos diretórios (ordenados) seguidos dos avulsos, na ordem informada.

    Nos diretórios, extensões não suportadas são ignoradas; um arquivo avulso
    com extensão desconhecida entra na lista e faz o lote falhar adiante.
    """
    ordered: List[Path] = []
    for directory in input_dirs or []:
        ordered.extend(
            sorted(path for path in directory.iterdir() if path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES)
        )
    ordered.extend(files or [])

    if limit is not None and limit >= 0:
        ordered = ordered[:limit]

    return [PreparedInput(original=path, kind=path.suffix.lower().lstrip(".")) for path in ordered]
