from __future__ import annotations

"""Rótulos de cabeçalho (lote, peso, fardos) e códigos de fardo no texto dos PDFs."""

import re
from dataclasses import dataclass
from typing import Iterable, List

from .models import UNKNOWN

LOT_LABEL_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"Pilha/Lote[:\s]*(\d+)", re.IGNORECASE),
    re.compile(r"Pilha[:\s]+(\d+)", re.IGNORECASE),
    re.compile(r"Lote[:\s]+(\d+)", re.IGNORECASE),
    # Siagri: "Romaneio 3"
    re.compile(r"Romaneio\s+(\d+)", re.IGNORECASE),
    re.compile(r"Romaneio[:\s]+(\d+)", re.IGNORECASE),
    re.compile(r"Batch[:\s]+(\d+)", re.IGNORECASE),
    re.compile(r"Bloco[:\s]+(\d+)", re.IGNORECASE),
    re.compile(r"LOT[:\s]+(\d+)", re.IGNORECASE),
    re.compile(r"Block[:\s]+(\d+)", re.IGNORECASE),
)

FILENAME_LOT_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"blc\s*(\d+)", re.IGNORECASE),
    re.compile(r"lote[_-]?(\d+)", re.IGNORECASE),
    re.compile(r"lot[_-]?(\d+)", re.IGNORECASE),
    # dígitos logo antes da extensão
    re.compile(r"(\d{2,4})(?=\.[^.]+$)"),
)

LOT_WEIGHT_PATTERN = re.compile(r"Peso\s+do\s+Lote\s*[;:]?\s*([\d.,]+)", re.IGNORECASE)

# "00" + 13 ou mais dígitos (GS1 do fardo)
BALE_CODE_PATTERN = re.compile(r"00\d{13,}")

# o fim da janela recua a partir do fim do próximo código
BALE_WINDOW_LOOKBACK = 20


def extract_labeled_field(
    text: str,
    patterns: Iterable[re.Pattern],
    filename: str = "",
    filename_patterns: Iterable[re.Pattern] = (),
    default: str = UNKNOWN,
) -> str:
    """Primeiro grupo capturado pelos rótulos do texto, depois pelo nome do arquivo."""
    for pattern in patterns:
        match = pattern.search(text or "")
        if match:
            return match.group(1)
    for pattern in filename_patterns:
        match = pattern.search(filename or "")
        if match:
            return match.group(1)
    return default


def extract_lot_identifier(text: str, filename: str) -> str:
    return extract_labeled_field(
        text,
        LOT_LABEL_PATTERNS,
        filename=filename,
        filename_patterns=FILENAME_LOT_PATTERNS,
    )


def weight_display(raw: str) -> str:
    # mantém o texto do relatório; só troca a primeira vírgula
    return raw.replace(",", ".", 1) if raw else UNKNOWN


def extract_lot_weight(text: str) -> str:
    match = LOT_WEIGHT_PATTERN.search(text or "")
    return weight_display(match.group(1)) if match else UNKNOWN


def count_bale_codes(text: str) -> int:
    return len(BALE_CODE_PATTERN.findall(text or ""))


@dataclass(frozen=True)
class BaleWindow:
    code: str
    start: int
    end: int
    text: str


def bale_windows(text: str, tail_length: int) -> List[BaleWindow]:
    """Fatia o texto em janelas que começam logo após cada código de fardo."""
    matches = list(BALE_CODE_PATTERN.finditer(text or ""))
    windows: List[BaleWindow] = []
    for index, match in enumerate(matches):
        start = match.end()
        if index + 1 < len(matches):
            end = max(start, matches[index + 1].end() - BALE_WINDOW_LOOKBACK)
        else:
            end = start + tail_length
        windows.append(BaleWindow(code=match.group(0), start=start, end=end, text=text[start:end]))
    return windows


__all__ = [
    "LOT_LABEL_PATTERNS",
    "FILENAME_LOT_PATTERNS",
    "BALE_CODE_PATTERN",
    "BaleWindow",
    "extract_labeled_field",
    "extract_lot_identifier",
    "extract_lot_weight",
    "weight_display",
    "count_bale_codes",
    "bale_windows",
]
