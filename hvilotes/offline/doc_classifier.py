from __future__ import annotations

"""Heurísticas para reconhecer o layout de cada relatório HVI (PDF ou aba de planilha)."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence

from .columns import ColumnMap, cell_text, is_long_bale_code, map_columns


class LayoutKind(str, Enum):
    """Layouts de PDF conhecidos, na ordem de prioridade da detecção."""

    ROMANEIO_HVI = "romaneio_hvi"
    G4_RESUMO = "g4_resumo"
    G4_FARDOS = "g4_fardos"
    SIAGRI = "siagri"
    GENERICO = "generico"


class SheetLayout(str, Enum):
    GROUPED_BY_LOT = "agrupado_por_lote"
    PER_ROW_SUMMARY = "resumo_por_linha"
    RAW_BALES = "fardos"


ROMANEIO_HVI_PATTERN = re.compile(r"Romaneio\s+com\s+HVI", re.IGNORECASE)
PILHA_LOTE_PATTERN = re.compile(r"Pilha/Lote[:\s]*(\d+)", re.IGNORECASE)
FARDO_LIQUIDO_HEADER = re.compile(r"Fardo\s+L[ií]quido", re.IGNORECASE)
# "Qtd Fardos 110" seguido das médias: Área UHM Ui Sfc Res Elg Mic
G4_SUMMARY_PATTERN = re.compile(
    r"Qtd\s*Fardos\s+(\d{2,})" + r"\s+([\d,\.]+)" * 7,
    re.IGNORECASE,
)
QTD_FARDOS_PATTERN = re.compile(r"Qtd\s*Fardos\s+(\d+)", re.IGNORECASE)

G4_MARKERS = ("G4 COTTON", "Classificação do Lote de Plumas", "Classificacao do Lote de Plumas")
SIAGRI_MARKERS = ("Siagri", "ALGODOEIRA")

HEADER_SCAN_ROWS = 15
MIN_ROW_CELLS = 3

SUMMARY_SHEET_KEYWORDS = ("resumo", "summary", "totais", "total", "consolidado")
DETAIL_SHEET_KEYWORDS = (
    "analítico",
    "analitico",
    "analytic",
    "dados",
    "data",
    "detail",
    "detalhe",
    "fardos",
    "bales",
    "hvi",
)


def _contains(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _is_romaneio_hvi(text: str) -> bool:
    if ROMANEIO_HVI_PATTERN.search(text):
        return True
    return bool(PILHA_LOTE_PATTERN.search(text)) and "MIC" in text and "RES" in text


def _is_g4(text: str) -> bool:
    if _contains(text, G4_MARKERS):
        return True
    return "Romaneio" in text and bool(FARDO_LIQUIDO_HEADER.search(text))


def _is_siagri(text: str) -> bool:
    return _contains(text, SIAGRI_MARKERS) and bool(QTD_FARDOS_PATTERN.search(text))


def candidate_layouts(text: str) -> List[LayoutKind]:
    """Layouts a tentar, em ordem; o genérico fecha sempre a lista."""
    text = text or ""
    candidates: List[LayoutKind] = []
    if _is_romaneio_hvi(text):
        candidates.append(LayoutKind.ROMANEIO_HVI)
    if _is_g4(text):
        if G4_SUMMARY_PATTERN.search(text):
            candidates.append(LayoutKind.G4_RESUMO)
        else:
            candidates.append(LayoutKind.G4_FARDOS)
    if _is_siagri(text):
        candidates.append(LayoutKind.SIAGRI)
    candidates.append(LayoutKind.GENERICO)
    return candidates


def classify_pdf_text(text: str) -> LayoutKind:
    return candidate_layouts(text)[0]


@dataclass(frozen=True)
class SheetClassification:
    layout: SheetLayout
    header_index: int
    headers: tuple[str, ...]
    columns: ColumnMap


def _row_as_text(row: Sequence[object]) -> tuple[str, ...]:
    return tuple(cell_text(cell) for cell in row)


def find_header_row(rows: Sequence[Sequence[object]]) -> int:
    """Primeira linha (entre as 15 iniciais) com ao menos 2 de Mic/Res/UHM."""
    for index, row in enumerate(rows[:HEADER_SCAN_ROWS]):
        if not row or len(row) < MIN_ROW_CELLS:
            continue
        if map_columns(_row_as_text(row)).key_field_count >= 2:
            return index
    return -1


def classify_sheet(rows: Sequence[Sequence[object]]) -> SheetClassification | None:
    header_index = find_header_row(rows)
    if header_index < 0:
        return None
    headers = _row_as_text(rows[header_index])
    columns = map_columns(headers)

    has_lot = columns.lot >= 0
    has_bale = columns.bale >= 0
    has_bale_count = columns.bale_count >= 0
    sample = rows[header_index + 1] if header_index + 1 < len(rows) else None
    first_cell_is_bale_code = bool(sample) and is_long_bale_code(sample[0])

    if has_lot and (has_bale or not first_cell_is_bale_code):
        layout = SheetLayout.GROUPED_BY_LOT
    elif has_bale_count and not first_cell_is_bale_code and not has_lot:
        layout = SheetLayout.PER_ROW_SUMMARY
    else:
        layout = SheetLayout.RAW_BALES
    return SheetClassification(layout=layout, header_index=header_index, headers=headers, columns=columns)


def select_sheets(names: Sequence[str]) -> List[str]:
    """Com várias abas, prefere as analíticas e descarta as de resumo/totais."""
    if len(names) <= 1:
        return list(names)
    lowered = [name.lower() for name in names]
    preferred = [name for name, low in zip(names, lowered) if _contains(low, DETAIL_SHEET_KEYWORDS)]
    if preferred:
        return preferred
    detail = [name for name, low in zip(names, lowered) if not _contains(low, SUMMARY_SHEET_KEYWORDS)]
    return detail or list(names)


__all__ = [
    "LayoutKind",
    "SheetLayout",
    "SheetClassification",
    "candidate_layouts",
    "classify_pdf_text",
    "classify_sheet",
    "find_header_row",
    "select_sheets",
]
