from __future__ import annotations

"""Tabela-resumo por lote e gravação em .xlsx (aba "Resumo Lotes")."""

import re
from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from .models import UNKNOWN, LotRecord

SHEET_TITLE = "Resumo Lotes"
INVALID_EXCEL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")

BASE_COLUMNS = (
    ("Lote (Batch)", 15),
    ("Peso Total (kg)", 14),
    ("Qtd Fardos", 12),
    ("Mic (min)", 10),
    ("Mic (média)", 12),
    ("Mic (max)", 10),
    ("UHM (min)", 10),
    ("UHM (média)", 12),
    ("UHM (max)", 10),
    ("Str (min)", 10),
    ("Str (média)", 12),
    ("Str (max)", 10),
)
SCI_COLUMN = ("SCI (média)", 12)
SOURCE_COLUMN = ("Arquivo Origem", 35)


@dataclass
class SummaryTable:
    header: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    column_widths: List[int] = field(default_factory=list)


def format_measure(value: float | None, decimals: int) -> str:
    # zero significa "sem valor"
    if value is None or value <= 0:
        return UNKNOWN
    return f"{value:.{decimals}f}"


def _record_row(record: LotRecord, include_sci: bool) -> List[str]:
    row = [record.lot_id, record.total_weight, record.bale_count]
    for stats, decimals in ((record.micronaire, 2), (record.fiber_length, 3), (record.strength, 1)):
        row.extend(format_measure(value, decimals) for value in (stats.min, stats.avg, stats.max))
    if include_sci:
        row.append(format_measure(record.sci_avg, 1))
    row.append(record.source_document)
    return row


def build_summary_table(records: Sequence[LotRecord]) -> SummaryTable:
    """Uma linha por lote; a coluna SCI só aparece se algum lote tiver SCI."""
    include_sci = any(record.has_sci for record in records)
    columns = list(BASE_COLUMNS)
    if include_sci:
        columns.append(SCI_COLUMN)
    columns.append(SOURCE_COLUMN)
    return SummaryTable(
        header=[title for title, _ in columns],
        rows=[_record_row(record, include_sci) for record in records],
        column_widths=[width for _, width in columns],
    )


def _safe_excel_value(value):
    if isinstance(value, str):
        return INVALID_EXCEL_CHARS.sub("", value)
    return value


def render_workbook(table: SummaryTable) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append([_safe_excel_value(title) for title in table.header])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    ws.freeze_panes = "A2"
    for row in table.rows:
        ws.append([_safe_excel_value(value) for value in row])
    for index, width in enumerate(table.column_widths, start=1):
        ws.column_dimensions[get_column_letter(index)].width = width

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


__all__ = [
    "SHEET_TITLE",
    "SummaryTable",
    "build_summary_table",
    "format_measure",
    "render_workbook",
]
