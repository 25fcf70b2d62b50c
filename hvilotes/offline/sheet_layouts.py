from __future__ import annotations

"""Extração de lotes a partir das abas de planilhas HVI (.xlsx/.xls)."""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

from .columns import ColumnMap, cell_text, is_summary_row
from .doc_classifier import SheetClassification, SheetLayout, classify_sheet, select_sheets
from .errors import NoRecognizableDataError
from .labels import extract_lot_identifier, weight_display
from .models import UNKNOWN, LotAccumulator, LotRecord, drop_empty, format_count
from .normalizers import normalize_length_to_inches, parse_locale_number
from .stats import Stats

LOGGER = logging.getLogger("sheet_layouts")

MIN_DATA_CELLS = 3
_NON_DIGITS = re.compile(r"\D")


@dataclass
class SheetRows:
    """Uma aba como lista de linhas (células cruas, na ordem da planilha)."""

    name: str
    rows: List[List[object]] = field(default_factory=list)


def _data_rows(rows: Sequence[Sequence[object]], header_index: int):
    for row in rows[header_index + 1 :]:
        if not row or len(row) < MIN_DATA_CELLS:
            continue
        if is_summary_row(row[0]):
            continue
        yield row


def _numeric(row: Sequence[object], columns: ColumnMap, name: str) -> float:
    return parse_locale_number(columns.cell(row, name))


def extract_grouped_by_lot(sheet: SheetRows, classification: SheetClassification, filename: str) -> List[LotRecord]:
    """Várias linhas por lote: agrupa pela coluna de lote, na ordem de aparição."""
    columns = classification.columns
    lots: Dict[str, LotAccumulator] = {}
    for row in _data_rows(sheet.rows, classification.header_index):
        lot_id = cell_text(columns.cell(row, "lot")).strip()
        if not lot_id:
            continue
        mic = _numeric(row, columns, "mic")
        length = _numeric(row, columns, "uhm")
        strength = _numeric(row, columns, "strength")
        if mic == 0 and length == 0 and strength == 0:
            continue
        per_row_count = _numeric(row, columns, "bale_count") if columns.bale_count >= 0 else 1
        lot = lots.setdefault(lot_id, LotAccumulator())
        lot.add(
            micronaire=mic,
            fiber_length=length,
            strength=strength,
            sci=_numeric(row, columns, "sci"),
            weight=_numeric(row, columns, "weight"),
        )
        lot.bale_count += per_row_count or 1

    LOGGER.debug("%s: %d lotes agrupados", filename, len(lots))
    return [
        lot.to_record(lot_id=lot_id, bale_count=format_count(lot.bale_count), source_document=filename)
        for lot_id, lot in lots.items()
    ]


def extract_per_row_summary(sheet: SheetRows, classification: SheetClassification, filename: str) -> List[LotRecord]:
    """Cada linha já é o resumo de um lote; mín = média = máx."""
    columns = classification.columns
    lot_id = extract_lot_identifier("", filename)
    records: List[LotRecord] = []
    for row in _data_rows(sheet.rows, classification.header_index):
        mic = _numeric(row, columns, "mic")
        length = normalize_length_to_inches(_numeric(row, columns, "uhm"))
        strength = _numeric(row, columns, "strength")
        if mic == 0 and length == 0 and strength == 0:
            continue
        sci = _numeric(row, columns, "sci")
        weight = cell_text(columns.cell(row, "weight")).strip()
        bale_count = cell_text(columns.cell(row, "bale_count")).strip()
        records.append(
            LotRecord(
                lot_id=lot_id,
                total_weight=weight_display(weight),
                bale_count=bale_count or UNKNOWN,
                micronaire=Stats(min=mic, avg=mic, max=mic),
                fiber_length=Stats(min=length, avg=length, max=length),
                strength=Stats(min=strength, avg=strength, max=strength),
                sci_avg=sci if sci > 0 else None,
                source_document=filename,
            )
        )
    return records


def _lot_from_column(rows: Sequence[Sequence[object]], classification: SheetClassification) -> str:
    for row in _data_rows(rows, classification.header_index):
        value = cell_text(classification.columns.cell(row, "lot"))
        if value and value != "0":
            return value
    return ""


def extract_raw_bales(sheet: SheetRows, classification: SheetClassification, filename: str) -> List[LotRecord]:
    """Uma linha por fardo, um único lote por aba."""
    columns = classification.columns
    samples = LotAccumulator()
    for row in _data_rows(sheet.rows, classification.header_index):
        samples.add(
            micronaire=_numeric(row, columns, "mic"),
            fiber_length=_numeric(row, columns, "uhm"),
            strength=_numeric(row, columns, "strength"),
            sci=_numeric(row, columns, "sci"),
            weight=_numeric(row, columns, "weight"),
        )
    if samples.is_empty:
        return []

    lot_id = ""
    if columns.lot >= 0:
        lot_id = _lot_from_column(sheet.rows, classification)
    # lote pela coluna, depois pelos dígitos do nome da aba, depois pelo arquivo
    lot_id = lot_id or _NON_DIGITS.sub("", sheet.name) or extract_lot_identifier("", filename)
    LOGGER.debug("%s [%s]: %d fardos no lote %s", filename, sheet.name, samples.sample_count, lot_id)
    return [
        samples.to_record(
            lot_id=lot_id,
            bale_count=str(samples.sample_count),
            source_document=f"{filename} [{sheet.name}]",
        )
    ]


SheetExtractor = Callable[[SheetRows, SheetClassification, str], List[LotRecord]]

SHEET_EXTRACTORS: Dict[SheetLayout, SheetExtractor] = {
    SheetLayout.GROUPED_BY_LOT: extract_grouped_by_lot,
    SheetLayout.PER_ROW_SUMMARY: extract_per_row_summary,
    SheetLayout.RAW_BALES: extract_raw_bales,
}


def extract_sheet(sheet: SheetRows, filename: str) -> List[LotRecord]:
    classification = classify_sheet(sheet.rows)
    if classification is None:
        LOGGER.info("%s: aba '%s' sem cabeçalhos reconhecíveis", filename, sheet.name)
        return []
    LOGGER.info(
        "%s: aba '%s' -> %s (cabeçalho na linha %d)",
        filename,
        sheet.name,
        classification.layout.value,
        classification.header_index,
    )
    return SHEET_EXTRACTORS[classification.layout](sheet, classification, filename)


def extract_workbook(sheets: Sequence[SheetRows], filename: str) -> List[LotRecord]:
    """Todos os lotes das abas selecionadas; erro se nenhuma aba render dados."""
    selected = set(select_sheets([sheet.name for sheet in sheets]))
    records: List[LotRecord] = []
    for sheet in sheets:
        if sheet.name not in selected:
            LOGGER.debug("%s: aba '%s' ignorada", filename, sheet.name)
            continue
        if len(sheet.rows) < 2:
            continue
        records.extend(extract_sheet(sheet, filename))
    records = drop_empty(records)
    if not records:
        raise NoRecognizableDataError(filename)
    return records


__all__ = [
    "SheetRows",
    "SHEET_EXTRACTORS",
    "extract_grouped_by_lot",
    "extract_per_row_summary",
    "extract_raw_bales",
    "extract_sheet",
    "extract_workbook",
]
