from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Sequence

import pandas as pd
import pdfplumber
from openpyxl import load_workbook

from hvilotes.offline.errors import UnsupportedFormatError
from hvilotes.offline.sheet_layouts import SheetRows


@dataclass(frozen=True)
class SourceDocument:
    name: str
    data: bytes

    @property
    def extension(self) -> str:
        return Path(self.name).suffix.lower().lstrip(".")

    @classmethod
    def from_path(cls, path: Path) -> "SourceDocument":
        return cls(name=path.name, data=path.read_bytes())


class PdfTextReader:
    """Texto de cada página do PDF, na ordem do documento."""

    def pages(self, raw: bytes) -> Iterator[str]:
        with pdfplumber.open(io.BytesIO(raw)) as pdf:
            for page in pdf.pages:
                yield page.extract_text() or ""


def _trim_row(values: Sequence[object]) -> List[object]:
    row = list(values)
    # células vazias no fim da linha não contam
    while row and (row[-1] is None or row[-1] == ""):
        row.pop()
    return row


class WorkbookReader:
    """Abas de .xlsx (openpyxl) e .xls (pandas + xlrd) como listas de linhas."""

    def sheets(self, raw: bytes, name: str) -> List[SheetRows]:
        suffix = Path(name).suffix.lower()
        if suffix == ".xlsx":
            return self._read_xlsx(raw)
        if suffix == ".xls":
            return self._read_xls(raw)
        raise UnsupportedFormatError(suffix.lstrip("."))

    def _read_xlsx(self, raw: bytes) -> List[SheetRows]:
        wb = load_workbook(io.BytesIO(raw), read_only=True, data_only=True)
        try:
            return [
                SheetRows(name=ws.title, rows=[_trim_row(values) for values in ws.iter_rows(values_only=True)])
                for ws in wb.worksheets
            ]
        finally:
            wb.close()

    def _read_xls(self, raw: bytes) -> List[SheetRows]:
        frames = pd.read_excel(io.BytesIO(raw), sheet_name=None, header=None, engine="xlrd")
        sheets: List[SheetRows] = []
        for sheet_name, frame in frames.items():
            frame = frame.astype(object).where(pd.notna(frame), None)
            sheets.append(SheetRows(name=str(sheet_name), rows=[_trim_row(values) for values in frame.values.tolist()]))
        return sheets


__all__ = ["SourceDocument", "PdfTextReader", "WorkbookReader"]
