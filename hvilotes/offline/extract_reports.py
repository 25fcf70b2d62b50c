from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Iterable, List, Protocol, Sequence
from uuid import uuid4

from hvilotes.config import Settings
from preprocessamento.documents import PdfTextReader, SourceDocument, WorkbookReader
from preprocessamento.inputs import resolve_input_paths

from .errors import DocumentProcessingError, UnsupportedFormatError
from .models import LotRecord
from .pdf_layouts import extract_pdf_text, pages_to_text
from .sheet_layouts import SheetRows, extract_workbook
from .summary import build_summary_table, render_workbook

LOGGER = logging.getLogger("extract_reports")
# loggers dos extratores também vão para o .log da execução
RUN_LOGGERS = ("extract_reports", "pdf_layouts", "sheet_layouts")

ProgressCallback = Callable[[int, int], None]


class PagesReader(Protocol):
    def pages(self, raw: bytes) -> Iterable[str]: ...


class SheetsReader(Protocol):
    def sheets(self, raw: bytes, name: str) -> List[SheetRows]: ...


@dataclass
class ProcessResult:
    artifact: bytes
    records: List[LotRecord] = field(default_factory=list)


def _extension(name: str) -> str:
    return Path(name).suffix.lower().lstrip(".")


def extract_document(document: SourceDocument, *, pdf_reader: PagesReader, sheet_reader: SheetsReader) -> List[LotRecord]:
    extension = _extension(document.name)
    if extension in {"xlsx", "xls"}:
        return extract_workbook(sheet_reader.sheets(document.data, document.name), document.name)
    if extension == "pdf":
        text = pages_to_text(pdf_reader.pages(document.data))
        return extract_pdf_text(text, document.name)
    raise UnsupportedFormatError(extension)


def process_files_with_data(
    documents: Sequence[SourceDocument],
    *,
    pdf_reader: PagesReader,
    sheet_reader: SheetsReader,
    on_progress: ProgressCallback | None = None,
) -> ProcessResult:
    """Processa os documentos em ordem e monta a planilha-resumo.

    A primeira falha interrompe o lote inteiro com ``DocumentProcessingError``;
    nenhum resultado parcial é devolvido.
    """
    documents = list(documents)
    total = len(documents)
    records: List[LotRecord] = []
    for index, document in enumerate(documents, start=1):
        try:
            found = extract_document(document, pdf_reader=pdf_reader, sheet_reader=sheet_reader)
        except Exception as exc:
            LOGGER.error("Erro processando %s: %s", document.name, exc)
            raise DocumentProcessingError(document.name, exc) from exc
        LOGGER.debug("%s: %d lote(s)", document.name, len(found))
        records.extend(found)
        if on_progress is not None:
            on_progress(index, total)

    artifact = render_workbook(build_summary_table(records))
    return ProcessResult(artifact=artifact, records=records)


def process_files(
    documents: Sequence[SourceDocument],
    *,
    pdf_reader: PagesReader,
    sheet_reader: SheetsReader,
    on_progress: ProgressCallback | None = None,
) -> bytes:
    return process_files_with_data(
        documents,
        pdf_reader=pdf_reader,
        sheet_reader=sheet_reader,
        on_progress=on_progress,
    ).artifact


def records_to_json(records: Sequence[LotRecord]) -> str:
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)


def _generate_run_id() -> str:
    return f"extract-{datetime.now():%Y%m%d-%H%M%S}-{uuid4().hex[:6]}"


def _setup_logger(log_dir: Path, run_id: str) -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{run_id}.log"
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    for name in RUN_LOGGERS:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return log_path


def _cleanup_old_logs(log_dir: Path, days: int) -> None:
    if days <= 0 or not log_dir.exists():
        return
    cutoff = datetime.now() - timedelta(days=days)
    for file in log_dir.glob("extract-*.log"):
        try:
            if datetime.fromtimestamp(file.stat().st_mtime) < cutoff:
                file.unlink()
        except OSError:
            continue


def _log(message: str) -> None:
    print(message)
    if LOGGER.handlers:
        LOGGER.info(message)


def _print_header(run_id: str, log_path: Path | None, total: int) -> None:
    banner = "=" * 72
    print(banner)
    print(f"Execução ID: {run_id}")
    print(f"Log:        {log_path or '(desativado)'}")
    print(f"Total de arquivos: {total}")
    print(banner)


def _log_progress(completed: int, total: int, name: str | None = None) -> None:
    if total <= 0:
        return
    pct = completed / total
    msg = f"{completed}/{total} ({pct*100:5.1f}%)"
    if name:
        msg = f"{msg} - {name}"
    _log(msg)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Consolida relatórios HVI (PDF/Excel) em uma planilha-resumo por lote.")
    parser.add_argument("--input-dir", type=Path, action="append", help="Diretório com PDFs/planilhas (pode repetir; default: HVI_INPUT_DIR).")
    parser.add_argument("--file", type=Path, action="append", help="Arquivo avulso (pode repetir).")
    parser.add_argument("--output", type=Path, help="Caminho do XLSX de saída (default: HVI_OUTPUT).")
    parser.add_argument("--json", type=Path, help="Exporta também os lotes em JSON.")
    parser.add_argument("--log-dir", type=Path, help="Diretório dos logs de execução (default: HVI_LOG_DIR).")
    parser.add_argument(
        "--log-retention-days",
        type=int,
        help="Remove logs com mais de N dias (0 desativa; default: HVI_LOG_RETENTION_DAYS).",
    )
    parser.add_argument("--run-id", help="Identificador personalizado da execução.")
    parser.add_argument("--no-run-log", action="store_true", help="Não grava o .log em disco (somente console).")
    args = parser.parse_args(argv)

    settings = Settings.load(
        output=args.output,
        log_dir=args.log_dir,
        log_retention_days=args.log_retention_days,
    )
    run_id = args.run_id or _generate_run_id()
    if settings.log_retention_days:
        _cleanup_old_logs(settings.log_dir, settings.log_retention_days)
    log_path = None if args.no_run_log else _setup_logger(settings.log_dir, run_id)
    _log(f"Executando extração (run-id={run_id}) - log: {log_path or 'desativado'}")

    files = [path.expanduser() for path in args.file or []]
    input_dirs = [path.expanduser() for path in args.input_dir or []]
    if not input_dirs and not files:
        input_dirs = [settings.input_dir]
    for directory in input_dirs:
        if not directory.is_dir():
            raise SystemExit(f"Diretório não encontrado: {directory}")
    for path in files:
        if not path.is_file():
            raise SystemExit(f"Arquivo não encontrado: {path}")

    prepared = resolve_input_paths(input_dirs=input_dirs, files=files)
    if not prepared:
        _log("Nenhum arquivo suportado encontrado.")
        return 0

    total_size = sum(entry.original.stat().st_size for entry in prepared)
    _log(f"Pré-flight ok | Arquivos: {len(prepared)} | Tamanho total: {total_size/1e6:.1f} MB")
    _print_header(run_id, log_path, len(prepared))

    documents = [SourceDocument.from_path(entry.original) for entry in prepared]
    try:
        result = process_files_with_data(
            documents,
            pdf_reader=PdfTextReader(),
            sheet_reader=WorkbookReader(),
            on_progress=lambda done, total: _log_progress(done, total, documents[done - 1].name),
        )
    except DocumentProcessingError as exc:
        _log(f"ERRO: {exc.message}")
        raise SystemExit(exc.message) from exc

    output = settings.output
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.artifact)
    _log(f"{len(result.records)} lote(s) extraído(s) de {len(documents)} arquivo(s).")
    _log(f"Relatório salvo em {output}")

    if args.json:
        json_path = args.json.expanduser()
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_path.write_text(records_to_json(result.records), encoding="utf-8")
        _log(f"JSON salvo em {json_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
