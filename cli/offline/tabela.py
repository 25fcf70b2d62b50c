from __future__ import annotations

import json

import pandas as pd
from rich.table import Table

from ..utils import ensure_path, get_console

# coluna do JSON achatado -> (título, casas decimais)
COLUMNS = [
    ("lot_id", "Lote", None),
    ("total_weight", "Peso (kg)", None),
    ("bale_count", "Fardos", None),
    ("micronaire.avg", "Mic", 2),
    ("fiber_length.avg", "UHM", 3),
    ("strength.avg", "Str", 1),
    ("sci_avg", "SCI", 1),
    ("source_document", "Arquivo", None),
]


def register(subparsers) -> None:
    parser = subparsers.add_parser("tabela", aliases=["table"], help="Mostra no terminal os lotes de uma exportação JSON")
    parser.add_argument("json_path", help="Arquivo JSON gerado com --json.")
    parser.add_argument("--sort", dest="table_sort", choices=["lote", "arquivo"], help="Ordena por lote ou arquivo de origem.")
    parser.set_defaults(handler=_run)


def load_records_frame(path) -> pd.DataFrame:
    data = json.loads(ensure_path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise SystemExit(f"JSON inesperado em {path}: esperado uma lista de lotes")
    return pd.json_normalize(data)


def _format_cell(value, decimals) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return "N/A"
    if decimals is not None:
        number = float(value)
        return f"{number:.{decimals}f}" if number > 0 else "N/A"
    return str(value)


def _run(args, settings) -> int:
    console = get_console()
    frame = load_records_frame(args.json_path)
    if frame.empty:
        console.print("Nenhum lote no arquivo.")
        return 0
    if args.table_sort == "lote":
        frame = frame.sort_values("lot_id", kind="stable")
    elif args.table_sort == "arquivo":
        frame = frame.sort_values("source_document", kind="stable")

    table = Table(show_header=True, header_style="bold")
    present = [(key, title, decimals) for key, title, decimals in COLUMNS if key in frame.columns]
    for _, title, _ in present:
        table.add_column(title, overflow="fold")
    for _, row in frame.iterrows():
        table.add_row(*[_format_cell(row[key], decimals) for key, _, decimals in present])
    console.print(table)
    console.print(f"{len(frame)} lote(s).")
    return 0
