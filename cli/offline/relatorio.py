from __future__ import annotations

import sys
from pathlib import Path

from ..utils import ensure_dir_writable, ensure_path, run_subprocess


def register(subparsers) -> None:
    parser = subparsers.add_parser("relatorio", aliases=["report", "excel"], help="Gera resumo-lotes.xlsx")
    parser.add_argument("--input-dir", dest="report_input_dir", action="append", help="Diretórios com PDFs/planilhas (pode repetir; default: HVI_INPUT_DIR).")
    parser.add_argument("--file", dest="report_files", action="append", help="Arquivos avulsos (pode repetir).")
    parser.add_argument("--output", dest="report_output", help="Arquivo de saída (default: HVI_OUTPUT).")
    parser.add_argument("--json", dest="report_json", help="Exporta também os lotes em JSON.")
    parser.add_argument("--no-log-cleanup", action="store_true", help="Não remove logs antigos antes de iniciar.")
    parser.add_argument("--no-run-log", action="store_true", help="Não grava o .log em disco (somente console).")
    parser.set_defaults(handler=_run)


def build_command(args, settings) -> list[str]:
    output = Path(args.report_output).expanduser() if args.report_output else settings.output
    cmd = [
        sys.executable,
        "-m",
        "hvilotes.offline.extract_reports",
        "--output",
        str(output),
        "--log-dir",
        str(settings.log_dir),
    ]
    input_dirs = args.report_input_dir or []
    files = args.report_files or []
    if not input_dirs and not files:
        input_dirs = [str(settings.input_dir)]
    for directory in input_dirs:
        cmd.extend(["--input-dir", str(ensure_path(directory))])
    for file in files:
        cmd.extend(["--file", str(ensure_path(file))])
    if args.report_json:
        cmd.extend(["--json", str(Path(args.report_json).expanduser())])
    if args.no_log_cleanup:
        cmd.extend(["--log-retention-days", "0"])
    if args.no_run_log:
        cmd.append("--no-run-log")
    return cmd


def _run(args, settings) -> int:
    cmd = build_command(args, settings)
    output = Path(cmd[cmd.index("--output") + 1])
    # Preflight: permissões de escrita
    ensure_dir_writable(output.parent)
    if not args.no_run_log:
        ensure_dir_writable(settings.log_dir)
    output.parent.mkdir(parents=True, exist_ok=True)
    return run_subprocess(cmd)
