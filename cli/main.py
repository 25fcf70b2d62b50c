from __future__ import annotations

import argparse

from hvilotes.config import Settings

from .examples import register_examples
from .offline import register_offline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CLI para extração de lotes HVI")
    parser.add_argument("--log-dir", help="Sobrescreve HVI_LOG_DIR durante esta execução")
    subparsers = parser.add_subparsers(dest="section", required=True)
    register_examples(subparsers)
    register_offline(subparsers)
    return parser


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.error("Escolha um comando. Use 'exemplos' para ver sugestões.")
    settings = Settings.load(log_dir=args.log_dir)
    return handler(args, settings)


def main() -> None:
    raise SystemExit(run())
