from __future__ import annotations

from . import relatorio, logs, tabela


def register_offline(subparsers) -> None:
    offline_parser = subparsers.add_parser("offline", aliases=["off"], help="Ferramentas offline (relatório/logs/tabela)")
    offline_sub = offline_parser.add_subparsers(dest="offline_command", required=True)
    relatorio.register(offline_sub)
    logs.register(offline_sub)
    tabela.register(offline_sub)
