from __future__ import annotations

from typing import List, Tuple

from .utils import print_examples

EXAMPLES: List[Tuple[str, str]] = [
    (
        "Gerar resumo-lotes.xlsx a partir do diretório padrão (HVI_INPUT_DIR):",
        "python -m cli offline relatorio",
    ),
    (
        "Consolidar um diretório de PDFs/planilhas e exportar JSON:",
        'python -m cli offline relatorio --input-dir "relatorios-hvi/safra-2025" --output resumo-2025.xlsx --json resumo-2025.json',
    ),
    (
        "Processar arquivos avulsos:",
        'python -m cli offline relatorio --file "Romaneio HVI Pilha 12.pdf" --file "G4 lote 210.xlsx"',
    ),
    (
        "Conferir no terminal os lotes de uma exportação JSON:",
        "python -m cli offline tabela resumo-2025.json",
    ),
    (
        "Ver e limpar logs antigos:",
        "python -m cli offline logs --limit 5 --show <run-id> --tail 50",
    ),
]


def register_examples(subparsers) -> None:
    parser = subparsers.add_parser("exemplos", aliases=["examples", "help-exemplo"], help="Mostra comandos prontos.")

    def _handler(args, settings) -> int:
        print_examples(EXAMPLES)
        return 0

    parser.set_defaults(handler=_handler)
