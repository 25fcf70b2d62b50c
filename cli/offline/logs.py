from __future__ import annotations

from rich.table import Table

from ..utils import get_console
from hvilotes import logs as logs_mod


def register(subparsers) -> None:
    parser = subparsers.add_parser("logs", help="Lista, inspeciona e limpa logs de execução")
    parser.add_argument("--limit", dest="logs_limit", type=int, default=20, help="Quantidade de execuções exibidas.")
    parser.add_argument("--show", dest="logs_show", help="Exibe o conteúdo do log para o run-id informado.")
    parser.add_argument("--tail", dest="logs_tail", type=int, default=0, help="Mostra só as últimas N linhas ao exibir um log.")
    parser.add_argument("--clean-days", dest="logs_clean_days", type=int, help="Remove logs mais antigos que N dias.")
    parser.add_argument("--clean-size", dest="logs_clean_size", type=int, help="Mantém o diretório de logs em N MB.")
    parser.set_defaults(handler=_run)


def _run(args, settings) -> int:
    console = get_console()
    log_dir = settings.log_dir
    entries = logs_mod.list_logs(log_dir, limit=args.logs_limit)
    if entries:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Run ID", overflow="fold")
        table.add_column("Data/Hora")
        table.add_column("Tamanho")
        for entry in entries:
            size_kb = entry.size_bytes / 1024
            table.add_row(entry.run_id, f"{entry.mtime:%Y-%m-%d %H:%M:%S}", f"{size_kb:8.1f} KB")
        console.print(table)
    else:
        console.print(f"Nenhum log em {log_dir}.")

    if args.logs_show:
        try:
            content = logs_mod.show_log(
                log_dir,
                args.logs_show,
                tail=args.logs_tail > 0,
                lines=args.logs_tail if args.logs_tail > 0 else 50,
            )
            console.print(f"\n[bold]== Log {args.logs_show} ==[/bold]")
            console.print(content, markup=False)
        except FileNotFoundError as exc:
            console.print(str(exc))

    if args.logs_clean_days or args.logs_clean_size:
        result = logs_mod.cleanup_logs(log_dir, args.logs_clean_days, args.logs_clean_size)
        if result["deleted"]:
            console.print(f"Logs removidos: {', '.join(result['deleted'])}")
        else:
            console.print("Nenhum log removido.")
    return 0
