from __future__ import annotations

"""Exceções da extração de lotes HVI."""

from typing import Optional


class HviLotesError(Exception):
    """Exceção base da extração."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class UnsupportedFormatError(HviLotesError):
    """Extensão de arquivo que nenhum extrator trata."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Formato não suportado: {extension or '(sem extensão)'}")


class NoRecognizableDataError(HviLotesError):
    """Planilha lida sem nenhum lote reconhecível."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Nenhum dado encontrado no arquivo Excel: {filename}")


class DocumentProcessingError(HviLotesError):
    """Falha em um documento do lote; interrompe o processamento inteiro."""

    def __init__(self, filename: str, cause: BaseException):
        self.filename = filename
        self.cause = cause
        reason = str(cause) or "Erro desconhecido"
        super().__init__(f"Falha ao processar {filename}: {reason}", details=type(cause).__name__)


__all__ = [
    "HviLotesError",
    "UnsupportedFormatError",
    "NoRecognizableDataError",
    "DocumentProcessingError",
]
