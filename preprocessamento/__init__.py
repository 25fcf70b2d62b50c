from .inputs import PreparedInput, resolve_input_paths
from .documents import (
    PdfTextReader,
    SourceDocument,
    WorkbookReader,
)

__all__ = [
    'PreparedInput',
    'resolve_input_paths',
    'PdfTextReader',
    'SourceDocument',
    'WorkbookReader',
]
