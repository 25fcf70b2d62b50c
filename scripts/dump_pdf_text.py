"""
Despeja o texto (pdfplumber) de relatórios HVI em .txt e mostra o layout detectado.

Entrada:
  --input-dir   Diretório com PDFs
  --output-dir  Onde gravar <arquivo>.txt (default: ao lado de cada PDF)

Uso típico: ao receber um relatório de laboratório novo, conferir como o texto
sai do PDF e qual extrator seria tentado antes de ajustar as heurísticas.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import List

# Ensure repo root is on sys.path when run as a standalone script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hvilotes.offline.doc_classifier import candidate_layouts
from hvilotes.offline.labels import count_bale_codes
from hvilotes.offline.pdf_layouts import pages_to_text
from preprocessamento.documents import PdfTextReader


def dump_pdf(pdf_path: Path, output_dir: Path | None, reader: PdfTextReader) -> tuple[Path, str]:
    text = pages_to_text(reader.pages(pdf_path.read_bytes()))
    target_dir = output_dir or pdf_path.parent
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / f"{pdf_path.stem}.txt"
    target.write_text(text, encoding="utf-8")
    return target, text


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Exporta o texto de PDFs HVI e o layout detectado.")
    parser.add_argument("--input-dir", type=Path, required=True, help="Diretório com PDFs.")
    parser.add_argument("--output-dir", type=Path, help="Diretório de saída dos .txt.")
    args = parser.parse_args(argv)

    input_dir = args.input_dir.expanduser()
    if not input_dir.is_dir():
        raise SystemExit(f"Diretório não encontrado: {input_dir}")
    reader = PdfTextReader()
    pdfs = sorted(path for path in input_dir.iterdir() if path.suffix.lower() == ".pdf")
    for pdf_path in pdfs:
        target, text = dump_pdf(pdf_path, args.output_dir, reader)
        layouts = " -> ".join(kind.value for kind in candidate_layouts(text))
        print(f"{pdf_path.name}: {layouts} | fardos={count_bale_codes(text)} | {target}")
    print(f"{len(pdfs)} PDF(s) processado(s).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
