import unittest

from hvilotes.offline.doc_classifier import (
    LayoutKind,
    SheetLayout,
    candidate_layouts,
    classify_pdf_text,
    classify_sheet,
    find_header_row,
    select_sheets,
)

BALE_CODE = "0012345678901234"


class PdfClassifierTests(unittest.TestCase):
    def test_romaneio_hvi_by_title(self) -> None:
        text = "Romaneio com HVI\nPilha/Lote: 45\n1-Média 29,50 1,16 4,20 82,10 30,48 6,20"
        self.assertEqual(candidate_layouts(text), [LayoutKind.ROMANEIO_HVI, LayoutKind.GENERICO])

    def test_romaneio_hvi_by_pile_label_and_headers(self) -> None:
        text = "Pilha/Lote: 45\nUHM LEN MIC UI RES ELG"
        self.assertEqual(classify_pdf_text(text), LayoutKind.ROMANEIO_HVI)

    def test_g4_with_summary_line(self) -> None:
        text = "G4 COTTON\nQtd Fardos 12 2,10 1,14 82,5 7,8 30,37 6,1 4,12"
        self.assertEqual(candidate_layouts(text), [LayoutKind.G4_RESUMO, LayoutKind.GENERICO])

    def test_g4_without_summary_line(self) -> None:
        text = f"Classificação do Lote de Plumas\n{BALE_CODE} 225,0 1 31-4 2,10 1,14"
        self.assertEqual(classify_pdf_text(text), LayoutKind.G4_FARDOS)

    def test_romaneio_with_bale_table_is_g4(self) -> None:
        text = "Romaneio 12\nFardo Líquido Máq Tipo"
        self.assertEqual(classify_pdf_text(text), LayoutKind.G4_FARDOS)

    def test_siagri(self) -> None:
        text = "ALGODOEIRA SANTA LUZIA - Siagri\nRomaneio 3\nQtd Fardos 2"
        self.assertEqual(candidate_layouts(text), [LayoutKind.SIAGRI, LayoutKind.GENERICO])

    def test_unknown_is_generic(self) -> None:
        self.assertEqual(candidate_layouts("Laboratório qualquer"), [LayoutKind.GENERICO])
        self.assertEqual(classify_pdf_text(""), LayoutKind.GENERICO)


class SheetClassifierTests(unittest.TestCase):
    def test_header_row_after_title_rows(self) -> None:
        rows = [
            ["Relatório HVI"],
            ["Safra", "2024", "Fazenda X"],
            ["Fardo", "Líquido", "Mic", "UHM", "Res"],
            [BALE_CODE, 225.0, 4.1, 29.0, 30.2],
        ]
        self.assertEqual(find_header_row(rows), 2)

    def test_no_header(self) -> None:
        rows = [["Data", "Cliente", "Observação"], [1, 2, 3]]
        self.assertEqual(find_header_row(rows), -1)
        self.assertIsNone(classify_sheet(rows))

    def test_grouped_by_lot(self) -> None:
        rows = [["Lote", "Fardo", "Mic", "UHM", "Res"], ["101", BALE_CODE, 4.1, 29.0, 30.0]]
        result = classify_sheet(rows)
        self.assertEqual(result.layout, SheetLayout.GROUPED_BY_LOT)
        self.assertEqual(result.header_index, 0)

    def test_per_row_summary(self) -> None:
        rows = [["Qtd Fardos", "Peso", "Mic", "UHM", "Res"], [110, "24500", 4.2, 1.15, 30.1]]
        self.assertEqual(classify_sheet(rows).layout, SheetLayout.PER_ROW_SUMMARY)

    def test_raw_bales(self) -> None:
        rows = [["Fardo", "Líquido", "Mic", "UHM", "Res"], [BALE_CODE, 225.0, 4.1, 29.0, 30.2]]
        self.assertEqual(classify_sheet(rows).layout, SheetLayout.RAW_BALES)

    def test_lot_column_with_bale_codes_in_first_cell_is_raw(self) -> None:
        rows = [["Etiqueta", "Lote", "Mic", "UHM", "Res"], [BALE_CODE, "7", 4.1, 29.0, 30.2]]
        self.assertEqual(classify_sheet(rows).layout, SheetLayout.RAW_BALES)


class SelectSheetsTests(unittest.TestCase):
    def test_single_sheet(self) -> None:
        self.assertEqual(select_sheets(["Resumo"]), ["Resumo"])

    def test_prefers_detail_sheets(self) -> None:
        self.assertEqual(select_sheets(["Resumo", "Dados HVI", "Gráfico"]), ["Dados HVI"])

    def test_skips_summary_sheets(self) -> None:
        self.assertEqual(select_sheets(["Resumo", "Lote 5", "Lote 6"]), ["Lote 5", "Lote 6"])

    def test_all_summary_keeps_everything(self) -> None:
        self.assertEqual(select_sheets(["Resumo", "Totais"]), ["Resumo", "Totais"])


if __name__ == "__main__":
    unittest.main()
