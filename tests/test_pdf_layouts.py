import unittest

from hvilotes.offline.pdf_layouts import (
    classify_summary_numbers,
    extract_g4_bales,
    extract_g4_summary,
    extract_generic,
    extract_pdf_text,
    extract_romaneio_hvi,
    extract_siagri,
    find_sci_before_csp,
    pages_to_text,
    window_numbers,
)

ROMANEIO_TEXT = "\n".join(
    [
        "Romaneio com HVI",
        "Pilha/Lote: 45",
        "Peso do Lote: 24500,50",
        "Fardo UHM LEN MIC UI RES ELG RD +B SCI CSP",
        "0012345678901234 29,40 1,16 4,18 82,00 30,40 6,20",
        "0012345678901235 29,60 1,17 4,22 82,20 30,56 6,20",
        "1-Média 29,50 1,16 4,20 82,10 30,48 6,20 78,1 8,2 138 2350",
        "2-Máximo 30,10 1,19 4,50 83,00 31,20 6,50",
        "3-Mínimo 28,90 1,14 3,90 81,00 29,80 6,00",
    ]
)

G4_TEXT = "\n".join(
    [
        "G4 COTTON - Classificação do Lote de Plumas",
        "Lote: 210",
        "Fardo Líquido Máq Tipo Área UHM Ui Sfc Res Elg Mic Rd +b Csp Comp SCI",
        "0012345678901234 225,0 1 31-4 2,10 1,12 82,5 7,8 30,10 6,1 4,00 78,0 8,5 2400 29 86,00 OK",
        "0012345678901235 230,0 1 31-4 2,10 1,16 82,5 7,8 30,60 6,1 4,20 78,0 8,5 2410 29 88,00 OK",
        "Qtd Fardos 12 2,10 1,14 82,5 7,8 30,37 6,1 4,12",
    ]
)

SIAGRI_TEXT = "\n".join(
    [
        "ALGODOEIRA SANTA LUZIA - Siagri",
        "Romaneio 3",
        "Qtd Fardos 2",
        "0012345678901234 221,5 2 11 7,5 31 1,15 82,0 8,1 30,20 6,5 4,30 77,0 9,0",
        "0012345678901235 219,0 2 11 7,5 31 1,13 81,0 8,3 29,80 6,4 4,10 76,0 9,1",
    ]
)

GENERIC_LABELED_TEXT = "\n".join(
    [
        "Relatório HVI",
        "Lote: 77",
        "Fardos: 120",
        "Peso: 26880,00 Kg",
        "MIN: 3,80 1,10 29,00 120",
        "AVG: 4,10 1,13 30,50 130",
        "MAX: 4,40 1,16 32,00 140",
    ]
)

GENERIC_ROWS_TEXT = "\n".join(
    [
        "Laboratório ABC",
        "Lote: 88",
        "0012345678901234 4,10 1,12 30,50 130",
        "0012345678901235 4,30 1,14 31,50 140",
    ]
)


class HelperTests(unittest.TestCase):
    def test_pages_are_joined_in_order(self) -> None:
        self.assertEqual(pages_to_text(["a", None, "b"]), "a\n\nb\n")

    def test_window_numbers_skip_type_codes(self) -> None:
        self.assertEqual(window_numbers(" 225,0 1 31-4 1,14 abc"), [225.0, 1.0, 1.14])
        self.assertEqual(window_numbers(" 31-4 2", skip_type_codes=False), [2.0])

    def test_sci_before_csp(self) -> None:
        self.assertEqual(find_sci_before_csp("Média 29,50 1,16 138 2350"), 138.0)
        self.assertIsNone(find_sci_before_csp("Média 29,50 1,16 138 1900"))

    def test_classify_summary_numbers(self) -> None:
        found = classify_summary_numbers([3.8, 28.0, 29.5, 120.0])
        self.assertEqual(found["mic"], 3.8)
        self.assertAlmostEqual(found["uhm"], 28.0 / 25.4)
        self.assertEqual(found["str"], 29.5)
        self.assertEqual(found["sci"], 120.0)


class RomaneioHviTests(unittest.TestCase):
    def test_summary_rows(self) -> None:
        record = extract_romaneio_hvi(ROMANEIO_TEXT, "romaneio.pdf")
        self.assertEqual(record.lot_id, "45")
        self.assertEqual(record.total_weight, "24500.50")
        self.assertEqual(record.bale_count, "2")
        self.assertAlmostEqual(record.fiber_length.avg, 1.16)
        self.assertAlmostEqual(record.fiber_length.min, 1.14)
        self.assertAlmostEqual(record.fiber_length.max, 1.19)
        self.assertAlmostEqual(record.micronaire.avg, 4.20)
        self.assertAlmostEqual(record.micronaire.min, 3.90)
        self.assertAlmostEqual(record.strength.avg, 30.48)
        self.assertAlmostEqual(record.strength.max, 31.20)
        self.assertEqual(record.sci_avg, 138.0)
        self.assertEqual(record.source_document, "romaneio.pdf")

    def test_missing_min_max_fall_back_to_average(self) -> None:
        text = "Romaneio com HVI\nPilha/Lote: 9\nMédia 29,50 1,16 4,20 82,10 30,48 6,20"
        record = extract_romaneio_hvi(text, "r.pdf")
        self.assertAlmostEqual(record.micronaire.min, 4.20)
        self.assertAlmostEqual(record.micronaire.max, 4.20)
        self.assertEqual(record.bale_count, "N/A")
        self.assertIsNone(record.sci_avg)

    def test_without_average_row(self) -> None:
        self.assertIsNone(extract_romaneio_hvi("Romaneio com HVI\nPilha/Lote: 9", "r.pdf"))


class G4Tests(unittest.TestCase):
    def test_summary_averages_and_bale_extremes(self) -> None:
        record = extract_g4_summary(G4_TEXT, "g4.pdf")
        self.assertEqual(record.lot_id, "210")
        self.assertEqual(record.bale_count, "2")
        self.assertEqual(record.total_weight, "455.00")
        self.assertAlmostEqual(record.fiber_length.avg, 1.14)
        self.assertAlmostEqual(record.fiber_length.min, 1.12)
        self.assertAlmostEqual(record.fiber_length.max, 1.16)
        self.assertAlmostEqual(record.strength.avg, 30.37)
        self.assertAlmostEqual(record.strength.min, 30.10)
        self.assertAlmostEqual(record.strength.max, 30.60)
        self.assertAlmostEqual(record.micronaire.avg, 4.12)
        self.assertAlmostEqual(record.micronaire.min, 4.00)
        self.assertAlmostEqual(record.micronaire.max, 4.20)
        self.assertEqual(record.sci_avg, 86.0)

    def test_bales_only(self) -> None:
        text = G4_TEXT.rsplit("\n", 1)[0]
        record = extract_g4_bales(text, "g4.pdf")
        self.assertAlmostEqual(record.micronaire.avg, 4.10)
        self.assertAlmostEqual(record.fiber_length.avg, 1.14)
        self.assertAlmostEqual(record.strength.avg, 30.35)
        self.assertEqual(record.bale_count, "2")

    def test_bales_only_without_rows(self) -> None:
        self.assertIsNone(extract_g4_bales("G4 COTTON\nLote: 1", "g4.pdf"))

    def test_pdf_entry_point_uses_summary_layout(self) -> None:
        records = extract_pdf_text(G4_TEXT, "g4.pdf")
        self.assertEqual(len(records), 1)
        self.assertAlmostEqual(records[0].micronaire.avg, 4.12)


class SiagriTests(unittest.TestCase):
    def test_bale_rows(self) -> None:
        record = extract_siagri(SIAGRI_TEXT, "siagri.pdf")
        self.assertEqual(record.lot_id, "3")
        self.assertEqual(record.bale_count, "2")
        self.assertEqual(record.total_weight, "440.50")
        self.assertAlmostEqual(record.micronaire.min, 4.10)
        self.assertAlmostEqual(record.micronaire.max, 4.30)
        self.assertAlmostEqual(record.fiber_length.avg, 1.14)
        self.assertAlmostEqual(record.strength.avg, 30.00)
        self.assertIsNone(record.sci_avg)


class GenericTests(unittest.TestCase):
    def test_labeled_summary_rows(self) -> None:
        record = extract_generic(GENERIC_LABELED_TEXT, "lab.pdf")
        self.assertEqual(record.lot_id, "77")
        self.assertEqual(record.bale_count, "120")
        self.assertEqual(record.total_weight, "26880.00")
        self.assertEqual(record.micronaire.min, 3.80)
        self.assertEqual(record.micronaire.avg, 4.10)
        self.assertEqual(record.micronaire.max, 4.40)
        self.assertAlmostEqual(record.fiber_length.avg, 1.13)
        self.assertEqual(record.strength.avg, 30.50)
        self.assertEqual(record.sci_avg, 130.0)

    def test_bale_row_scan(self) -> None:
        record = extract_generic(GENERIC_ROWS_TEXT, "lab.pdf")
        self.assertEqual(record.lot_id, "88")
        self.assertEqual(record.bale_count, "2")
        self.assertEqual(record.total_weight, "N/A")
        self.assertAlmostEqual(record.micronaire.avg, 4.20)
        self.assertAlmostEqual(record.fiber_length.avg, 1.13)
        self.assertAlmostEqual(record.strength.avg, 31.0)
        self.assertAlmostEqual(record.sci_avg, 135.0)


class ExtractPdfTextTests(unittest.TestCase):
    def test_romaneio(self) -> None:
        records = extract_pdf_text(ROMANEIO_TEXT, "romaneio.pdf")
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].sci_avg, 138.0)

    def test_romaneio_without_rows_falls_back_and_is_discarded(self) -> None:
        self.assertEqual(extract_pdf_text("Romaneio com HVI\nPilha/Lote: 9", "r.pdf"), [])

    def test_siagri_and_generic(self) -> None:
        self.assertEqual(extract_pdf_text(SIAGRI_TEXT, "s.pdf")[0].bale_count, "2")
        self.assertEqual(extract_pdf_text(GENERIC_ROWS_TEXT, "g.pdf")[0].lot_id, "88")

    def test_text_without_measurements(self) -> None:
        self.assertEqual(extract_pdf_text("Documento sem dados", "vazio.pdf"), [])


if __name__ == "__main__":
    unittest.main()
