from __future__ import annotations

"""Extratores por layout de PDF HVI.

Cada função recebe o texto completo do PDF (páginas concatenadas em ordem) e o
nome do arquivo, e devolve um ``LotRecord`` ou ``None`` quando o layout não se
confirma; nesse caso ``extract_pdf_text`` passa para o próximo candidato da
classificação.

Layouts:

* Romaneio com HVI: linhas Mínimo/Média/Máximo com colunas em posição fixa
  (UHM mm, LEN pol, MIC, UI, RES, ELG, ...).
* G4 COTTON / Classificação do Lote de Plumas: uma linha por fardo, opcionalmente
  com a linha "Qtd Fardos N" trazendo as médias do lote.
* Siagri: uma linha por fardo, sem SCI.
* Genérico: linhas rotuladas MIN/AVG/MAX ou, na falta delas, varredura das linhas
  que começam com código de fardo, identificando cada número pela faixa de valor.
"""

import logging
import re
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List

from .doc_classifier import G4_SUMMARY_PATTERN, QTD_FARDOS_PATTERN, LayoutKind, candidate_layouts
from .labels import (
    bale_windows,
    count_bale_codes,
    extract_lot_identifier,
    extract_lot_weight,
    weight_display,
)
from .models import UNKNOWN, LotAccumulator, LotRecord, format_count
from .normalizers import normalize_length_to_inches, parse_locale_number, parse_number_token
from .stats import Stats, calculate_stats

LOGGER = logging.getLogger("pdf_layouts")


def pages_to_text(pages: Iterable[str]) -> str:
    # a ordem das páginas importa: as heurísticas usam posição relativa no texto
    return "".join(f"{page or ''}\n" for page in pages)


# ---------------------------------------------------------------------------
# Romaneio com HVI
# ---------------------------------------------------------------------------

_SIX_NUMBERS = r"[^\d]*([\d,\.]+)" + r"\s+([\d,\.]+)" * 5
MINIMO_ROW = re.compile(r"(?<!\w)M[íi]nimo" + _SIX_NUMBERS, re.IGNORECASE)
MEDIA_ROW = re.compile(r"(?<!\w)M[ée]dia" + _SIX_NUMBERS, re.IGNORECASE)
MAXIMO_ROW = re.compile(r"(?<!\w)M[áa]ximo" + _SIX_NUMBERS, re.IGNORECASE)
MEDIA_LINE = re.compile(r"(?<!\w)M[ée]dia[^\n\r]+", re.IGNORECASE)
NUMBER_RUN = re.compile(r"[\d,\.]+")

# posições (grupos) na linha de resumo: 1 UHM mm, 2 LEN pol, 3 MIC, 4 UI, 5 RES, 6 ELG
ROMANEIO_LENGTH_GROUP = 2
ROMANEIO_MIC_GROUP = 3
ROMANEIO_STRENGTH_GROUP = 5

SCI_SUMMARY_RANGE = (100.0, 180.0)
CSP_SUMMARY_RANGE = (2000.0, 2500.0)


def find_sci_before_csp(line: str) -> float | None:
    """SCI é o valor de 3 dígitos imediatamente seguido do CSP de 4 dígitos."""
    tokens = NUMBER_RUN.findall(line or "")
    for index in range(len(tokens) - 2, -1, -1):
        value = parse_locale_number(tokens[index])
        following = parse_locale_number(tokens[index + 1])
        if SCI_SUMMARY_RANGE[0] <= value <= SCI_SUMMARY_RANGE[1] and CSP_SUMMARY_RANGE[0] <= following <= CSP_SUMMARY_RANGE[1]:
            return value
    return None


def _group_value(match: re.Match | None, group: int, fallback: float) -> float:
    if match is None:
        return fallback
    return parse_locale_number(match.group(group))


def extract_romaneio_hvi(text: str, filename: str) -> LotRecord | None:
    media = MEDIA_ROW.search(text)
    if media is None:
        LOGGER.debug("%s: Romaneio com HVI sem linha de Média", filename)
        return None
    minimo = MINIMO_ROW.search(text)
    maximo = MAXIMO_ROW.search(text)

    media_line = MEDIA_LINE.search(text)
    sci_avg = find_sci_before_csp(media_line.group(0)) if media_line else None

    length_avg = parse_locale_number(media.group(ROMANEIO_LENGTH_GROUP))
    mic_avg = parse_locale_number(media.group(ROMANEIO_MIC_GROUP))
    strength_avg = parse_locale_number(media.group(ROMANEIO_STRENGTH_GROUP))

    fiber_length = Stats(
        min=normalize_length_to_inches(_group_value(minimo, ROMANEIO_LENGTH_GROUP, length_avg)),
        avg=normalize_length_to_inches(length_avg),
        max=normalize_length_to_inches(_group_value(maximo, ROMANEIO_LENGTH_GROUP, length_avg)),
    )
    micronaire = Stats(
        min=_group_value(minimo, ROMANEIO_MIC_GROUP, mic_avg),
        avg=mic_avg,
        max=_group_value(maximo, ROMANEIO_MIC_GROUP, mic_avg),
    )
    strength = Stats(
        min=_group_value(minimo, ROMANEIO_STRENGTH_GROUP, strength_avg),
        avg=strength_avg,
        max=_group_value(maximo, ROMANEIO_STRENGTH_GROUP, strength_avg),
    )

    # contagem de códigos é mais confiável que a quantidade impressa
    bale_codes = count_bale_codes(text)
    return LotRecord(
        lot_id=extract_lot_identifier(text, filename),
        total_weight=extract_lot_weight(text),
        bale_count=str(bale_codes) if bale_codes > 0 else UNKNOWN,
        micronaire=micronaire,
        fiber_length=fiber_length,
        strength=strength,
        sci_avg=sci_avg,
        source_document=filename,
    )


# ---------------------------------------------------------------------------
# Layouts com uma linha por fardo (G4 COTTON e Siagri)
# ---------------------------------------------------------------------------

TYPE_CODE_TOKEN = re.compile(r"^\d+-\d+$")
BALE_WEIGHT_RANGE = (150.0, 300.0)
G4_SCI_RANGE = (84.0, 92.0)
SCI_TAIL_TOKENS = 8


@dataclass(frozen=True)
class FieldBand:
    """Faixa de valores aceitos para um campo num intervalo de posições da linha."""

    first: int
    last: int | None
    low: float
    high: float

    def pick(self, numbers: List[float]) -> float | None:
        for index, value in enumerate(numbers):
            if index < self.first:
                continue
            if self.last is not None and index > self.last:
                break
            if self.low <= value <= self.high:
                return value
        return None


@dataclass(frozen=True)
class BaleProfile:
    min_numbers: int
    tail_length: int
    skip_type_codes: bool
    fiber_length: FieldBand
    strength: FieldBand
    micronaire: FieldBand
    read_sci: bool


# Fardo | Líquido Máq Tipo Área UHM Ui Sfc Res Elg Mic Rd +b Csp ... Comp SCI
G4_PROFILE = BaleProfile(
    min_numbers=10,
    tail_length=400,
    skip_type_codes=True,
    fiber_length=FieldBand(2, 5, 1.0, 1.35),
    strength=FieldBand(5, 8, 28.0, 35.0),
    micronaire=FieldBand(7, 10, 3.5, 5.5),
    read_sci=True,
)
G4_DIRECT_PROFILE = replace(G4_PROFILE, min_numbers=8)

# Fardo | Líquido Máq Q.Cor %Umid Área Uhm Unif FC Resist Along Micron RD +B
SIAGRI_PROFILE = BaleProfile(
    min_numbers=10,
    tail_length=200,
    skip_type_codes=False,
    fiber_length=FieldBand(4, 6, 1.0, 1.35),
    strength=FieldBand(7, 10, 25.0, 35.0),
    micronaire=FieldBand(9, None, 3.5, 5.5),
    read_sci=False,
)


def window_numbers(window_text: str, skip_type_codes: bool = True) -> List[float]:
    numbers: List[float] = []
    for token in window_text.split():
        if skip_type_codes and TYPE_CODE_TOKEN.match(token):
            continue
        value = parse_number_token(token)
        if value is not None:
            numbers.append(value)
    return numbers


def _pick_sci(numbers: List[float]) -> float | None:
    # SCI é inteiro (86,00) entre os últimos valores da linha
    for value in reversed(numbers[-SCI_TAIL_TOKENS:]):
        if G4_SCI_RANGE[0] <= value <= G4_SCI_RANGE[1] and abs(value - round(value)) < 0.01:
            return float(round(value))
    return None


def collect_bale_samples(text: str, profile: BaleProfile) -> LotAccumulator:
    samples = LotAccumulator()
    for window in bale_windows(text, profile.tail_length):
        numbers = window_numbers(window.text, skip_type_codes=profile.skip_type_codes)
        if len(numbers) < profile.min_numbers:
            continue
        weight = numbers[0]
        samples.add(
            micronaire=profile.micronaire.pick(numbers) or 0,
            fiber_length=profile.fiber_length.pick(numbers) or 0,
            strength=profile.strength.pick(numbers) or 0,
            sci=(_pick_sci(numbers) or 0) if profile.read_sci else 0,
            weight=weight if BALE_WEIGHT_RANGE[0] <= weight <= BALE_WEIGHT_RANGE[1] else 0,
        )
    LOGGER.debug(
        "Amostras por fardo: %d peso, %d mic, %d uhm, %d res, %d sci",
        len(samples.weight),
        len(samples.micronaire),
        len(samples.fiber_length),
        len(samples.strength),
        len(samples.sci),
    )
    return samples


def _prefer_printed_average(stats: Stats, printed_avg: float) -> Stats:
    # média impressa no resumo; mín/máx dos fardos (cada um cai no outro se zerado)
    return Stats(
        min=stats.min if stats.min > 0 else printed_avg,
        avg=printed_avg if printed_avg > 0 else stats.avg,
        max=stats.max if stats.max > 0 else printed_avg,
    )


def extract_g4_summary(text: str, filename: str) -> LotRecord | None:
    summary = G4_SUMMARY_PATTERN.search(text)
    if summary is None:
        return None
    # grupos: 1 Qtd, 2 Área, 3 UHM, 4 Ui, 5 Sfc, 6 Res, 7 Elg, 8 Mic
    length_avg = parse_locale_number(summary.group(3))
    strength_avg = parse_locale_number(summary.group(6))
    mic_avg = parse_locale_number(summary.group(8))
    LOGGER.debug("%s: médias G4 UHM=%s RES=%s MIC=%s", filename, length_avg, strength_avg, mic_avg)

    samples = collect_bale_samples(text, G4_PROFILE)
    bale_codes = count_bale_codes(text)
    return LotRecord(
        lot_id=extract_lot_identifier(text, filename),
        total_weight=samples.total_weight(),
        bale_count=str(bale_codes) if bale_codes > 0 else summary.group(1),
        micronaire=_prefer_printed_average(calculate_stats(samples.micronaire), mic_avg),
        fiber_length=_prefer_printed_average(calculate_stats(samples.fiber_length), length_avg),
        strength=_prefer_printed_average(calculate_stats(samples.strength), strength_avg),
        sci_avg=samples.sci_average(),
        source_document=filename,
    )


def extract_g4_bales(text: str, filename: str) -> LotRecord | None:
    samples = collect_bale_samples(text, G4_DIRECT_PROFILE)
    if samples.is_empty:
        LOGGER.debug("%s: G4 sem linha de resumo e sem fardos legíveis", filename)
        return None
    bale_codes = count_bale_codes(text)
    return samples.to_record(
        lot_id=extract_lot_identifier(text, filename),
        bale_count=str(bale_codes) if bale_codes > 0 else UNKNOWN,
        source_document=filename,
    )


def extract_siagri(text: str, filename: str) -> LotRecord | None:
    printed = QTD_FARDOS_PATTERN.search(text)
    if printed is None:
        return None
    samples = collect_bale_samples(text, SIAGRI_PROFILE)
    if samples.is_empty:
        LOGGER.debug("%s: Siagri sem fardos legíveis", filename)
        return None
    return samples.to_record(
        lot_id=extract_lot_identifier(text, filename),
        bale_count=printed.group(1),
        source_document=filename,
    )


# ---------------------------------------------------------------------------
# Genérico
# ---------------------------------------------------------------------------

BALES_AND_WEIGHT_PATTERN = re.compile(r"(\d+)\s*Fardos\s+([\d.,]+)", re.IGNORECASE)
BALES_PATTERN = re.compile(r"Fardos[:\s]+(\d+)", re.IGNORECASE)
QTD_BALES_PATTERN = re.compile(r"Qtd\s*Fardos[:\s]+(\d+)", re.IGNORECASE)
WEIGHT_KG_PATTERN = re.compile(r"Peso[:\s]+([\d.,]+)\s*Kg", re.IGNORECASE)

SUMMARY_STAT_LABELS: Dict[str, tuple[str, ...]] = {
    "min": ("mínimo", "minimo", "minimum", "min", "3- mínimo", "3-mínimo"),
    "avg": ("média", "media", "average", "avg", "1- média", "1-média"),
    "max": ("máximo", "maximo", "maximum", "max", "2- máximo", "2-máximo"),
}
GENERIC_FIELDS = ("mic", "uhm", "str", "sci")

PLAIN_NUMBER = re.compile(r"^\d+\.?\d*$")
ROW_SPLIT = re.compile(r"\n|\s{3,}")
BALE_ROW_START = (re.compile(r"^00\d{10,}"), re.compile(r"^\d{15,}"))
ROW_NUMBER_LIMIT = 10000


def _plain_numbers(chunk: str) -> List[float]:
    numbers: List[float] = []
    for token in chunk.split():
        token = token.replace(",", ".", 1)
        if PLAIN_NUMBER.match(token):
            numbers.append(float(token))
    return numbers


def _first_in(numbers: List[float], *ranges: tuple[float, float]) -> float | None:
    for value in numbers:
        if any(low <= value <= high for low, high in ranges):
            return value
    return None


def generic_counts(text: str) -> tuple[str, str]:
    """Quantidade de fardos e peso pelos rótulos comuns; a última ocorrência vence."""
    bale_count = UNKNOWN
    weight = UNKNOWN
    match = BALES_AND_WEIGHT_PATTERN.search(text)
    if match:
        bale_count = match.group(1)
        weight = weight_display(match.group(2))
    match = BALES_PATTERN.search(text)
    if match:
        bale_count = match.group(1)
    match = QTD_BALES_PATTERN.search(text)
    if match:
        bale_count = match.group(1)
    match = WEIGHT_KG_PATTERN.search(text)
    if match:
        weight = weight_display(match.group(1))
    return bale_count, weight


def classify_summary_numbers(numbers: List[float]) -> Dict[str, float]:
    """Identifica os campos de uma linha MIN/AVG/MAX pela faixa de cada número."""
    found: Dict[str, float] = {}
    mic = _first_in(numbers, (3, 6))
    if mic:
        found["mic"] = mic
    length = _first_in(numbers, (0.9, 1.5), (25, 40))
    if length:
        found["uhm"] = normalize_length_to_inches(length)
    strength = next((value for value in numbers if 25 <= value <= 40 and value != length), None)
    if strength:
        found["str"] = strength
    sci = _first_in(numbers, (80, 200))
    if sci:
        found["sci"] = sci
    return found


def labeled_summary_stats(text: str) -> Dict[str, Stats]:
    parts: Dict[str, Dict[str, float]] = {field: {"min": 0.0, "avg": 0.0, "max": 0.0} for field in GENERIC_FIELDS}
    for stat, labels in SUMMARY_STAT_LABELS.items():
        for label in labels:
            match = re.search(re.escape(label) + r"[:\s]+([\d,\.\s]+)", text, re.IGNORECASE)
            if not match:
                continue
            numbers = _plain_numbers(match.group(1))
            LOGGER.debug("Rótulo %r: %s", label, numbers)
            for field, value in classify_summary_numbers(numbers).items():
                parts[field][stat] = value
            break
    return {field: Stats(**values) for field, values in parts.items()}


def _is_bale_row(line: str) -> bool:
    stripped = line.strip()
    return any(pattern.match(stripped) for pattern in BALE_ROW_START)


def classify_row_number(value: float, samples: LotAccumulator) -> None:
    if 3 <= value <= 6:
        samples.micronaire.append(value)
    elif 0.9 <= value <= 1.5:
        samples.fiber_length.append(value)
    elif 25 <= value <= 40:
        if 27 <= value <= 35:
            # faixa ambígua: UHM em mm ou resistência
            if samples.fiber_length:
                samples.strength.append(value)
            else:
                samples.fiber_length.append(normalize_length_to_inches(value))
        elif value > 35:
            samples.strength.append(value)
        else:
            samples.fiber_length.append(normalize_length_to_inches(value))
    elif 80 <= value <= 200:
        samples.sci.append(value)


def scan_bale_rows(text: str) -> LotAccumulator:
    samples = LotAccumulator()
    for line in ROW_SPLIT.split(text):
        if not _is_bale_row(line):
            continue
        for value in _plain_numbers(line):
            if value < ROW_NUMBER_LIMIT:
                classify_row_number(value, samples)
    return samples


def extract_generic(text: str, filename: str) -> LotRecord:
    bale_count, weight = generic_counts(text)
    stats = labeled_summary_stats(text)

    if stats["mic"].avg == 0 and stats["str"].avg == 0:
        LOGGER.debug("%s: sem linhas MIN/AVG/MAX, varrendo linhas de fardo", filename)
        samples = scan_bale_rows(text)
        for field, values in (
            ("mic", samples.micronaire),
            ("uhm", samples.fiber_length),
            ("str", samples.strength),
            ("sci", samples.sci),
        ):
            if values:
                stats[field] = calculate_stats(values)
        if bale_count == UNKNOWN and samples.micronaire:
            bale_count = format_count(len(samples.micronaire))

    sci = stats["sci"].avg
    return LotRecord(
        lot_id=extract_lot_identifier(text, filename),
        total_weight=weight,
        bale_count=bale_count,
        micronaire=stats["mic"],
        fiber_length=stats["uhm"],
        strength=stats["str"],
        sci_avg=sci if sci > 0 else None,
        source_document=filename,
    )


PDF_EXTRACTORS: Dict[LayoutKind, Callable[[str, str], LotRecord | None]] = {
    LayoutKind.ROMANEIO_HVI: extract_romaneio_hvi,
    LayoutKind.G4_RESUMO: extract_g4_summary,
    LayoutKind.G4_FARDOS: extract_g4_bales,
    LayoutKind.SIAGRI: extract_siagri,
    LayoutKind.GENERICO: extract_generic,
}


def extract_pdf_text(text: str, filename: str) -> List[LotRecord]:
    """Aplica os extratores na ordem da classificação até um deles reconhecer o lote."""
    for kind in candidate_layouts(text):
        record = PDF_EXTRACTORS[kind](text, filename)
        if record is None:
            continue
        LOGGER.info("%s: layout %s", filename, kind.value)
        if not record.has_measurements:
            LOGGER.warning("%s: nenhum valor de Mic/UHM/Res encontrado; lote descartado", filename)
            return []
        return [record]
    return []


__all__ = [
    "LayoutKind",
    "PDF_EXTRACTORS",
    "pages_to_text",
    "find_sci_before_csp",
    "window_numbers",
    "collect_bale_samples",
    "classify_summary_numbers",
    "classify_row_number",
    "extract_romaneio_hvi",
    "extract_g4_summary",
    "extract_g4_bales",
    "extract_siagri",
    "extract_generic",
    "extract_pdf_text",
]
