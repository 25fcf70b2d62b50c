from __future__ import annotations

"""Localização de colunas de planilhas HVI pelos nomes de cabeçalho (PT/EN)."""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

# Cada campo canônico aceita várias grafias de cabeçalho (comparação sem caixa).
COLUMN_ALIASES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        # índice de finura/maturidade
        "mic": ("mic", "micron", "micron.", "micronaire", "micronare", "micronário"),
        # UHM/UHML, em mm ou polegadas
        "uhm": (
            "uhm",
            "uhml",
            "uhl",
            "len",
            "length",
            "comprimento",
            "comp",
            "fibra",
            "fb",
            "staple",
            "staple length",
        ),
        # resistência (gf/tex)
        "str": (
            "str",
            "res",
            "resist",
            "resist.",
            "strength",
            "resistência",
            "resistencia",
            "tenacidade",
            "tenacity",
            "gf/tex",
        ),
        "ui": ("ui", "unif", "uniformidade", "uniformity", "unf"),
        "sfi": ("sfi", "sfc", "fc", "short fiber", "fibras curtas", "fibra curta"),
        "elg": ("elg", "along", "alongamento", "elongation", "elong"),
        "rd": ("rd", "reflectance", "reflectância", "reflectancia", "brilho"),
        "plusb": ("+b", "b", "amarelamento", "yellowness", "amarelo"),
        "sci": ("sci", "spinning consistency", "consistência"),
        "csp": ("csp", "count strength", "produto resistência"),
        "mat": ("mat", "maturity", "maturidade", "matur"),
        "leaf": ("leaf", "lf", "trash", "trid", "folha", "impurezas", "trash grade"),
        "weight": (
            "peso",
            "weight",
            "líquido",
            "liquido",
            "net weight",
            "peso líquido",
            "peso liquido",
            "kg",
            "kilos",
        ),
        "bale": (
            "fardo",
            "bale",
            "código gs1",
            "codigo gs1",
            "bale id",
            "nº fardo",
            "numero fardo",
            "n fardo",
        ),
        "lot": (
            "lote",
            "lot",
            "bloco",
            "romaneio",
            "batch",
            "block",
            "lote nº",
            "lote numero",
            "lot no",
            "lot #",
            "lote #",
            "n° lote",
            "nº lote",
            "lot number",
            "batch number",
            "batch no",
            "take up",
            "takeup",
            "pilha",
            "pile",
            "pilha/lote",
        ),
        "bale_count": (
            "qtde fardos",
            "qtd fardos",
            "fardos",
            "qty bales",
            "bale count",
            "quantidade",
            "qtde",
            "qty",
        ),
    }
)

SUMMARY_ROW_KEYWORDS = (
    "média",
    "media",
    "average",
    "avg",
    "mínimo",
    "minimo",
    "minimum",
    "min",
    "máximo",
    "maximo",
    "maximum",
    "max",
    "desvio",
    "deviation",
    "std",
    "sd",
    "c.v",
    "cv%",
    "coeficiente",
    "qtd fardos",
    "fardos:",
    "total",
    "sum",
)

LONG_BALE_CODE_CELL = re.compile(r"^00\d{13,}")
# nome do atributo em ColumnMap -> chave em COLUMN_ALIASES
_ALIAS_KEYS = {"strength": "str"}
_BRACKETS = re.compile(r"[\[\]()]")
_SPACES = re.compile(r"\s+")


def cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_header(value: object) -> str:
    text = cell_text(value).lower().strip()
    text = _BRACKETS.sub("", text)
    return _SPACES.sub(" ", text)


def find_column_index(headers: Sequence[object], field: str) -> int:
    """Índice da coluna do campo canônico: match exato primeiro, depois parcial; -1 se ausente."""
    aliases = COLUMN_ALIASES.get(field)
    if not aliases:
        return -1
    normalized = [normalize_header(header) for header in headers]

    for alias in aliases:
        alias_lower = alias.lower()
        for index, header in enumerate(normalized):
            if header == alias_lower:
                return index

    for alias in aliases:
        alias_lower = alias.lower()
        for index, header in enumerate(normalized):
            if not header:
                continue
            if alias_lower in header or header in alias_lower:
                return index
    return -1


@dataclass(frozen=True)
class ColumnMap:
    mic: int = -1
    uhm: int = -1
    strength: int = -1
    sci: int = -1
    lot: int = -1
    weight: int = -1
    bale: int = -1
    bale_count: int = -1
    ui: int = -1
    sfi: int = -1

    @property
    def key_field_count(self) -> int:
        return sum(1 for index in (self.mic, self.strength, self.uhm) if index >= 0)

    def cell(self, row: Sequence[object], field: str) -> object:
        index = getattr(self, field)
        if index < 0 or index >= len(row):
            return None
        return row[index]


def _is_exact_alias(header: object, field: str) -> bool:
    return normalize_header(header) in {alias.lower() for alias in COLUMN_ALIASES[field]}


def map_columns(headers: Sequence[object]) -> ColumnMap:
    resolved = {
        name: find_column_index(headers, _ALIAS_KEYS.get(name, name))
        for name in ColumnMap.__dataclass_fields__
    }
    shared = resolved["bale_count"]
    # "Fardo" é o código do fardo; só vira quantidade com cabeçalho explícito ("Qtd Fardos")
    if shared >= 0 and shared == resolved["bale"] and not _is_exact_alias(headers[shared], "bale_count"):
        resolved["bale_count"] = -1
    return ColumnMap(**resolved)


def is_summary_row(first_cell: object) -> bool:
    """Linhas de média/mínimo/total já presentes na planilha não são fardos."""
    text = cell_text(first_cell).lower()
    if not text:
        return False
    return any(keyword in text for keyword in SUMMARY_ROW_KEYWORDS)


def is_long_bale_code(value: object) -> bool:
    return bool(LONG_BALE_CODE_CELL.match(cell_text(value)))


__all__ = [
    "COLUMN_ALIASES",
    "SUMMARY_ROW_KEYWORDS",
    "ColumnMap",
    "cell_text",
    "normalize_header",
    "find_column_index",
    "map_columns",
    "is_summary_row",
    "is_long_bale_code",
]
