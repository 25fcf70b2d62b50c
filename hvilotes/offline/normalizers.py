from __future__ import annotations

"""Conversão de números escritos em formato BR/US e normalização de comprimento."""

import re

MM_PER_INCH = 25.4

_LEADING_NUMBER = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)")
_NON_NUMERIC = re.compile(r"[^\d.\-]")
_STRICT_TOKEN = re.compile(r"^-?\d+\.?\d*$")


def _normalize_separators(text: str) -> str:
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            # 1.234,56 -> 1234.56
            return text.replace(".", "").replace(",", ".", 1)
        # 1,234.56 -> 1234.56
        return text.replace(",", "")
    if "," in text:
        return text.replace(",", ".", 1)
    return text


def parse_locale_number(value: object) -> float:
    """Interpreta um valor numérico com vírgula ou ponto decimal; 0.0 quando inválido."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", _normalize_separators(text))
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return 0.0
    try:
        return float(match.group(0))
    except ValueError:
        return 0.0


def parse_number_token(token: str) -> float | None:
    """Versão estrita para tokens de texto de PDF: None se o token não for um número."""
    text = token.strip()
    if not text:
        return None
    if "." in text and "," in text and text.rfind(",") > text.rfind("."):
        text = text.replace(".", "").replace(",", ".", 1)
    else:
        text = text.replace(",", ".", 1)
    if not _STRICT_TOKEN.match(text):
        return None
    return float(text)


def is_likely_millimeters(value: float) -> bool:
    # comprimento em polegadas fica perto de 1.0-1.4, em mm acima de 20
    return value > 2


def normalize_length_to_inches(value: float) -> float:
    if value <= 0:
        return 0.0
    if is_likely_millimeters(value):
        return value / MM_PER_INCH
    return value


__all__ = [
    "MM_PER_INCH",
    "parse_locale_number",
    "parse_number_token",
    "is_likely_millimeters",
    "normalize_length_to_inches",
]
