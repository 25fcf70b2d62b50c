import math
import unittest

from hvilotes.offline.normalizers import (
    is_likely_millimeters,
    normalize_length_to_inches,
    parse_locale_number,
    parse_number_token,
)
from hvilotes.offline.stats import Stats, calculate_stats


class ParseLocaleNumberTests(unittest.TestCase):
    def test_brazilian_thousands_and_decimal(self) -> None:
        self.assertAlmostEqual(parse_locale_number("1.234,56"), 1234.56)

    def test_us_thousands_and_decimal(self) -> None:
        self.assertAlmostEqual(parse_locale_number("1,234.56"), 1234.56)

    def test_lone_comma_is_decimal(self) -> None:
        self.assertAlmostEqual(parse_locale_number("4,25"), 4.25)
        self.assertAlmostEqual(parse_locale_number("-1,5"), -1.5)

    def test_units_are_stripped(self) -> None:
        self.assertAlmostEqual(parse_locale_number("  29,8 g/tex"), 29.8)

    def test_invalid_values_become_zero(self) -> None:
        for value in (None, "", "abc", "---", True):
            self.assertEqual(parse_locale_number(value), 0.0)

    def test_numbers_pass_through(self) -> None:
        self.assertEqual(parse_locale_number(3), 3.0)
        self.assertEqual(parse_locale_number(4.5), 4.5)


class ParseNumberTokenTests(unittest.TestCase):
    def test_comma_decimal(self) -> None:
        self.assertAlmostEqual(parse_number_token("4,12"), 4.12)

    def test_brazilian_thousands(self) -> None:
        self.assertAlmostEqual(parse_number_token("2.233,0"), 2233.0)

    def test_rejects_non_numbers(self) -> None:
        for token in ("10-2", "abc", "", "31-4", "4,1x"):
            self.assertIsNone(parse_number_token(token))


class LengthNormalizationTests(unittest.TestCase):
    def test_millimeters_are_converted(self) -> None:
        self.assertTrue(is_likely_millimeters(29.0))
        self.assertAlmostEqual(normalize_length_to_inches(29.0), 29.0 / 25.4)

    def test_inches_are_kept(self) -> None:
        self.assertFalse(is_likely_millimeters(1.12))
        self.assertEqual(normalize_length_to_inches(1.12), 1.12)

    def test_non_positive_is_zero(self) -> None:
        self.assertEqual(normalize_length_to_inches(0), 0.0)
        self.assertEqual(normalize_length_to_inches(-3), 0.0)


class CalculateStatsTests(unittest.TestCase):
    def test_ignores_zero_negative_and_nan(self) -> None:
        stats = calculate_stats([4.0, 0, -1, math.nan, math.inf, 5.0])
        self.assertEqual(stats.min, 4.0)
        self.assertAlmostEqual(stats.avg, 4.5)
        self.assertEqual(stats.max, 5.0)

    def test_empty_is_all_zero(self) -> None:
        self.assertEqual(calculate_stats([]), Stats())
        self.assertFalse(calculate_stats([0, -2]).has_values)


if __name__ == "__main__":
    unittest.main()
