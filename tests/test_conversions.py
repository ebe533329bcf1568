import unittest

from skycast.conversions import classify_condition, convert_temperature
from skycast.domain import ConditionCategory, TemperatureUnit


class TestConvertTemperature(unittest.TestCase):
    def test_celsius_rounds_to_one_decimal(self):
        self.assertEqual(convert_temperature(21.34, TemperatureUnit.CELSIUS), 21.3)
        self.assertEqual(convert_temperature(-3.06, "C"), -3.1)
        self.assertEqual(convert_temperature(0, "C"), 0.0)

    def test_celsius_tie_uses_exact_binary_value(self):
        # 21.25 is exactly representable, so the tie rounds away from zero
        self.assertEqual(convert_temperature(21.25, "C"), 21.3)
        self.assertEqual(convert_temperature(-21.25, "C"), -21.3)

    def test_fahrenheit_formula_and_integer_result(self):
        for temp_c, expected in [(0, 32), (100, 212), (-40, -40), (21.3, 70), (37.0, 99)]:
            with self.subTest(temp_c=temp_c):
                value = convert_temperature(temp_c, TemperatureUnit.FAHRENHEIT)
                self.assertEqual(value, expected)
                self.assertIsInstance(value, int)

    def test_fahrenheit_matches_nearest_integer(self):
        for temp_c in [-12.7, -1.1, 3.3, 14.9, 28.4, 33.33]:
            with self.subTest(temp_c=temp_c):
                self.assertEqual(convert_temperature(temp_c, "F"), round(temp_c * 9 / 5 + 32))

    def test_fahrenheit_ties_round_up(self):
        self.assertEqual(convert_temperature(2.5, "F"), 37)  # 36.5
        self.assertEqual(convert_temperature(-17.5, "F"), 1)  # 0.5

    def test_unknown_unit_rejected(self):
        with self.assertRaises(ValueError):
            convert_temperature(10, "K")


class TestClassifyCondition(unittest.TestCase):
    def test_table(self):
        cases = {
            "clear": ConditionCategory.CLEAR,
            "sunny": ConditionCategory.CLEAR,
            "rain": ConditionCategory.RAIN,
            "rainy": ConditionCategory.RAIN,
            "snow": ConditionCategory.SNOW,
            "snowy": ConditionCategory.SNOW,
            "clouds": ConditionCategory.CLOUDS,
            "cloudy": ConditionCategory.CLOUDS,
            "mist": ConditionCategory.MIST,
            "fog": ConditionCategory.MIST,
        }
        for raw, expected in cases.items():
            with self.subTest(raw=raw):
                self.assertEqual(classify_condition(raw), expected)

    def test_case_insensitive(self):
        self.assertEqual(classify_condition("RAIN"), classify_condition("rain"))
        self.assertEqual(classify_condition("Rain"), ConditionCategory.RAIN)
        self.assertEqual(classify_condition("Clouds"), ConditionCategory.CLOUDS)

    def test_unmatched_is_unknown(self):
        self.assertEqual(classify_condition("tornado"), ConditionCategory.UNKNOWN)
        self.assertEqual(classify_condition("Drizzle"), ConditionCategory.UNKNOWN)
        self.assertEqual(classify_condition(""), ConditionCategory.UNKNOWN)
        self.assertEqual(classify_condition(" rain "), ConditionCategory.UNKNOWN)

    def test_non_string_does_not_raise(self):
        self.assertEqual(classify_condition(None), ConditionCategory.UNKNOWN)
        self.assertEqual(classify_condition(42), ConditionCategory.UNKNOWN)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
