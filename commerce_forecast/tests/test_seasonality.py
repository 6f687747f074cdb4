"""
Unit tests for the seasonality analyzer.
"""
import unittest
from datetime import datetime

from commerce_forecast.core.seasonality import (
    analyze_seasonality, calculate_monthly_means,
    MIN_SEASONALITY_RECORDS, PEAK_MONTH_RATIO, LOW_MONTH_RATIO, NEUTRAL_SEASONALITY_FACTOR
)
from helpers import daily_records, seasonal_records

NO_SEASON = {
    'has_season': False,
    'peak_months': [],
    'low_months': [],
    'seasonality_factor': NEUTRAL_SEASONALITY_FACTOR
}


def record(year, month, day, quantity):
    return {'quantity': quantity, 'revenue': quantity * 100, 'sale_date': datetime(year, month, day)}


class TestAnalyzeSeasonality(unittest.TestCase):
    """Test cases for analyze_seasonality."""

    def test_thresholds(self):
        self.assertEqual(MIN_SEASONALITY_RECORDS, 12)
        self.assertEqual(PEAK_MONTH_RATIO, 1.2)
        self.assertEqual(LOW_MONTH_RATIO, 0.8)

    def test_too_few_records(self):
        records = seasonal_records()[:11]

        self.assertEqual(analyze_seasonality(records), NO_SEASON)
        self.assertEqual(analyze_seasonality([]), NO_SEASON)

    def test_flat_year_has_no_season(self):
        records = [record(2023, month, 10, 20) for month in range(1, 13)]

        self.assertEqual(analyze_seasonality(records), NO_SEASON)

    def test_peak_and_low_months(self):
        """December averages 30, July 5 and the rest 10: grand mean 11.25."""
        result = analyze_seasonality(seasonal_records())

        self.assertTrue(result['has_season'])
        self.assertEqual(result['peak_months'], [12])
        self.assertEqual(result['low_months'], [7])
        # round(30 / 11.25 * 100)
        self.assertEqual(result['seasonality_factor'], 267)

    def test_peak_and_low_months_are_disjoint(self):
        records = [record(2023, month, 5, quantity)
                   for month, quantity in zip(range(1, 13), [1, 50, 3, 40, 5, 30, 7, 20, 9, 10, 11, 12])]

        result = analyze_seasonality(records)

        self.assertFalse(set(result['peak_months']) & set(result['low_months']))
        self.assertTrue(result['has_season'])

    def test_uses_mean_of_monthly_means(self):
        """A busy month does not outweigh a month with a single sale."""
        records = [record(2024, 1, day, 10) for day in range(1, 11)]
        records.append(record(2024, 2, 1, 40))
        records.append(record(2024, 3, 1, 10))

        result = analyze_seasonality(records)

        # monthly means 10, 40, 10 -> grand mean 20
        self.assertEqual(result['peak_months'], [2])
        self.assertEqual(result['low_months'], [1, 3])
        self.assertEqual(result['seasonality_factor'], 200)

    def test_absent_months_are_neither_peak_nor_low(self):
        records = daily_records([10] * 31 + [30] * 29)

        result = analyze_seasonality(records)

        # January averages 10, February 30 -> grand mean 20
        self.assertEqual(result['peak_months'], [2])
        self.assertEqual(result['low_months'], [1])
        for month in range(3, 13):
            self.assertNotIn(month, result['peak_months'] + result['low_months'])

    def test_zero_sales_have_no_season(self):
        records = [record(2023, month, 1, 0) for month in range(1, 13)]

        self.assertEqual(analyze_seasonality(records), NO_SEASON)


class TestMonthlyMeans(unittest.TestCase):

    def test_years_are_folded_together(self):
        records = [record(2022, 1, 10, 10), record(2023, 1, 10, 30), record(2023, 6, 1, 7)]

        self.assertEqual(calculate_monthly_means(records), {1: 20.0, 6: 7.0})


if __name__ == '__main__':
    unittest.main()
