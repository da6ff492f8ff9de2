"""Tests for the DateRange value object."""

from __future__ import annotations

from datetime import date

from django.test import SimpleTestCase

from shared.domain.value_objects import DateRange, InvalidDateRange, parse_iso_date


class ParseIsoDateTests(SimpleTestCase):
    def test_parses_year_month_day(self) -> None:
        self.assertEqual(parse_iso_date("2050-01-05"), date(2050, 1, 5))

    def test_rejects_other_formats(self) -> None:
        for value in ("05/01/2050", "2050-13-01", "tomorrow", "", None, 20500101, ["2050-01-01"]):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_iso_date(value)


class DateRangeTests(SimpleTestCase):
    def test_requires_at_least_one_night(self) -> None:
        with self.assertRaises(InvalidDateRange):
            DateRange(date(2050, 1, 1), date(2050, 1, 1))
        with self.assertRaises(InvalidDateRange):
            DateRange(date(2050, 1, 2), date(2050, 1, 1))

    def test_length_is_number_of_nights(self) -> None:
        self.assertEqual(len(DateRange(date(2050, 1, 1), date(2050, 1, 4))), 3)

    def test_overlap_is_half_open(self) -> None:
        stay = DateRange(date(2050, 1, 1), date(2050, 1, 3))

        self.assertTrue(stay.overlaps_with(DateRange(date(2050, 1, 2), date(2050, 1, 4))))
        self.assertTrue(stay.overlaps_with(DateRange(date(2049, 12, 30), date(2050, 1, 10))))
        # Checkout day is free for the next guest
        self.assertFalse(stay.overlaps_with(DateRange(date(2050, 1, 3), date(2050, 1, 5))))
        self.assertFalse(stay.overlaps_with(DateRange(date(2049, 12, 30), date(2050, 1, 1))))

    def test_overlap_is_symmetric(self) -> None:
        a = DateRange(date(2050, 1, 1), date(2050, 1, 3))
        b = DateRange(date(2050, 1, 2), date(2050, 1, 6))
        self.assertEqual(a.overlaps_with(b), b.overlaps_with(a))

    def test_from_strings_and_isoformat(self) -> None:
        stay = DateRange.from_strings("2050-02-01", "2050-02-03")
        self.assertEqual(stay.isoformat(), ("2050-02-01", "2050-02-03"))
        self.assertEqual(str(stay), "2050-02-01 - 2050-02-03")
