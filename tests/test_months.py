import unittest

from fiscal.calendar.months import month_number, weeks_per_month


class TestMonthPattern(unittest.TestCase):
    def test_thresholds_52_week_year(self):
        self.assertEqual(month_number(1, False), "01")
        self.assertEqual(month_number(4, False), "01")
        self.assertEqual(month_number(5, False), "02")
        self.assertEqual(month_number(13, False), "03")
        self.assertEqual(month_number(34, False), "08")
        self.assertEqual(month_number(35, False), "09")
        self.assertEqual(month_number(52, False), "12")
        self.assertIsNone(month_number(53, False))

    def test_thresholds_53_week_year(self):
        self.assertEqual(month_number(30, True), "07")
        self.assertEqual(month_number(35, True), "08")
        self.assertEqual(month_number(36, True), "09")
        self.assertEqual(month_number(48, True), "11")
        self.assertEqual(month_number(53, True), "12")
        self.assertIsNone(month_number(54, True))

    def test_below_one(self):
        self.assertIsNone(month_number(0, False))

    def test_monotonic(self):
        for long_year, last in ((False, 52), (True, 53)):
            months = [month_number(w, long_year) for w in range(1, last + 1)]
            self.assertEqual(months, sorted(months))
            self.assertEqual(len(set(months)), 12)

    def test_weeks_per_month(self):
        self.assertEqual(weeks_per_month(False), (4, 4, 5, 4, 4, 5, 4, 4, 5, 4, 4, 5))
        self.assertEqual(weeks_per_month(True), (4, 4, 5, 4, 4, 5, 4, 5, 5, 4, 4, 5))
        self.assertEqual(sum(weeks_per_month(True)), 53)


if __name__ == "__main__":
    unittest.main()
