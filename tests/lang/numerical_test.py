import unittest

from monkey.lang.error import GenericException
from monkey.lang.numerical import INT_MAX, INT_MIN, divide, number, wrap


class NumericalTestCase(unittest.TestCase):

    def test_number(self):
        should_fail = ["-2", "0.3", "abc", "", "9223372036854775808"]
        for case in should_fail:
            self.assertRaises(GenericException, number, case)

        should_pass = {"0": 0, "5": 5, "007": 7, "9223372036854775807": INT_MAX}
        for case, result in should_pass.items():
            self.assertEqual(result, number(case), case)

    def test_wrap(self):
        cases = {
            0: 0,
            -1: -1,
            INT_MAX: INT_MAX,
            INT_MAX + 1: INT_MIN,
            INT_MIN - 1: INT_MAX,
            INT_MAX * 2: -2,
        }
        for case, result in cases.items():
            self.assertEqual(result, wrap(case), case)

    def test_divide(self):
        cases = {
            (10, 2): 5,
            (7, 2): 3,
            (-5, 2): -2,
            (5, -2): -2,
            (-5, -2): 2,
            (0, 3): 0,
            (INT_MIN, -1): INT_MIN,
        }
        for (left, right), result in cases.items():
            self.assertEqual(result, divide(left, right), (left, right))

        self.assertRaises(ZeroDivisionError, divide, 1, 0)


if __name__ == '__main__':
    unittest.main()
