import unittest

from AeroBulk import (Algorithm, algorithm_to_string, get_algorithm,
                      AeroBulkError, UnknownAlgorithm)


class TestAlgorithm(unittest.TestCase):

    def test_names(self):
        expected = {Algorithm.OTHER: "Other",
                    Algorithm.COARE: "COARE 3.0",
                    Algorithm.COARE35: "COARE 3.5",
                    Algorithm.NCAR: "NCAR",
                    Algorithm.ECMWF: "ECMWF"}
        for algo, name in expected.items():
            self.assertEqual(algorithm_to_string(algo), name)

    def test_integer_and_string_tags(self):
        self.assertEqual(get_algorithm(2), Algorithm.COARE35)
        self.assertEqual(get_algorithm("coare35"), Algorithm.COARE35)
        self.assertEqual(get_algorithm("ECMWF"), Algorithm.ECMWF)
        self.assertEqual(get_algorithm(" ncar "), Algorithm.NCAR)
        self.assertEqual(algorithm_to_string(1), "COARE 3.0")
        self.assertEqual(algorithm_to_string("other"), "Other")

    def test_integer_values(self):
        self.assertEqual([int(a) for a in Algorithm], [0, 1, 2, 3, 4])

    def test_unknown_tag(self):
        for bad in (5, -1, "coare4", 2.5, None, True):
            with self.assertRaises(UnknownAlgorithm) as cm:
                algorithm_to_string(bad)
            self.assertIs(cm.exception.algo, bad)

    def test_error_hierarchy(self):
        with self.assertRaises(AeroBulkError):
            get_algorithm(99)
        with self.assertRaises(ValueError):
            get_algorithm("unknown")


if __name__ == '__main__':
    unittest.main()
