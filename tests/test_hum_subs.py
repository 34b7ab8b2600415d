import unittest
import numpy as np

from AeroBulk import VaporPressure, qsat_sea, qsat_air
from AeroBulk.hum_subs import liquid_methods, ice_methods


class TestVaporPressure(unittest.TestCase):

    def test_liquid_methods_agree(self):
        # about 23.4 hPa at 20degC
        for meth in liquid_methods:
            es = float(VaporPressure(293.15, 1013, "liquid", meth))
            self.assertGreater(es, 22.8, meth)
            self.assertLess(es, 24.0, meth)

    def test_freezing_point(self):
        self.assertAlmostEqual(float(VaporPressure(273.15, 1013)), 6.1,
                               places=1)

    def test_ice_below_liquid(self):
        for meth in ice_methods:
            ice = float(VaporPressure(263.15, 1013, "ice", meth))
            liquid = float(VaporPressure(263.15, 1013, "liquid", meth))
            self.assertLess(ice, liquid, meth)

    def test_ice_above_freezing(self):
        T = np.array([278.15, 283.15])
        np.testing.assert_allclose(
            VaporPressure(T, 1013, "ice", "Buck2"),
            VaporPressure(T, 1013, "liquid", "HylandWexler"))

    def test_bad_arguments(self):
        with self.assertRaises(ValueError):
            VaporPressure(293.15, 1013, "liquid", "Magnus")
        with self.assertRaises(ValueError):
            VaporPressure(293.15, 1013, "ice", "WMO")
        with self.assertRaises(ValueError):
            VaporPressure(293.15, 1013, "vapour")


class TestSpecificHumidity(unittest.TestCase):

    def test_qsat_sea(self):
        qs = float(qsat_sea(300, 101300))
        self.assertGreater(qs, 0.020)
        self.assertLess(qs, 0.023)

    def test_salinity_reduction(self):
        T, P = np.array([285., 295., 305.]), np.full(3, 101300.)
        self.assertTrue(np.all(qsat_sea(T, P) < qsat_air(T, P)))
        self.assertTrue(np.all(qsat_air(T, P, rh=50) < qsat_air(T, P)))
        self.assertTrue(np.all(np.diff(qsat_sea(T, P)) > 0))


if __name__ == '__main__':
    unittest.main()
