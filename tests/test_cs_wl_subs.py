import unittest
import numpy as np

from AeroBulk import (get_Rnl, cs_C35, cs_ecmwf, wl_ecmwf, lvap, gc)


class TestCoolSkin(unittest.TestCase):

    def setUp(self):
        n = 3
        self.sst = np.full(n, 300.)
        self.rho = np.full(n, 1.17)
        self.cp = np.full(n, 1020.)
        self.lv = lvap(self.sst)
        self.usr = np.array([0.1, 0.2, 0.4])
        self.grav = gc(np.full(n, 45.))

    def test_net_longwave(self):
        self.assertAlmostEqual(float(get_Rnl(300., 400.)), 57.49, places=1)

    def test_night_cooling(self):
        # no sun, the ocean loses heat: the skin is cooler than the bulk
        Rs = np.zeros(3)
        Rnl = get_Rnl(self.sst, np.full(3, 400.))
        tsr, qsr = np.full(3, -0.1), np.full(3, -1e-3)
        dter, tkt = cs_C35(self.sst, self.rho, Rs, Rnl, self.cp, self.lv,
                           np.full(3, 1e-3), self.usr, tsr, qsr, self.grav)
        self.assertTrue(np.all(dter > 0))
        self.assertTrue(np.all((tkt > 0) & (tkt <= 0.01)))
        dter, tkt = cs_ecmwf(self.rho, Rs, Rnl, self.cp, self.lv, self.usr,
                             tsr, qsr, self.sst, self.grav)
        self.assertTrue(np.all(dter > 0))
        self.assertTrue(np.all((tkt > 0) & (tkt <= 0.007)))
        # stronger mixing thins the skin layer
        self.assertTrue(np.all(np.diff(tkt) < 0))

    def test_solar_heating(self):
        # absorbed sunlight with no other heat loss warms the skin
        Rs, Rnl = np.full(3, 1000.), np.zeros(3)
        zeros = np.zeros(3)
        dter, _ = cs_C35(self.sst, self.rho, Rs, Rnl, self.cp, self.lv,
                         np.full(3, 1e-3), self.usr, zeros, zeros, self.grav)
        self.assertTrue(np.all(dter < 0))
        dter, _ = cs_ecmwf(self.rho, Rs, Rnl, self.cp, self.lv, self.usr,
                           zeros, zeros, self.sst, self.grav)
        self.assertTrue(np.all(dter < 0))


class TestWarmLayer(unittest.TestCase):

    def test_day_and_night(self):
        sst, rho, cp = np.full(2, 300.), np.full(2, 1.17), np.full(2, 1020.)
        lv = lvap(sst)
        usr = np.full(2, 0.1)
        tsr, qsr = np.full(2, -0.01), np.full(2, -1e-4)
        Rs = np.array([800., 0.])
        Rnl = np.full(2, 50.)
        dtwl = wl_ecmwf(rho, Rs, Rnl, cp, lv, usr, tsr, qsr, sst,
                        np.zeros(2), 9.8)
        self.assertGreater(dtwl[0], 0)
        self.assertEqual(dtwl[1], 0)
        self.assertTrue(np.all(np.isfinite(dtwl)))


if __name__ == '__main__':
    unittest.main()
