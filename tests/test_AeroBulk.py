import unittest
import numpy as np
import pandas as pd

import AeroBulk
from AeroBulk import (Algorithm, BulkSolver, COARE35, ShapeMismatch,
                      UnknownAlgorithm, method_lookup_dict, res_vars)
from AeroBulk.flux_subs import get_zo, get_zot, psim_calc, psit_calc


def _batch(n, seed=0):
    rng = np.random.default_rng(seed)
    sst = rng.uniform(275, 303, n)
    return {"sst": sst,
            "t_zt": sst+rng.uniform(-4, 2, n),
            "q_zt": rng.uniform(0.003, 0.015, n),
            "U_zu": rng.uniform(-15, 15, n),
            "V_zu": rng.uniform(-15, 15, n),
            "slp": rng.uniform(98000, 103000, n)}


class SameAsCOARE35(BulkSolver):
    """ COARE 3.5 closure supplied from outside the registry """

    def __init__(self):
        self.meth = None
        self.default_gust = [1, 1.2, 600]
        self.skin = "C35"
        self.zeta_abs_max = 50

    def roughness(self, u10n, usr, Ta, zol):
        zo = get_zo(u10n, usr, Ta, self.grav, "C35")
        zot, zoq = get_zot(zo, usr, Ta, meth="C35")
        return zo, zot, zoq

    def psim(self, zol):
        return psim_calc(zol, "C35")

    def psit(self, zol):
        return psit_calc(zol, "C35")


class TestScenario(unittest.TestCase):

    inputs = {"sst": [300.0], "t_zt": [298.0], "q_zt": [0.01],
              "U_zu": [5.0], "V_zu": [0.0], "slp": [101300.0]}

    def test_coare(self):
        QL, QH, Tau_x, Tau_y = AeroBulk.model("coare", 2.0, 10.0, niter=5,
                                              **self.inputs)
        for arr in (QL, QH, Tau_x, Tau_y):
            self.assertEqual(arr.shape, (1,))
            self.assertEqual(arr.dtype, np.float64)
        # sea warmer than the air: heat leaves the ocean
        self.assertLess(QH[0], -3)
        self.assertGreater(QH[0], -40)
        self.assertLess(QL[0], -100)
        self.assertGreater(QL[0], -400)
        self.assertGreater(abs(QL[0]), abs(QH[0]))
        self.assertGreater(Tau_x[0], 0)
        self.assertLess(Tau_x[0], 1)
        self.assertEqual(Tau_y[0], 0)

    def test_coare_radiative(self):
        out = AeroBulk.model("coare", 2.0, 10.0, rad_sw=[200.0],
                             rad_lw=[-50.0], **self.inputs)
        self.assertEqual(len(out), 5)
        T_s = out[4]
        self.assertTrue(np.isfinite(T_s[0]))
        self.assertLess(T_s[0], 300.0)
        self.assertLess(abs(T_s[0]-300.0), 1.5)

    def test_radiative_pair(self):
        with self.assertRaises(ValueError):
            AeroBulk.model("coare", 2.0, 10.0, rad_sw=[200.0], **self.inputs)
        with self.assertRaises(ValueError):
            AeroBulk.model("coare", 2.0, 10.0, rad_lw=[350.0], **self.inputs)

    def test_all_variants(self):
        for algo in ("coare", "coare35", "ncar", "ecmwf"):
            QL, QH, Tau_x, Tau_y = AeroBulk.model(algo, 2.0, 10.0,
                                                  **self.inputs)
            self.assertLess(QH[0], 0, algo)
            self.assertLess(QL[0], 0, algo)
            self.assertGreater(Tau_x[0], 0, algo)


class TestBatch(unittest.TestCase):

    def test_output_length(self):
        data = _batch(17)
        for algo in Algorithm:
            if algo == Algorithm.OTHER:
                continue
            out = AeroBulk.model(algo, 2, 10, **data)
            self.assertEqual(len(out), 4)
            for arr in out:
                self.assertEqual(arr.shape, (17,))
            out = AeroBulk.model(algo, 2, 10, rad_sw=np.full(17, 300.),
                                 rad_lw=np.full(17, 350.), **data)
            self.assertEqual(len(out), 5)
            for arr in out:
                self.assertEqual(arr.shape, (17,))
                self.assertTrue(np.all(np.isfinite(arr)))

    def test_deterministic(self):
        data = _batch(12, seed=4)
        first = AeroBulk.model("ecmwf", 2, 10, **data)
        second = AeroBulk.model("ecmwf", 2, 10, **data)
        for a, b in zip(first, second):
            self.assertTrue(np.array_equal(a, b))

    def test_per_sample_independence(self):
        data = _batch(9, seed=5)
        before = AeroBulk.model("coare35", 2, 10, **data)
        changed = {k: np.copy(v) for k, v in data.items()}
        changed["t_zt"][4] += 5
        changed["U_zu"][4] = 0.3
        after = AeroBulk.model("coare35", 2, 10, **changed)
        keep = np.arange(9) != 4
        for a, b in zip(before, after):
            np.testing.assert_allclose(a[keep], b[keep], rtol=1e-12)
            self.assertNotEqual(a[4], b[4])

    def test_single_sample_matches_batch(self):
        data = _batch(5, seed=6)
        batch = AeroBulk.model("ncar", 3, 10, **data)
        single = AeroBulk.model("ncar", 3, 10,
                                **{k: v[2:3] for k, v in data.items()})
        for a, b in zip(batch, single):
            np.testing.assert_allclose(a[2:3], b, rtol=1e-12)

    def test_empty(self):
        empty = {k: [] for k in TestScenario.inputs}
        out = AeroBulk.model("coare", 2, 10, **empty)
        self.assertEqual(len(out), 4)
        for arr in out:
            self.assertEqual(arr.shape, (0,))
        out = AeroBulk.model("coare", 2, 10, rad_sw=[], rad_lw=[], **empty)
        self.assertEqual(len(out), 5)

    def test_mismatch(self):
        data = _batch(3)
        data["t_zt"] = data["t_zt"][:2]
        with self.assertRaises(ShapeMismatch) as cm:
            AeroBulk.model("coare", 2, 10, **data)
        self.assertEqual(cm.exception.field, "t_zt")
        self.assertEqual(cm.exception.expected, 3)
        self.assertEqual(cm.exception.got, 2)

    def test_scalar_rejected(self):
        data = _batch(1)
        data["sst"] = 300.
        with self.assertRaises(ShapeMismatch):
            AeroBulk.model("coare", 2, 10, **data)

    def test_parallel_matches_sequential(self):
        data = _batch(50, seed=7)
        seq = AeroBulk.model("coare", 2, 10, rad_sw=np.full(50, 150.),
                             rad_lw=np.full(50, 380.), **data)
        par = AeroBulk.model("coare", 2, 10, rad_sw=np.full(50, 150.),
                             rad_lw=np.full(50, 380.), nworkers=4, **data)
        for a, b in zip(seq, par):
            np.testing.assert_allclose(a, b, rtol=1e-12)
        # more workers than samples
        few = {k: v[:2] for k, v in data.items()}
        out = AeroBulk.model("coare", 2, 10, nworkers=8, **few)
        self.assertEqual(out[0].shape, (2,))

    def test_degenerate_sample_stays_local(self):
        data = _batch(4, seed=8)
        data["q_zt"][1] = np.nan
        QL, QH, Tau_x, Tau_y = AeroBulk.model("coare", 2, 10, **data)
        self.assertFalse(np.isfinite(QL[1]))
        self.assertTrue(np.all(np.isfinite(QL[[0, 2, 3]])))


class TestConfiguration(unittest.TestCase):

    def test_unknown_algorithm(self):
        with self.assertRaises(UnknownAlgorithm):
            AeroBulk.model("coare4", 2, 10, **_batch(2))
        with self.assertRaises(UnknownAlgorithm):
            AeroBulk.model(7, 2, 10, **_batch(2))

    def test_other_needs_closure(self):
        with self.assertRaises(UnknownAlgorithm):
            AeroBulk.model(Algorithm.OTHER, 2, 10, **_batch(2))
        with self.assertRaises(UnknownAlgorithm):
            AeroBulk.closure_for("other", closure=dict)
        with self.assertRaises(ValueError):
            AeroBulk.closure_for("coare", closure=SameAsCOARE35)

    def test_other_closure(self):
        data = _batch(6, seed=9)
        self.assertIs(AeroBulk.closure_for("other", SameAsCOARE35),
                      SameAsCOARE35)
        other = AeroBulk.model("other", 2, 10, closure=SameAsCOARE35, **data)
        ref = AeroBulk.model("coare35", 2, 10, **data)
        for a, b in zip(other, ref):
            np.testing.assert_allclose(a, b, rtol=1e-12)

    def test_method_lookup(self):
        self.assertIs(method_lookup_dict[Algorithm.COARE35], COARE35)
        iclass = method_lookup_dict[Algorithm.NCAR]()
        self.assertEqual(iclass.meth, "NCAR")
        self.assertEqual(iclass.default_gust, [0, 0, 0])

    def test_niter_reset(self):
        data = _batch(3)
        with self.assertWarns(UserWarning):
            out = AeroBulk.model("coare", 2, 10, niter=0, **data)
        ref = AeroBulk.model("coare", 2, 10, niter=1, **data)
        for a, b in zip(out, ref):
            np.testing.assert_array_equal(a, b)

    def test_invalid_options(self):
        data = _batch(3)
        bad = ({"gust": [2, 1.2, 600]}, {"gust": [1, 1.2]},
               {"qmeth": "Magnus"}, {"skin": "C30"}, {"wl": 1},
               {"nworkers": 0}, {"niter": 2.5})
        for kwargs in bad:
            with self.assertRaises(ValueError, msg=str(kwargs)):
                AeroBulk.model("coare", 2, 10, **kwargs, **data)
        with self.assertRaises(TypeError):
            AeroBulk.model("coare", 2, 10, maxiter=10, **data)

    def test_gust_off(self):
        data = _batch(5, seed=10)
        # unstable, so gustiness adds to the wind
        data["t_zt"] = data["sst"]-2
        on = AeroBulk.model("coare", 2, 10, **data)
        off = AeroBulk.model("coare", 2, 10, gust=0, **data)
        self.assertFalse(np.allclose(on[1], off[1]))

    def test_equal_heights(self):
        out = AeroBulk.model("ecmwf", 10, 10, **_batch(4, seed=11))
        for arr in out:
            self.assertTrue(np.all(np.isfinite(arr)))


class TestDataFrame(unittest.TestCase):

    def test_all_columns(self):
        data = _batch(8, seed=12)
        res = AeroBulk.AeroBulk("ecmwf", 2, 10, rad_sw=np.full(8, 100.),
                                rad_lw=np.full(8, 370.), wl=1, **data)
        self.assertIsInstance(res, pd.DataFrame)
        self.assertEqual(list(res.columns), list(res_vars)+["flag"])
        self.assertEqual(len(res), 8)
        QL, QH, Tau_x, Tau_y, T_s = AeroBulk.model(
            "ecmwf", 2, 10, rad_sw=np.full(8, 100.), rad_lw=np.full(8, 370.),
            wl=1, **data)
        np.testing.assert_allclose(res["QL"], QL, rtol=1e-12)
        np.testing.assert_allclose(res["T_s"], T_s, rtol=1e-12)
        self.assertTrue(np.all(res["dtwl"] >= 0))
        self.assertTrue(np.all(res["cd"] > 0))

    def test_selected_columns_and_flags(self):
        data = _batch(4, seed=13)
        data["slp"][3] = np.nan
        res = AeroBulk.AeroBulk("coare", 2, 10, out_var=("QH", "cd10n",
                                                         "monob"),
                                nworkers=2, **data)
        self.assertEqual(list(res.columns), ["QH", "cd10n", "monob", "flag"])
        self.assertEqual(res["flag"].iloc[3], "m")
        self.assertEqual(list(res.index), [0, 1, 2, 3])

    def test_unknown_column(self):
        with self.assertRaises(ValueError):
            AeroBulk.AeroBulk("coare", 2, 10, out_var=("sensible",),
                              **_batch(2))

    def test_empty(self):
        empty = {k: [] for k in TestScenario.inputs}
        res = AeroBulk.AeroBulk("ncar", 2, 10, out_var=["QL"], **empty)
        self.assertEqual(len(res), 0)
        self.assertEqual(list(res.columns), ["QL", "flag"])


if __name__ == '__main__':
    unittest.main()
