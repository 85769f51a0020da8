# ==============================================================================
# Файл: tests/test_terrain_layers.py
# Назначение: Юнит-тесты скалярных помощников и отдельных слоёв рельефа.
# ==============================================================================
import math
import unittest

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from terrain_engine.algorithms.terrain import (
    apply_erosion,
    erosion_factor,
    flatness_factor,
    mountain_mask,
    region_mask,
    ridge_terrain,
    river_channels,
)
from terrain_engine.core.noise import derive_noise_fields
from terrain_engine.core.preset import TerrainParameters
from terrain_engine.numerics.scalar import clamp, pingpong, safe_div, safe_pow, smoothstep

POINTS = [(i * 173.3 - 4000.0, 2900.0 - i * 97.7) for i in range(60)]


class TestScalarHelpers(unittest.TestCase):

    def test_pingpong(self):
        print("\n[TEST] Running test_pingpong...")
        self.assertAlmostEqual(pingpong(0.25, 1.0), 0.25)
        self.assertAlmostEqual(pingpong(1.5, 1.0), 0.5)
        self.assertAlmostEqual(pingpong(2.25, 1.0), 0.25)
        # усечённый остаток: отрицательный вход уходит в минус
        self.assertAlmostEqual(pingpong(-0.5, 1.0), -0.5)
        self.assertTrue(math.isnan(pingpong(float("inf"), 1.0)))
        self.assertTrue(math.isnan(pingpong(0.3, 0.0)))
        print("[TEST] test_pingpong: OK")

    def test_smoothstep(self):
        self.assertEqual(smoothstep(0.0, 1.0, -3.0), 0.0)
        self.assertEqual(smoothstep(0.0, 1.0, 4.0), 1.0)
        self.assertAlmostEqual(smoothstep(0.0, 1.0, 0.5), 0.5)

    def test_safe_div_and_pow(self):
        self.assertEqual(safe_div(1.0, 0.0), float("inf"))
        self.assertEqual(safe_div(-1.0, 0.0), float("-inf"))
        self.assertTrue(math.isnan(safe_div(0.0, 0.0)))
        self.assertTrue(math.isnan(safe_pow(-2.0, 0.5)))
        self.assertEqual(safe_pow(0.0, -1.0), float("inf"))
        self.assertEqual(safe_pow(10.0, 400.0), float("inf"))
        self.assertEqual(safe_pow(-2.0, 3.0), -8.0)

    def test_clamp_passes_nan(self):
        self.assertTrue(math.isnan(clamp(float("nan"), 0.0, 1.0)))
        self.assertEqual(clamp(5.0, 0.0, 1.0), 1.0)


class TestBiomeMask(unittest.TestCase):

    def test_region_mask_in_unit_range(self):
        fields = derive_noise_fields(24601)
        for x, z in POINTS:
            m = region_mask(fields, x, z)
            self.assertTrue(0.0 <= m <= 1.0, m)

    def test_flatness_is_one_above_threshold(self):
        self.assertEqual(flatness_factor(0.5, 0.35, 0.25), 1.0)
        self.assertEqual(flatness_factor(0.35, 0.35, 1.0), 1.0)

    def test_flatness_non_increasing_in_smooth(self):
        """Ниже порога большее сглаживание никогда не увеличивает множитель."""
        print("\n[TEST] Running test_flatness_non_increasing_in_smooth...")
        for mask in (0.0, 0.05, 0.2, 0.34):
            prev = None
            for i in range(11):
                f = flatness_factor(mask, 0.35, i / 10.0)
                self.assertLessEqual(f, 1.0)
                if prev is not None:
                    self.assertLessEqual(f, prev + 1e-12)
                prev = f
        self.assertEqual(flatness_factor(0.1, 0.35, 0.0), 1.0)
        print("[TEST] test_flatness_non_increasing_in_smooth: OK")

    def test_mountain_mask(self):
        self.assertEqual(mountain_mask(0.2, 0.35), 0.0)
        self.assertEqual(mountain_mask(0.35, 0.35), 0.0)
        values = [mountain_mask(0.35 + i * 0.05, 0.35) for i in range(1, 13)]
        self.assertEqual(values, sorted(values))
        self.assertGreater(values[-1], 0.0)


class TestLayers(unittest.TestCase):

    def setUp(self):
        self.params = TerrainParameters()
        self.fields = derive_noise_fields(self.params.seed)

    def test_ridges_gated_by_mountain_mask(self):
        for x, z in POINTS[:10]:
            self.assertEqual(ridge_terrain(self.fields, self.params, x, z, 0.0), 0.0)
            self.assertEqual(ridge_terrain(self.fields, self.params, x, z, 0.01), 0.0)

    def test_ridges_non_negative(self):
        for x, z in POINTS:
            r = ridge_terrain(self.fields, self.params, x, z, 0.3)
            self.assertTrue(math.isfinite(r))
            self.assertGreaterEqual(r, 0.0)
            self.assertLessEqual(r, self.params.mountain_intensity * 0.3 + 1e-9)

    def test_erosion_factor_non_negative(self):
        for x, z in POINTS:
            e = erosion_factor(self.fields, self.params, x, z)
            self.assertTrue(0.0 <= e <= 1.0, e)

    def test_apply_erosion(self):
        self.assertEqual(apply_erosion(0.0, 0.5, 0.3), 0.0)
        self.assertEqual(apply_erosion(0.8, 0.5, 0.0), 0.8)
        self.assertAlmostEqual(apply_erosion(1.0, 0.5, 1.0), 0.5)

    def test_river_channels_range(self):
        for x, z in POINTS:
            r = river_channels(self.fields, self.params, x, z)
            self.assertTrue(0.0 <= r <= 0.5, r)

    def test_layers_without_fbm(self):
        p = self.params.replace(fbm_enabled=False)
        for x, z in POINTS[:20]:
            self.assertTrue(0.0 <= river_channels(self.fields, p, x, z) <= 0.5)
            self.assertGreaterEqual(erosion_factor(self.fields, p, x, z), 0.0)
            self.assertGreaterEqual(ridge_terrain(self.fields, p, x, z, 0.5), 0.0)


if __name__ == "__main__":
    unittest.main()
