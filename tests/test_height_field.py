# ==============================================================================
# Файл: tests/test_height_field.py
# Назначение: Тесты итоговой высоты: детерминизм, ограниченность, закрытая
# формула для упрощённой конфигурации, равнины, запрос высоты хостом.
# ==============================================================================
import math
import random
import threading
import unittest

import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from terrain_engine.algorithms.terrain import combine_height, safety_clamp
from terrain_engine.core.noise import derive_noise_fields
from terrain_engine.core.preset import TerrainParameters
from terrain_engine.world import HeightField, HeightmapQuery

SAMPLE_POINTS = [
    (0.0, 0.0),
    (1000.123, -450.77),
    (-812.5, 1133.25),
    (2499.0, -2499.0),
    (-37.75, -1999.5),
    (15000.0, 4200.42),
]


def _closed_form_height(seed, x, z):
    """
    Высота при seed=24601, fBm выкл., эрозия/реки/долины/детали/горы = 0,
    собранная вручную из сырых выборок четырёх полей.
    """
    n0, n1, n2, n3 = derive_noise_fields(seed)

    f = 0.0006
    f2 = f * 1.5
    mask = (n0.sample(x * f, z * f) * 0.65
            + n1.sample(x * f2 + 1000.0, z * f2 + 1000.0) * 0.35) * 0.5 + 0.5
    if mask < 0.35:
        ff = (mask / 0.35) ** 1.8 * 0.25 + (1.0 - 0.25)
    else:
        ff = 1.0

    fb = 0.0005
    fb2 = fb * 0.6
    base = (n0.sample(x * fb + 3000.0, z * fb + 3000.0) * 0.65
            + n1.sample(x * fb2 + 4000.0, z * fb2 + 4000.0) * 0.35)
    fa = 0.0004
    base += 0.4 * n3.sample(x * fa + 8000.0, z * fa + 8000.0) * 1.4 - 0.75

    h = base
    h = h * h + (h * h * h - h * h) * 0.6

    fh = 0.002
    h += n3.sample(x * fh + 6000.0, z * fh + 6000.0) * 0.15 * ff
    h *= ff
    return h * 85.0


class TestHeightField(unittest.TestCase):

    def test_closed_form_without_optional_layers(self):
        print("\n[TEST] Running test_closed_form_without_optional_layers...")
        params = TerrainParameters(
            seed=24601,
            fbm_enabled=False,
            erosion_amount=0.0,
            river_amount=0.0,
            valley_depth=0.0,
            detail_amount=0.0,
            mountain_intensity=0.0,
        )
        hf = HeightField(params)
        for x, z in SAMPLE_POINTS:
            self.assertAlmostEqual(hf.height(x, z), _closed_form_height(24601, x, z), places=9,
                                   msg=f"closed form mismatch at ({x}, {z})")
        print("[TEST] test_closed_form_without_optional_layers: OK")

    def test_cross_instance_determinism(self):
        a = HeightField(TerrainParameters())
        b = HeightField(TerrainParameters())
        self.assertEqual(a.height(1000.123, -450.77), b.height(1000.123, -450.77))
        for x, z in SAMPLE_POINTS:
            self.assertEqual(a.height(x, z), a.height(x, z))
            self.assertEqual(a.height(x, z), b.height(x, z))

    def test_seed_changes_terrain(self):
        a = HeightField(TerrainParameters(seed=1))
        b = HeightField(TerrainParameters(seed=2))
        self.assertTrue(any(a.height(x, z) != b.height(x, z) for x, z in SAMPLE_POINTS))

    def test_bounded_at_random_points(self):
        print("\n[TEST] Running test_bounded_at_random_points...")
        rng = random.Random(7)
        hf = HeightField(TerrainParameters())
        for _ in range(150):
            x = rng.uniform(-1e5, 1e5)
            z = rng.uniform(-1e5, 1e5)
            h = hf.height(x, z)
            self.assertTrue(math.isfinite(h))
            self.assertLessEqual(abs(h), 10000.0)
        for x, z in [(1e9, -1e9), (-3.5e7, 12.0)]:
            h = hf.height(x, z)
            self.assertTrue(math.isfinite(h) and abs(h) <= 10000.0)
        print("[TEST] test_bounded_at_random_points: OK")

    def test_infinite_scale_clamps_to_zero(self):
        hf = HeightField(TerrainParameters(height_scale=float("inf")))
        for x, z in SAMPLE_POINTS:
            self.assertEqual(hf.height(x, z), 0.0)

    def test_adversarial_parameters_stay_bounded(self):
        params = TerrainParameters(
            height_scale=1e6,
            mountain_intensity=1e8,
            ridge_sharpness=-5.0,
            fbm_persistence=1e6,
            fbm_lacunarity=0.0,
            erosion_amount=50.0,
            river_falloff=0.0,
            flatness_threshold=0.0,
            smooth_lower_planes=3.0,
        )
        hf = HeightField(params)
        for x, z in SAMPLE_POINTS:
            h = hf.height(x, z)
            self.assertTrue(math.isfinite(h))
            self.assertLessEqual(abs(h), 10000.0)

    def test_non_finite_coordinates(self):
        hf = HeightField(TerrainParameters())
        self.assertEqual(hf.height(float("nan"), 0.0), 0.0)
        self.assertEqual(hf.height(0.0, float("inf")), 0.0)

    def test_safety_clamp(self):
        self.assertEqual(safety_clamp(float("nan")), 0.0)
        self.assertEqual(safety_clamp(float("-inf")), 0.0)
        self.assertEqual(safety_clamp(10000.5), 0.0)
        self.assertEqual(safety_clamp(-9999.0), -9999.0)

    def test_same_heights_from_many_threads(self):
        print("\n[TEST] Running test_same_heights_from_many_threads...")
        hf = HeightField(TerrainParameters())
        rng = random.Random(11)
        points = SAMPLE_POINTS + [(rng.uniform(-5000, 5000), rng.uniform(-5000, 5000)) for _ in range(40)]
        reference = [hf.height(x, z) for x, z in points]

        results = [None] * 6

        def worker(slot):
            results[slot] = [hf.height(x, z) for x, z in points]

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(len(results))]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for slot, values in enumerate(results):
            self.assertEqual(values, reference, f"thread {slot} diverged")
        print("[TEST] test_same_heights_from_many_threads: OK")

    def test_combine_height_matches_height_field(self):
        params = TerrainParameters(seed=99)
        fields = derive_noise_fields(99)
        hf = HeightField(params)
        for x, z in SAMPLE_POINTS:
            self.assertEqual(combine_height(fields, params, x, z), hf.height(x, z))

    def test_flatness_smooth_damps_plains(self):
        """
        На равнинах (маска ниже порога) сильное сглаживание снижает суммарный |h|
        по всем точкам выборки. Проверка интегральная: попарный разброс высот
        отдельных точек не сравнивается, холмы добавляются до общего множителя
        равнин и в отдельной паре разброс может и не уменьшиться.
        """
        base = TerrainParameters(
            erosion_amount=0.0, river_amount=0.0, mountain_intensity=0.0,
            smooth_lower_planes=0.0, valley_depth=0.0, detail_amount=0.0,
        )
        rough = HeightField(base.replace(flatness_smooth=0.0))
        smooth = HeightField(base.replace(flatness_smooth=1.0))
        mask_fields = derive_noise_fields(base.seed)

        from terrain_engine.algorithms.terrain import region_mask

        rough_sum = smooth_sum = 0.0
        count = 0
        for i in range(40):
            for j in range(40):
                x = -20000.0 + i * 1000.0
                z = -20000.0 + j * 1000.0
                if region_mask(mask_fields, x, z) >= base.flatness_threshold:
                    continue
                rough_sum += abs(rough.height(x, z))
                smooth_sum += abs(smooth.height(x, z))
                count += 1
        self.assertGreater(count, 10)
        self.assertLess(smooth_sum, rough_sum)

    def test_with_params_returns_new_field(self):
        hf = HeightField(TerrainParameters())
        other = hf.with_params(height_scale=170.0)
        self.assertIsNot(hf, other)
        self.assertEqual(hf.params.height_scale, 85.0)
        self.assertEqual(other.params.height_scale, 170.0)


class TestHeightmapQuery(unittest.TestCase):

    def setUp(self):
        self.field = HeightField(TerrainParameters())

    def test_height_at_and_call(self):
        q = HeightmapQuery(self.field)
        for x, z in SAMPLE_POINTS:
            self.assertEqual(q.height_at(x, z), self.field.height(x, z))
            self.assertEqual(q(x, z), self.field.height(x, z))

    def test_flip_z(self):
        q = HeightmapQuery(self.field, flip_z=True)
        self.assertTrue(q.flip_z)
        for x, z in SAMPLE_POINTS:
            self.assertEqual(q.height_at(x, z), self.field.height(x, -z))

    def test_sample_grid(self):
        q = HeightmapQuery(self.field)
        xs = [0.0, 100.0, 200.0]
        zs = [-50.0, 50.0]
        grid = q.sample_grid(xs, zs)
        self.assertEqual(grid.shape, (2, 3))
        self.assertEqual(grid.dtype, np.float32)
        self.assertEqual(grid[1, 2], np.float32(q.height_at(200.0, 50.0)))


if __name__ == "__main__":
    unittest.main()
