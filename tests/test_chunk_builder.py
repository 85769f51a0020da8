# ==============================================================================
# Файл: tests/test_chunk_builder.py
# Назначение: Тесты построения сеток высот чанков и их кэша.
# ==============================================================================
import unittest

import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from terrain_engine.core.preset import TerrainParameters
from terrain_engine.core.types import Chunk, ChunkState
from terrain_engine.world import (
    ChunkHeightBuilder,
    ChunkManager,
    HeightField,
    HeightmapQuery,
    build_chunk_heights,
    chunk_vertex_coords,
)


class TestChunkBuilder(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        # segments=40 -> 10 сегментов на чанк, чтобы тесты были быстрыми
        cls.params = TerrainParameters(segments=40)
        cls.query = HeightmapQuery(HeightField(cls.params))
        cls.manager = ChunkManager(cls.params)

    def _chunk(self, cx, cz, lod=4):
        return Chunk(cx, cz, self.manager.chunk_bounds(cx, cz), lod)

    def test_vertex_coords(self):
        xs, zs = chunk_vertex_coords(self._chunk(0, 0, lod=4))
        self.assertEqual(xs.tolist(), [-1250.0, -1125.0, -1000.0, -875.0, -750.0])
        self.assertEqual(zs[0], -1250.0)
        self.assertEqual(zs[-1], -750.0)

    def test_grid_shape_and_corners(self):
        print("\n[TEST] Running test_grid_shape_and_corners...")
        chunk = self._chunk(1, 3, lod=4)
        grid = build_chunk_heights(self.query, chunk)
        self.assertEqual(grid.shape, (5, 5))
        b = chunk.bounds
        self.assertEqual(grid[0, 0], np.float32(self.query.height_at(b.min_x, b.min_z)))
        self.assertEqual(grid[0, -1], np.float32(self.query.height_at(b.max_x, b.min_z)))
        self.assertEqual(grid[-1, 0], np.float32(self.query.height_at(b.min_x, b.max_z)))
        print("[TEST] test_grid_shape_and_corners: OK")

    def test_neighbours_share_edge(self):
        left = build_chunk_heights(self.query, self._chunk(1, 1))
        right = build_chunk_heights(self.query, self._chunk(2, 1))
        np.testing.assert_array_equal(left[:, -1], right[:, 0])

    def test_cache_by_lod(self):
        builder = ChunkHeightBuilder(self.query, capacity=2)
        a = builder.build(self._chunk(0, 0, lod=4))
        self.assertIs(builder.build(self._chunk(0, 0, lod=4)), a)
        self.assertFalse(a.flags.writeable)
        b = builder.build(self._chunk(0, 0, lod=2))
        self.assertEqual(b.shape, (3, 3))
        self.assertEqual(len(builder), 2)

        builder.build(self._chunk(1, 0, lod=2))
        self.assertEqual(len(builder), 2)  # самый старый вытеснен
        self.assertIsNot(builder.build(self._chunk(0, 0, lod=4)), a)

        self.assertEqual(builder.discard(0, 0), 1)
        builder.clear()
        self.assertEqual(len(builder), 0)

    def test_build_many_marks_materialized(self):
        print("\n[TEST] Running test_build_many_marks_materialized...")
        manager = ChunkManager(self.params.replace(view_distance=300.0))
        vs = manager.tick((0.0, 0.0))
        builder = ChunkHeightBuilder(self.query, manager)
        grids = builder.build_many(vs, max_workers=2)

        self.assertEqual(set(grids), set(vs.keys()))
        for key, grid in grids.items():
            self.assertEqual(grid.shape, (11, 11))
        self.assertTrue(all(c.state is ChunkState.MATERIALIZED for c in manager.visible))
        self.assertEqual(builder.build_many([]), {})
        print("[TEST] test_build_many_marks_materialized: OK")


if __name__ == "__main__":
    unittest.main()
