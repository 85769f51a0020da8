# Файл: run_terrain_preview.py
from __future__ import annotations
import argparse
import logging
import pathlib
import sys
import time

import numpy as np

ROOT = pathlib.Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from terrain_engine.core.export import write_heightmap_png16, write_heightmap_r16
from terrain_engine.core.preset import list_preset_ids, load_preset
from terrain_engine.setup_logging import setup_logging
from terrain_engine.world import ChunkHeightBuilder, ChunkManager, HeightField, HeightmapQuery

logger = logging.getLogger("terrain_engine.preview")


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Terrain preview: visible chunks + heightmap export")
    ap.add_argument("--preset", default="terrain/botw_v9",
                    help="preset id or path to JSON (available: %s)" % ", ".join(list_preset_ids()))
    ap.add_argument("--seed", type=int, default=None, help="override preset seed")
    ap.add_argument("--viewer", type=float, nargs=2, default=(0.0, 0.0), metavar=("X", "Z"))
    ap.add_argument("--build", action="store_true", help="materialize visible chunk grids")
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--preview", default=None, help="write whole-world PNG16 preview to this path")
    ap.add_argument("--r16", default=None, help="write whole-world raw r16 heightmap to this path")
    ap.add_argument("--size", type=int, default=256, help="preview resolution (pixels per side)")
    ap.add_argument("--verbose", "-v", action="store_true")
    ap.add_argument("--log-file", default=None)
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    overrides = {"seed": args.seed} if args.seed is not None else None
    params = load_preset(args.preset, overrides)

    field = HeightField(params)
    query = HeightmapQuery(field)
    manager = ChunkManager(params)

    visible = manager.tick(args.viewer)
    logger.info(
        f"Viewer ({args.viewer[0]:.1f}, {args.viewer[1]:.1f}): {len(visible)} visible chunks "
        f"of {manager.chunks_per_side ** 2}, generation {visible.generation}"
    )
    for chunk in sorted(visible, key=lambda c: (c.cz, c.cx)):
        logger.info(f"  chunk ({chunk.cx},{chunk.cz}) lod={chunk.lod} dist={chunk.distance:.1f}")

    if args.build:
        builder = ChunkHeightBuilder(query, manager, capacity=max(64, len(visible)))
        t0 = time.perf_counter()
        grids = builder.build_many(visible, max_workers=args.workers)
        logger.info(f"Built {len(grids)} chunk grids in {(time.perf_counter() - t0):.2f} s")
        lo = min(float(g.min()) for g in grids.values()) if grids else 0.0
        hi = max(float(g.max()) for g in grids.values()) if grids else 0.0
        logger.info(f"Height range over visible chunks: [{lo:.2f}, {hi:.2f}]")

    if args.preview or args.r16:
        half = params.world_size * 0.5
        axis = np.linspace(-half, half, max(2, args.size))
        t0 = time.perf_counter()
        grid = query.sample_grid(axis, axis)
        logger.info(f"Sampled {grid.shape[1]}x{grid.shape[0]} preview in {(time.perf_counter() - t0):.2f} s")
        if args.preview:
            write_heightmap_png16(args.preview, grid)
            logger.info(f"Preview saved: {args.preview}")
        if args.r16:
            write_heightmap_r16(args.r16, grid)
            logger.info(f"r16 heightmap saved: {args.r16}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
