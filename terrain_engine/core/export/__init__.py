# ========================
# file: terrain_engine/core/export/__init__.py
# ========================
from .heightmap_exporters import normalize_heights, write_heightmap_png16, write_heightmap_r16

__all__ = ["normalize_heights", "write_heightmap_png16", "write_heightmap_r16"]
