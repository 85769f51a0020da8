# ==============================================================================
# Файл: terrain_engine/core/export/heightmap_exporters.py
# Назначение: Запись карт высот в 16-битный PNG и сырой r16 (превью, отладка).
# ==============================================================================
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def _ensure_path_exists(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def normalize_heights(grid, h_min: Optional[float] = None, h_max: Optional[float] = None) -> np.ndarray:
    """
    Высоты -> uint16 [0..65535]. Диапазон по умолчанию берётся из самой сетки;
    вырожденный диапазон (все высоты равны) даёт нули.
    """
    a = np.asarray(grid, dtype=np.float64)
    if a.ndim != 2 or a.size == 0:
        raise ValueError(f"heightmap must be a non-empty 2D array, got shape {a.shape}")

    lo = float(np.min(a)) if h_min is None else float(h_min)
    hi = float(np.max(a)) if h_max is None else float(h_max)
    span = hi - lo
    if not np.isfinite(span) or span <= 0.0:
        return np.zeros(a.shape, dtype=np.uint16)

    normalized = np.clip((a - lo) / span, 0.0, 1.0)
    return np.round(normalized * 65535.0).astype(np.uint16)


def write_heightmap_png16(path: str, grid, h_min: Optional[float] = None,
                          h_max: Optional[float] = None) -> None:
    """16-битный grayscale PNG (строка = z, столбец = x)."""
    data = normalize_heights(grid, h_min, h_max)
    _ensure_path_exists(path)
    Image.fromarray(data).save(path)
    logger.debug(f"Heightmap PNG16 {data.shape[1]}x{data.shape[0]} saved: {path}")


def write_heightmap_r16(path: str, grid, h_min: Optional[float] = None,
                        h_max: Optional[float] = None) -> None:
    """Сырой little-endian uint16 без заголовка; запись через временный файл."""
    data = normalize_heights(grid, h_min, h_max).astype("<u2")
    _ensure_path_exists(path)
    tmp_path = str(path) + ".tmp"
    try:
        with open(tmp_path, "wb") as f:
            f.write(data.tobytes())
        os.replace(tmp_path, path)
    except OSError:
        # недописанный .tmp не оставляем
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    logger.debug(f"Heightmap r16 {data.shape[1]}x{data.shape[0]} saved: {path}")
