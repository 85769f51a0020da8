# ==============================================================================
# Файл: terrain_engine/core/noise/__init__.py
# Назначение: Шумовые примитивы: сидированное поле и fBm.
# ==============================================================================
from __future__ import annotations

from .noise_field import NoiseField, NoiseFields, derive_noise_fields
from .fbm import fbm, fbm_or_sample

__all__ = ["NoiseField", "NoiseFields", "derive_noise_fields", "fbm", "fbm_or_sample"]
