# ==============================================================================
# Файл: terrain_engine/core/constants.py
# Назначение: Настроечные константы рельефа (частоты, смещения, веса, степени).
# ВЕРСИЯ 1.0: Значения задают внешний вид рельефа "BOTW v9".
# Любая правка меняет мир при том же сиде и ломает тесты с закрытой формулой.
# ==============================================================================
from __future__ import annotations

from typing import Tuple

# =======================================================================
# ШУМ: разведение четырёх полей от одного сида
# =======================================================================
NOISE_SEED_OFFSETS: Tuple[int, int, int, int] = (0, 1000, 2000, 3000)

# =======================================================================
# БИОМ-МАСКА (макро-регионы "равнина / горы")
# =======================================================================
BIOME_FREQUENCY = 0.0006
BIOME_SECOND_FREQ_MUL = 1.5
BIOME_SECOND_OFFSET = 1000.0
BIOME_WEIGHT_PRIMARY = 0.65
BIOME_WEIGHT_SECONDARY = 0.35

FLATNESS_POWER = 1.8
MOUNTAIN_MASK_POWER = 1.3
MOUNTAIN_MASK_MIN = 0.01  # ниже этого порога хребты не считаем вообще

# =======================================================================
# БАЗОВЫЙ РЕЛЬЕФ
# =======================================================================
BASE_FALLBACK_FREQUENCY = 0.0005  # частота при выключенном fBm
BASE_WEIGHT_PRIMARY = 0.65
BASE_WEIGHT_SECONDARY = 0.35
BASE_PRIMARY_OFFSET = 3000.0
BASE_SECONDARY_OFFSET = 4000.0
BASE_SECONDARY_OCTAVES_MUL = 0.8
BASE_SECONDARY_FREQ_MUL = 0.6

# =======================================================================
# ЭРОЗИЯ (фейковая, через pingpong)
# =======================================================================
EROSION_OCTAVES = 3
EROSION_PERSISTENCE_MUL = 0.8
EROSION_LACUNARITY = 1.8
EROSION_AMPLITUDE = 0.2
EROSION_OFFSET = 5000.0
EROSION_FOLD_SCALE = 2.0
EROSION_FOLD_LENGTH = 1.0
EROSION_BIAS = 0.3
EROSION_CLAMP_MAX = 100.0

# =======================================================================
# ВАРИАЦИЯ ВЫСОТ (возвышенности / низины)
# =======================================================================
ALTITUDE_FREQUENCY = 0.0004
ALTITUDE_OFFSET = 8000.0
ALTITUDE_GAIN = 1.4
ALTITUDE_BIAS = 0.75

# =======================================================================
# ХРЕБТЫ
# =======================================================================
RIDGE_FREQUENCY = 0.0012
RIDGE_SECOND_FREQ_MUL = 2.3
RIDGE_SECOND_OFFSET = 2000.0
RIDGE_PRIMARY_OCTAVES_MUL = 0.7
RIDGE_SECOND_OCTAVES_MUL = 0.6
RIDGE_PRIMARY_PERSISTENCE_MUL = 0.8
RIDGE_SECOND_PERSISTENCE_MUL = 0.7
RIDGE_PRIMARY_SHARPNESS_MUL = 0.5
RIDGE_SECOND_SHARPNESS_MUL = 0.45
RIDGE_MIN_SHARPNESS = 0.8
RIDGE_SOFTEN_POWER = 0.75
RIDGE_WEIGHT_PRIMARY = 0.75
RIDGE_WEIGHT_SECONDARY = 0.25
RIDGE_BLEND_POWER = 0.9

# =======================================================================
# РЕКИ
# =======================================================================
RIVER_FREQ_MUL = 0.8
RIVER_OCTAVES = 4
RIVER_PERSISTENCE = 0.35
RIVER_LACUNARITY = 2.0
RIVER_AMPLITUDE = 0.2
RIVER_OFFSET = 9000.0
RIVER_FOLD_LENGTH = 0.5
RIVER_WIDTH_TARGET = 0.44
RIVER_WIDTH_BLEND = 0.5
RIVER_FALLOFF_MUL = 0.3
RIVER_DEPTH_MUL = 0.5

# =======================================================================
# ДОЛИНЫ, ХОЛМЫ, ДЕТАЛИ
# =======================================================================
VALLEY_FREQUENCY = 0.0009
VALLEY_OFFSET = 5000.0
VALLEY_DEPTH_MUL = 0.3

HILL_FREQUENCY = 0.002
HILL_OFFSET = 6000.0
HILL_OCTAVES_MUL = 0.5
HILL_PERSISTENCE_MUL = 0.9
HILL_AMOUNT = 0.15

DETAIL_FREQUENCY = 0.007
DETAIL_OFFSET = 7000.0
DETAIL_OCTAVES_MUL = 0.4
DETAIL_PERSISTENCE_MUL = 0.6
DETAIL_AMOUNT_MUL = 0.4

# =======================================================================
# ЗАЩИТА ОТ ВЫРОЖДЕННОЙ ГЕОМЕТРИИ
# =======================================================================
HEIGHT_SAFETY_LIMIT = 10000.0

# =======================================================================
# ЧАНКИ / LOD
# =======================================================================
MIN_SEGMENTS_PER_CHUNK = 10
LOD_MEDIUM_DIVISOR = 2
LOD_FAR_DIVISOR = 4
