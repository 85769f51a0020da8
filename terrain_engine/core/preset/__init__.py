# ========================
# file: terrain_engine/core/preset/__init__.py
# ========================
from .version import CURRENT_PRESET_VERSION
from .model import TerrainParameters
from .loader import load_preset, save_preset, normalize_keys
from .defaults import DEFAULT_TERRAIN_PRESET
from .errors import PresetError, ValidationError, NotFoundError
from .registry import resolve_preset_path, list_preset_ids, add_search_folder

__all__ = [
    "CURRENT_PRESET_VERSION",
    "TerrainParameters",
    "load_preset",
    "save_preset",
    "normalize_keys",
    "DEFAULT_TERRAIN_PRESET",
    "PresetError",
    "ValidationError",
    "NotFoundError",
    "resolve_preset_path",
    "list_preset_ids",
    "add_search_folder",
]
