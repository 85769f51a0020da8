# ========================
# file: terrain_engine/core/preset/loader.py
# ========================
from __future__ import annotations
import os
import json
import logging
from typing import Any, Dict, Mapping, Union

from .defaults import DEFAULT_TERRAIN_PRESET
from .errors import PresetError
from .model import TerrainParameters, SNAKE_KEYS
from .registry import resolve_preset_path
from .validators import validate_dict, _BOOL_KEYS, _INT_KEYS
from .version import CURRENT_PRESET_VERSION

logger = logging.getLogger(__name__)


def normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """camelCase ключи хоста (heightScale, enableLOD, ...) -> snake_case полей.

    Неизвестные ключи пропускаются как есть, их отловит validate_dict.
    """
    out: Dict[str, Any] = {}
    for k, v in data.items():
        out[SNAKE_KEYS.get(k, k)] = v
    return out


def _load_json_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise PresetError(f"Preset file {path} must contain a JSON object")
    return data


def _coerce(key: str, value: Any) -> Any:
    if key == "id" or key in _BOOL_KEYS:
        return value
    if key in _INT_KEYS:
        return int(value)
    return float(value)


def load_preset(
    source: Union[str, Mapping[str, Any], None] = None,
    overrides: Mapping[str, Any] | None = None,
) -> TerrainParameters:
    """Load terrain parameters from id/path/dict, merge with defaults and apply overrides.

    Args:
        source: preset id (e.g. 'terrain/botw_v9'), path to JSON file, raw dict
            (camelCase or snake_case keys) or None for pure defaults
        overrides: mapping of ad-hoc overrides (last layer)
    Returns:
        TerrainParameters (immutable dataclass) ready for HeightField/ChunkManager
    """
    if source is None:
        data: Dict[str, Any] = {}
    elif isinstance(source, str):
        if os.path.isfile(source):
            data = _load_json_file(source)
        else:
            # treat as id
            data = _load_json_file(resolve_preset_path(source))
    elif isinstance(source, Mapping):
        data = dict(source)
    else:
        raise TypeError("source must be str path/id, mapping or None")

    merged = dict(DEFAULT_TERRAIN_PRESET)
    merged.update(normalize_keys(data))
    if overrides:
        merged.update(normalize_keys(overrides))

    merged["version"] = CURRENT_PRESET_VERSION

    validate_dict(merged)

    params = TerrainParameters(**{k: _coerce(k, v) for k, v in merged.items()})
    logger.debug("Loaded terrain preset '%s' (seed=%d)", params.id, params.seed)
    return params


def save_preset(params: TerrainParameters, path: str, camel: bool = True) -> None:
    """Пишет параметры в JSON (по умолчанию в camelCase, как их ждёт хост)."""
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(params.to_dict(camel=camel), f, indent=2, ensure_ascii=False)
