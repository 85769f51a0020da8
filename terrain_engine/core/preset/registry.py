# ========================
# file: terrain_engine/core/preset/registry.py
# ========================
from __future__ import annotations
from typing import List
import os
from .errors import NotFoundError


# Пресеты движка лежат в `terrain_engine/data/presets/`
_DEFAULT_PRESET_FOLDERS: List[str] = [
    os.path.join(
        # __file__ -> .../core/preset/registry.py
        # dirname(...) x3 -> .../terrain_engine
        os.path.dirname(os.path.dirname(os.path.dirname(__file__))),
        "data", "presets"
    ),
]


def resolve_preset_path(preset_id: str) -> str:
    """Map an id like 'terrain/botw_v9' to a JSON file path in presets/ tree."""
    rel = preset_id.replace("\\", "/").strip("/") + ".json"
    for root in _DEFAULT_PRESET_FOLDERS:
        candidate = os.path.join(root, rel)
        if os.path.isfile(candidate):
            return candidate
    raise NotFoundError(
        f"Preset id '{preset_id}' not found in presets/ folders: {', '.join(_DEFAULT_PRESET_FOLDERS)}"
    )


def list_preset_ids() -> List[str]:
    """Все id, доступные в папках поиска (без расширения, через '/')."""
    ids: List[str] = []
    for root in _DEFAULT_PRESET_FOLDERS:
        if not os.path.isdir(root):
            continue
        for dirpath, _dirs, files in os.walk(root):
            for name in files:
                if not name.endswith(".json"):
                    continue
                rel = os.path.relpath(os.path.join(dirpath, name), root)
                preset_id = rel[: -len(".json")].replace(os.sep, "/")
                if preset_id not in ids:
                    ids.append(preset_id)
    return sorted(ids)


def add_search_folder(path: str) -> None:
    path = os.path.abspath(path)
    if path not in _DEFAULT_PRESET_FOLDERS:
        _DEFAULT_PRESET_FOLDERS.append(path)
