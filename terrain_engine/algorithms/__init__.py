# ========================
# file: terrain_engine/algorithms/__init__.py
# ========================
