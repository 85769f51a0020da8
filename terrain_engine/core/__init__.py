# ========================
# file: terrain_engine/core/__init__.py
# ========================
