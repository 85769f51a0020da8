# ========================
# file: terrain_engine/numerics/__init__.py
# ========================
