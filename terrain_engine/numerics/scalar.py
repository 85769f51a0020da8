# ==============================================================================
# Файл: terrain_engine/numerics/scalar.py
# Назначение: Скалярные помощники (lerp, smoothstep, pingpong, ...) для
# поточечного расчёта высоты.
# Питоновская арифметика float бросает исключения там, где движки рендера молча
# отдают inf/nan. Здесь такие случаи превращаются в inf/nan, а окончательную
# проверку делает защитный "clamp" в комбинаторе высоты.
# ==============================================================================
from __future__ import annotations

import math

NAN = float("nan")
INF = float("inf")


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp(value: float, lo: float, hi: float) -> float:
    # max/min с nan ведут себя непредсказуемо, поэтому nan пропускаем как есть
    if value != value:
        return value
    return max(lo, min(hi, value))


def safe_div(a: float, b: float) -> float:
    """Деление без ZeroDivisionError: x/0 -> ±inf, 0/0 -> nan."""
    if b == 0.0:
        if a == 0.0 or a != a:
            return NAN
        return math.copysign(INF, a) * math.copysign(1.0, b)
    return a / b


def safe_pow(base: float, exp: float) -> float:
    """
    Степень без исключений и без комплексных чисел.
    Отрицательное основание с дробной степенью даёт nan, переполнение даёт inf.
    """
    if base != base or exp != exp:
        return NAN
    if base < 0.0 and not float(exp).is_integer():
        return NAN
    if base == 0.0 and exp < 0.0:
        return INF
    try:
        return math.pow(base, exp)
    except OverflowError:
        if base < 0.0 and int(exp) % 2 == 1:
            return -INF
        return INF


def smoothstep(edge0: float, edge1: float, x: float) -> float:
    t = clamp(safe_div(x - edge0, edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def pingpong(t: float, length: float) -> float:
    """
    Треугольная волна: L - |t mod 2L - L|.
    Остаток через math.fmod (знак делимого, а не делителя),
    поэтому при отрицательных t "зубец" уходит в минус.
    """
    if not math.isfinite(t) or length == 0.0:
        return NAN
    repeat = math.fmod(t, 2.0 * length)
    return length - abs(repeat - length)


def is_finite(value: float) -> bool:
    return math.isfinite(value)
