"""Shortest round-trip double formatting and exact decimal parsing (Ryu)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from functools import lru_cache

DOUBLE_MANTISSA_BITS = 52
DOUBLE_EXPONENT_BITS = 11
DOUBLE_EXPONENT_BIAS = 1023

DOUBLE_POW5_BITCOUNT = 125
DOUBLE_POW5_INV_BITCOUNT = 125
DOUBLE_POW5_TABLE_SIZE = 326
DOUBLE_POW5_INV_TABLE_SIZE = 342

_U64 = (1 << 64) - 1
_MAX_INPUT = 64


@dataclass(frozen=True)
class DecimalF64:
    """A decimal floating-point value: mantissa * 10**exponent."""

    mantissa: int
    exponent: int


def decimal_length9(v: int) -> int:
    """Number of decimal digits in v, which must have at most 9 digits."""
    if not 0 <= v < 1_000_000_000:
        raise ValueError("value must have at most 9 decimal digits")
    return len(str(v))


def decimal_length17(v: int) -> int:
    """Number of decimal digits in v, which must have at most 17 digits."""
    if not 0 <= v < 100_000_000_000_000_000:
        raise ValueError("value must have at most 17 decimal digits")
    return len(str(v))


def _check_range(e: int, high: int) -> None:
    if not 0 <= e <= high:
        raise ValueError(f"exponent {e} out of range [0, {high}]")


def log2pow5(e: int) -> int:
    """floor(log2(5**e)) for 0 <= e <= 3528."""
    _check_range(e, 3528)
    return (e * 1217359) >> 19


def pow5bits(e: int) -> int:
    """ceil(log2(5**e)) for 0 <= e <= 3528 (1 when e is 0)."""
    _check_range(e, 3528)
    return ((e * 1217359) >> 19) + 1


def ceil_log2pow5(e: int) -> int:
    """ceil(log2(5**e)) (1 when e is 0)."""
    return log2pow5(e) + 1


def log10_pow2(e: int) -> int:
    """floor(log10(2**e)) for 0 <= e <= 1650."""
    _check_range(e, 1650)
    return (e * 78913) >> 18


def log10_pow5(e: int) -> int:
    """floor(log10(5**e)) for 0 <= e <= 2620."""
    _check_range(e, 2620)
    return (e * 732923) >> 20


def pow5_factor(value: int) -> int:
    """Largest p such that 5**p divides value."""
    if value == 0:
        raise ValueError("value must not be zero")
    count = 0
    while value % 5 == 0:
        value //= 5
        count += 1
    return count


def multiple_of_power_of5(value: int, p: int) -> bool:
    """True if value is divisible by 5**p."""
    return pow5_factor(value) >= p


def multiple_of_power_of2(value: int, p: int) -> bool:
    """True if value is divisible by 2**p (0 <= p < 64)."""
    if value == 0:
        raise ValueError("value must not be zero")
    if not 0 <= p < 64:
        raise ValueError("power must be in [0, 64)")
    return value & ((1 << p) - 1) == 0


@lru_cache(maxsize=None)
def _pow5_split(i: int) -> int:
    if not 0 <= i < DOUBLE_POW5_TABLE_SIZE:
        raise ValueError("power of five out of table range")
    pow5 = 5**i
    shift = pow5.bit_length() - DOUBLE_POW5_BITCOUNT
    return pow5 >> shift if shift >= 0 else pow5 << -shift


@lru_cache(maxsize=None)
def _pow5_inv_split(i: int) -> int:
    if not 0 <= i < DOUBLE_POW5_INV_TABLE_SIZE:
        raise ValueError("inverse power of five out of table range")
    pow5 = 5**i
    return (1 << (pow5.bit_length() - 1 + DOUBLE_POW5_INV_BITCOUNT)) // pow5 + 1


def _mul_shift64(m: int, mul: int, j: int) -> int:
    return ((m * mul) >> j) & _U64


def _mul_shift_all64(m: int, mul: int, j: int, mm_shift: int) -> tuple[int, int, int]:
    vp = _mul_shift64(4 * m + 2, mul, j)
    vm = _mul_shift64(4 * m - 1 - mm_shift, mul, j)
    vr = _mul_shift64(4 * m, mul, j)
    return vr, vp, vm


def _double_to_bits(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def _bits_to_double(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", bits & _U64))[0]


def d2d(ieee_mantissa: int, ieee_exponent: int) -> DecimalF64:
    """Shortest decimal that rounds back to the given IEEE mantissa and exponent."""
    if ieee_exponent == 0:
        e2 = 1 - DOUBLE_EXPONENT_BIAS - DOUBLE_MANTISSA_BITS - 2
        m2 = ieee_mantissa
    else:
        e2 = ieee_exponent - DOUBLE_EXPONENT_BIAS - DOUBLE_MANTISSA_BITS - 2
        m2 = (1 << DOUBLE_MANTISSA_BITS) | ieee_mantissa

    accept_bounds = (m2 & 1) == 0
    mv = 4 * m2
    mm_shift = int(ieee_mantissa != 0 or ieee_exponent <= 1)
    vm_trailing = False
    vr_trailing = False

    if e2 >= 0:
        q = log10_pow2(e2) - (e2 > 3)
        e10 = q
        k = DOUBLE_POW5_INV_BITCOUNT + pow5bits(q) - 1
        i = -e2 + q + k
        vr, vp, vm = _mul_shift_all64(m2, _pow5_inv_split(q), i, mm_shift)
        if q <= 21:
            if mv % 5 == 0:
                vr_trailing = multiple_of_power_of5(mv, q)
            elif accept_bounds:
                vm_trailing = multiple_of_power_of5(mv - 1 - mm_shift, q)
            else:
                vp -= multiple_of_power_of5(mv + 2, q)
    else:
        q = log10_pow5(-e2) - (-e2 > 1)
        e10 = q + e2
        i = -e2 - q
        k = pow5bits(i) - DOUBLE_POW5_BITCOUNT
        j = q - k
        vr, vp, vm = _mul_shift_all64(m2, _pow5_split(i), j, mm_shift)
        if q <= 1:
            vr_trailing = True
            if accept_bounds:
                vm_trailing = mm_shift == 1
            else:
                vp -= 1
        elif q < 63:
            vr_trailing = multiple_of_power_of2(mv, q)

    removed = 0
    last_removed = 0

    if vm_trailing or vr_trailing:
        while vp // 10 > vm // 10:
            vm_trailing &= vm % 10 == 0
            vr_trailing &= last_removed == 0
            last_removed = vr % 10
            vr //= 10
            vp //= 10
            vm //= 10
            removed += 1

        if vm_trailing:
            while vm % 10 == 0:
                vr_trailing &= last_removed == 0
                last_removed = vr % 10
                vr //= 10
                vp //= 10
                vm //= 10
                removed += 1

        if vr_trailing and last_removed == 5 and vr % 2 == 0:
            last_removed = 4

        round_up = (vr == vm and (not accept_bounds or not vm_trailing)) or last_removed >= 5
        output = vr + round_up
    else:
        round_up = False
        if vp // 100 > vm // 100:
            round_up = vr % 100 >= 50
            vr //= 100
            vp //= 100
            vm //= 100
            removed += 2

        while vp // 10 > vm // 10:
            round_up = vr % 10 >= 5
            vr //= 10
            vp //= 10
            vm //= 10
            removed += 1

        output = vr + (vr == vm or round_up)

    return DecimalF64(output, e10 + removed)


def d2d_small_int(ieee_mantissa: int, ieee_exponent: int) -> DecimalF64 | None:
    """Exact decimal for integers in [1, 2**53), or None for other values."""
    m2 = (1 << DOUBLE_MANTISSA_BITS) | ieee_mantissa
    e2 = ieee_exponent - DOUBLE_EXPONENT_BIAS - DOUBLE_MANTISSA_BITS

    if e2 > 0 or e2 < -52:
        return None

    if m2 & ((1 << -e2) - 1):
        return None

    return DecimalF64(m2 >> -e2, 0)


def to_chars(v: DecimalF64, sign: bool) -> str:
    """Scientific notation for a decimal: d[.ddd]e[-]x."""
    digits = str(v.mantissa)
    olength = decimal_length17(v.mantissa)
    parts = ["-" if sign else "", digits[0]]
    if olength > 1:
        parts += [".", digits[1:]]
    exp = v.exponent + olength - 1
    parts += ["e", str(exp)]
    return "".join(parts)


def _special_str(sign: bool, exponent: bool, mantissa: bool) -> str:
    if mantissa:
        return "nan"
    prefix = "-" if sign else ""
    return prefix + ("inf" if exponent else "0.0")


def dtos(value: float) -> str:
    """Shortest representation of a double that reads back to the same value."""
    bits = _double_to_bits(value)
    ieee_sign = (bits >> (DOUBLE_MANTISSA_BITS + DOUBLE_EXPONENT_BITS)) & 1 != 0
    ieee_mantissa = bits & ((1 << DOUBLE_MANTISSA_BITS) - 1)
    ieee_exponent = (bits >> DOUBLE_MANTISSA_BITS) & ((1 << DOUBLE_EXPONENT_BITS) - 1)

    max_exponent = (1 << DOUBLE_EXPONENT_BITS) - 1
    if ieee_exponent == max_exponent or (ieee_exponent == 0 and ieee_mantissa == 0):
        return _special_str(ieee_sign, bool(ieee_exponent), bool(ieee_mantissa))

    v = d2d_small_int(ieee_mantissa, ieee_exponent)
    if v is not None:
        mantissa, exponent = v.mantissa, v.exponent
        while mantissa % 10 == 0:
            mantissa //= 10
            exponent += 1
        v = DecimalF64(mantissa, exponent)
    else:
        v = d2d(ieee_mantissa, ieee_exponent)

    return to_chars(v, ieee_sign)


def stod(text: str) -> float:
    """Parse a decimal number, allowing '_' digit separators, with correct rounding."""
    first = text[:1]
    signed_m = first == "-"
    beg = 1 if first in ("-", "+") and first else 0

    m10digits = 0
    e10digits = 0
    dot_index = -1
    e_index = -1
    dot_underscore = 0
    e_underscore = 0
    m10 = 0
    e10 = 0
    signed_e = False

    for i in range(beg, _MAX_INPUT):
        c = text[i] if i < len(text) else "\0"
        if c == "\0":
            dot_index = (i if dot_index == -1 else dot_index) - dot_underscore
            e_index = (i if e_index == -1 else e_index) - e_underscore
            break

        if c == "_":
            dot_underscore += dot_index == -1
            e_underscore += e_index == -1
            continue

        if c == ".":
            if dot_index != -1:
                raise ValueError(f"more than one decimal point in {text!r}")
            dot_index = i
            continue

        if c == "e":
            if e_index != -1:
                raise ValueError(f"more than one exponent in {text!r}")
            e_index = i
            continue

        if c in "+-":
            if e_index == -1 or text[i - 1] != "e":
                raise ValueError(f"misplaced sign in {text!r}")
            signed_e = c == "-"
            continue

        digit = ord(c) - ord("0")
        if not 0 <= digit <= 9:
            raise ValueError(f"invalid character {c!r} in {text!r}")

        if e_index == -1:
            if m10digits >= 17:
                raise ValueError(f"too many mantissa digits in {text!r}")
            m10 = 10 * m10 + digit
            m10digits += m10 != 0
        else:
            if e10digits > 3:
                raise ValueError(f"too many exponent digits in {text!r}")
            e10 = 10 * e10 + digit
            e10digits += e10 != 0

    if signed_e:
        e10 = -e10
    if dot_index < e_index:
        e10 -= e_index - dot_index - 1

    sign_bit = int(signed_m) << (DOUBLE_EXPONENT_BITS + DOUBLE_MANTISSA_BITS)
    infinity = sign_bit | (0x7FF << DOUBLE_MANTISSA_BITS)

    if m10 == 0:
        return -0.0 if signed_m else 0.0

    if m10digits + e10 <= -324:
        return _bits_to_double(sign_bit)

    if m10digits + e10 >= 310:
        return _bits_to_double(infinity)

    floor_log2_m10 = m10.bit_length() - 1
    if e10 >= 0:
        e2 = floor_log2_m10 + e10 + log2pow5(e10) - (DOUBLE_MANTISSA_BITS + 1)
        j = e2 - e10 - ceil_log2pow5(e10) + DOUBLE_POW5_BITCOUNT
        if j < 0:
            raise ValueError(f"cannot convert {text!r}")
        m2 = _mul_shift64(m10, _pow5_split(e10), j)
        trailing_zeros = e2 < e10 or (
            e2 - e10 < 64 and multiple_of_power_of2(m10, e2 - e10)
        )
    else:
        e2 = floor_log2_m10 + e10 - ceil_log2pow5(-e10) - (DOUBLE_MANTISSA_BITS + 1)
        j = e2 - e10 + ceil_log2pow5(-e10) - 1 + DOUBLE_POW5_INV_BITCOUNT
        m2 = _mul_shift64(m10, _pow5_inv_split(-e10), j)
        trailing_zeros = multiple_of_power_of5(m10, -e10)

    ieee_e2 = max(0, e2 + DOUBLE_EXPONENT_BIAS + m2.bit_length() - 1)

    if ieee_e2 > 0x7FE:
        return _bits_to_double(infinity)

    shift = (1 if ieee_e2 == 0 else ieee_e2) - e2 - DOUBLE_EXPONENT_BIAS - DOUBLE_MANTISSA_BITS
    if shift < 0:
        raise ValueError(f"cannot convert {text!r}")

    if shift > 0:
        trailing_zeros &= m2 & ((1 << (shift - 1)) - 1) == 0
        last_removed_bit = (m2 >> (shift - 1)) & 1
    else:
        last_removed_bit = 0
    round_up = last_removed_bit != 0 and (not trailing_zeros or (m2 >> shift) & 1 != 0)

    ieee_m2 = (m2 >> shift) + round_up
    if ieee_m2 > 1 << (DOUBLE_MANTISSA_BITS + 1):
        raise ValueError(f"cannot convert {text!r}")
    ieee_m2 &= (1 << DOUBLE_MANTISSA_BITS) - 1
    if ieee_m2 == 0 and round_up:
        ieee_e2 += 1

    bits = (((int(signed_m) << DOUBLE_EXPONENT_BITS) | ieee_e2) << DOUBLE_MANTISSA_BITS) | ieee_m2
    return _bits_to_double(bits)