"""
Unum arithmetic-free primitives on plain Python floats.

A unum here is an IEEE-754 double whose least significant raw bit, the ubit,
says whether the value is exact (ubit 0) or stands for an open interval (ubit 1).

    assert is_exact(2.0)
    assert is_inexact(inexact(2.0))
    assert '(2.000000000000001, 2.000000000000001)' == to_string(inexact(2.0))

The raw pattern is the signed 64-bit integer with the same bits as the double.
Every function in this module is total:  any float goes in, nothing raises.

Two NaNs are used, and only two:
    QNAN  raw 0x7FF8000000000000  the open interval reaching up to +infinity
    SNAN  raw 0xFFF8000000000000  the open interval reaching down to -infinity
They are told apart by the sign bit of the raw pattern, never by payload.
"""

import binascii
import logging
import math
import struct


logger = logging.getLogger(__name__)


UBIT_MASK = 0x0000000000000001
RAW_MASK  = 0xFFFFFFFFFFFFFFFF   # 64 bits, for wrapping raw arithmetic


# Raw Bit Patterns
# ----------------
def raw_from_double(x):
    """
    The raw bit pattern of a float, as a signed 64-bit integer.

    Negative exactly when the sign bit is set, so -0.0 and SNAN are negative here.
    """
    return struct.unpack('>q', struct.pack('>d', x))[0]
assert 0x3FF0000000000000 == raw_from_double(1.0)
assert -0x8000000000000000 == raw_from_double(-0.0)


def double_from_raw(raw):
    """
    The float with this raw bit pattern.

    Out-of-range integers wrap modulo 2**64, like 64-bit two's complement arithmetic.
    """
    return struct.unpack('>d', struct.pack('>Q', raw & RAW_MASK))[0]
assert 1.0 == double_from_raw(0x3FF0000000000000)
assert 0.0 == double_from_raw(0)


def hex_from_double(x):
    """Raw bit pattern in hexadecimal, e.g. '0x3FF0000000000000' for 1.0"""
    return '0x' + binascii.hexlify(struct.pack('>d', x)).decode().upper()
assert '0x3FF0000000000000' == hex_from_double(1.0)
assert '0x8000000000000000' == hex_from_double(-0.0)


def floats_really_same(f1, f2):
    """
    Compare floating point numbers by their raw bit patterns.

    Similar to the == equality operator except:
     1. They ARE the same if both are the same NAN.
     2. They are NOT the same if one is +0.0 and the other -0.0.
     3. They are NOT the same if one is QNAN and the other SNAN.

    This is useful for unit testing.
    """
    return raw_from_double(f1) == raw_from_double(f2)
assert True is floats_really_same(float('nan'), float('nan'))
assert False is floats_really_same(+0.0, -0.0)


POSITIVE_INFINITY = float('+inf')
NEGATIVE_INFINITY = float('-inf')
QNAN = double_from_raw(0x7FF8000000000000)
SNAN = double_from_raw(0xFFF8000000000000)
assert math.isnan(QNAN) and raw_from_double(QNAN) >= 0
assert math.isnan(SNAN) and raw_from_double(SNAN) < 0


# The Ubit
# --------
def _kind(x):
    """Name a non-finite float for the log."""
    return "NAN" if math.isnan(x) else "infinity"


def _toggle_ubit(raw):
    """Step the raw pattern by one, away from raw zero.  That toggles the ubit."""
    return raw + 1 if raw >= 0 else raw - 1


def is_exact(x):
    """Is this a single real number?  Not NAN, and the ubit is 0."""
    return not math.isnan(x) and (raw_from_double(x) & UBIT_MASK) == 0


def is_inexact(x):
    """Is this an open interval?  NAN, or the ubit is 1."""
    return math.isnan(x) or (raw_from_double(x) & UBIT_MASK) != 0


def is_sign_negative(x):
    """Is the sign bit set?  True for -0.0 and SNAN, unlike x < 0."""
    return x < 0 or raw_from_double(x) < 0
assert is_sign_negative(-0.0)
assert not is_sign_negative(0.0)
assert is_sign_negative(SNAN)
assert not is_sign_negative(QNAN)


def signed_nan(x):
    """SNAN if x has its sign bit set, otherwise QNAN."""
    return SNAN if is_sign_negative(x) else QNAN


def exact(x):
    """
    Clear the ubit.

    A finite float with the ubit already clear comes back unchanged.
    Otherwise the raw pattern steps by one, +1 for a non-negative raw pattern, -1 for negative.
    NAN and infinity collapse to the infinity of the same raw sign.
    """
    raw = raw_from_double(x)
    if math.isfinite(x):
        if (raw & UBIT_MASK) == 0:
            return x
        return double_from_raw(_toggle_ubit(raw))
    collapsed = POSITIVE_INFINITY if raw >= 0 else NEGATIVE_INFINITY
    logger.debug("exact(%s) collapses %s to %s", hex_from_double(x), _kind(x), to_string(collapsed))
    return collapsed


def inexact(x):
    """
    Set the ubit.

    The dual of exact().  NAN and infinity collapse to QNAN or SNAN by raw sign.

    Only -0.0 (raw -2**63) steps outside the 64-bit range.  It wraps around
    to a NAN with a clear sign bit, reported as QNAN.
    """
    raw = raw_from_double(x)
    if math.isfinite(x):
        if (raw & UBIT_MASK) != 0:
            return x
        stepped = double_from_raw(_toggle_ubit(raw))
        if math.isnan(stepped):
            logger.debug("inexact(%s) wrapped around to %s", hex_from_double(x), hex_from_double(stepped))
            return signed_nan(stepped)
        return stepped
    collapsed = QNAN if raw >= 0 else SNAN
    logger.debug("inexact(%s) collapses %s to %s", hex_from_double(x), _kind(x), to_string(collapsed))
    return collapsed
assert is_exact(exact(inexact(1.0)))
assert floats_really_same(QNAN, inexact(-0.0))


# Ordering
# --------
def compare(a, b):
    """
    Total order over all floats, NANs included.  Returns -1, 0, or +1.

    Numbers compare numerically, so -0.0 and +0.0 are equal.
    SNAN is below everything with a clear sign bit.
    QNAN is above everything with a set sign bit.
    A NAN and a number of the same raw sign:  SNAN is below -infinity, QNAN is above +infinity.
    """
    if a < b:
        return -1
    if a > b:
        return 1
    if a == b:
        return 0

    # NOTE:  At least one is NAN.
    a_raw = raw_from_double(a)
    b_raw = raw_from_double(b)
    if a_raw == b_raw:
        return 0
    if a_raw < 0 <= b_raw:
        return -1
    if b_raw < 0 <= a_raw:
        return 1

    # NOTE:  Same raw sign.
    if not math.isnan(a):
        return -1 if a_raw >= 0 else 1
    if not math.isnan(b):
        return 1 if b_raw >= 0 else -1
    return 0
assert -1 == compare(SNAN, NEGATIVE_INFINITY)
assert +1 == compare(QNAN, POSITIVE_INFINITY)
assert 0 == compare(-0.0, 0.0)


def minimum(a, b):
    """The lesser by compare().  On a tie, a."""
    return a if compare(a, b) <= 0 else b


def maximum(a, b):
    """The greater by compare().  On a tie, a."""
    return a if compare(a, b) >= 0 else b


# Intervals
# ---------
def next_up(x):
    """
    The next float above x.  Past +infinity comes QNAN.

    From SNAN the cycle continues at -infinity.
    """
    if x == POSITIVE_INFINITY:
        return QNAN
    if math.isnan(x):
        return NEGATIVE_INFINITY if is_sign_negative(x) else QNAN
    return math.nextafter(x, POSITIVE_INFINITY)


def next_down(x):
    """
    The next float below x.  Past -infinity comes SNAN.

    From QNAN the cycle continues at +infinity.
    """
    if x == NEGATIVE_INFINITY:
        return SNAN
    if math.isnan(x):
        return SNAN if is_sign_negative(x) else POSITIVE_INFINITY
    return math.nextafter(x, NEGATIVE_INFINITY)
assert floats_really_same(QNAN, next_up(POSITIVE_INFINITY))
assert floats_really_same(SNAN, next_down(NEGATIVE_INFINITY))
assert NEGATIVE_INFINITY == next_up(SNAN)
assert POSITIVE_INFINITY == next_down(QNAN)


def lower_bound(x):
    """Step an inexact x one float toward zero.  Exact and NAN come back unchanged."""
    if is_exact(x) or math.isnan(x):
        return x
    if x > 0:
        return math.nextafter(x, NEGATIVE_INFINITY)
    return math.nextafter(x, POSITIVE_INFINITY)


def upper_bound(x):
    """
    Step a positive inexact x one float away from zero.

    Unlike lower_bound(), every negative x comes back unchanged, inexact or not.
    """
    if x < 0 or is_exact(x) or math.isnan(x):
        return x
    if x > 0:
        return math.nextafter(x, POSITIVE_INFINITY)
    return math.nextafter(x, NEGATIVE_INFINITY)


def interval_size(x):
    """
    Width of the interval x stands for.

    0.0 for exact values.  A NAN of the same sign for NANs.
    """
    if is_exact(x):
        return 0.0
    if math.isnan(x):
        return signed_nan(x)
    if x >= 0:
        return next_up(x) - x
    return x - next_down(x)
assert 0.0 == interval_size(3.0)
assert 0.0 < interval_size(inexact(3.0)) < 1e-15


# Text
# ----
def to_string(x):
    """
    Text for a unum.

        '2.0'                                       exact
        'qNaN' or 'sNaN'                            NAN, by raw sign
        '(2.000000000000001, 2.000000000000001)'    inexact, exact() and next_up() as bounds
    """
    if is_exact(x):
        return repr(x)
    if math.isnan(x):
        return 'qNaN' if raw_from_double(x) >= 0 else 'sNaN'
    if x >= 0:
        return '(' + repr(exact(x)) + ', ' + repr(next_up(x)) + ')'
    return '(' + repr(next_down(x)) + ', ' + repr(exact(x)) + ')'
assert '2.0' == to_string(2.0)
assert 'sNaN' == to_string(SNAN)
