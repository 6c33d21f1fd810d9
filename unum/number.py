"""
A DoubleUnum is a universal number backed by one IEEE-754 double.

Features:
 - exact values and open intervals, told apart by the ubit (the lowest raw bit)
 - total order, NANs included
 - immutable, hashable, picklable

    assert DoubleUnum.exact_value_of(2.0).is_exact()
    assert DoubleUnum.inexact_value_of(2.0).is_inexact()
    assert 'qNaN' == str(DoubleUnum.QNAN)

The bit-level work is done by free functions in unum.doubles.
This class wraps one float and gives it a face:  constructors, predicates,
derivations, comparisons, and conversions.
"""

import math
import numbers
import string
import struct

from . import doubles


class Factory(object):
    """
    Canonical constants for one unum backing type.

    A unum type hands these out instead of constructing them,
    so code that works on any unum type can ask for a zero, a one, or a NAN
    without knowing what backs the unum.

        assert DoubleUnum.ZERO is DoubleUnum.FACTORY.zero()
    """
    __slots__ = ('_zero', '_one', '_q_nan', '_s_nan')

    def __init__(self, zero, one, q_nan, s_nan):
        self._zero = zero
        self._one = one
        self._q_nan = q_nan
        self._s_nan = s_nan

    def zero(self):
        return self._zero

    def one(self):
        return self._one

    def q_nan(self):
        """The NAN that stands for an open interval up to +infinity."""
        return self._q_nan

    def s_nan(self):
        """The NAN that stands for an open interval down to -infinity."""
        return self._s_nan

    def signed_nan(self, is_negative):
        return self._s_nan if is_negative else self._q_nan

    def __repr__(self):
        return "Factory({zero!r}, {one!r}, {q_nan!r}, {s_nan!r})".format(
            zero=self._zero,
            one=self._one,
            q_nan=self._q_nan,
            s_nan=self._s_nan,
        )


class DoubleUnum(numbers.Number):
    """
    Universal number backed by a Python float.

    Construct from:
        float                  DoubleUnum(3.14)
        int                    DoubleUnum(42)
        another DoubleUnum     DoubleUnum(DoubleUnum.ONE)
        raw hex string         DoubleUnum('0x3FF0000000000000')

    The float is taken as-is, ubit and all.  So DoubleUnum(x) is the same as
    DoubleUnum.value_of(x).  Use exact_value_of() or inexact_value_of() to force the ubit.
    """

    __slots__ = ('_value', )

    def __init__(self, content):
        if isinstance(content, DoubleUnum):
            self._value = content._value
        elif isinstance(content, float):
            self._value = content
        elif isinstance(content, int):
            self._from_int(content)
        elif isinstance(content, str):
            self._from_hex(content)
        else:
            raise self.ConstructorTypeError("{outer}({inner}) is not supported".format(
                outer=type_name(self),
                inner=type_name(content),
            ))

    def _from_int(self, i):
        try:
            self._value = float(i)
        except OverflowError:
            raise self.ConstructorValueError("{} is too big for a double".format(i))

    def _from_hex(self, s):
        """Fill in the value from a raw hex string, e.g. '0x3FF0000000000000' or '0x3FF0_0000_0000_0000'"""
        digits = s.replace('_', '')
        hex_digits = digits[2:]
        if (
            digits[0:2] not in ('0x', '0X') or
            len(hex_digits) != 16 or
            not all(c in string.hexdigits for c in hex_digits)
        ):
            raise self.ConstructorValueError(
                "A raw hex string is 0x and 16 hex digits, not '{}'".format(s)
            )
        self._value = doubles.double_from_raw(int(hex_digits, 16))

    class ConstructorTypeError(TypeError):
        """e.g. DoubleUnum(object) or DoubleUnum([])"""

    class ConstructorValueError(ValueError):
        """e.g. DoubleUnum('0q82_01') or DoubleUnum(10**400)"""

    class CompareError(TypeError):
        """e.g. DoubleUnum.ONE.compare_to('one')"""

    class IntOverflowError(OverflowError):
        """Python int has no sane way to represent infinity.  Example int(DoubleUnum(float('inf')))"""

    # Construction
    # ------------
    @classmethod
    def value_of(cls, value):
        """Wrap a float as-is.  Its ubit decides whether it is exact."""
        return cls(value)

    @classmethod
    def exact_value_of(cls, value):
        """Wrap a float with its ubit cleared.  NAN and infinity become infinity."""
        return cls(doubles.exact(cls(value)._value))

    @classmethod
    def inexact_value_of(cls, value):
        """Wrap a float with its ubit set.  NAN and infinity become QNAN or SNAN."""
        return cls(doubles.inexact(cls(value)._value))

    @classmethod
    def signed_nan(cls, sign):
        """SNAN if sign is negative (sign bit set, -0.0 included), otherwise QNAN."""
        return cls.FACTORY.signed_nan(doubles.is_sign_negative(float(sign)))

    @classmethod
    def from_raw(cls, raw):
        """
        Construct from a raw 64-bit pattern.

            assert DoubleUnum.ONE == DoubleUnum.from_raw(0x3FF0000000000000)

        Signed or unsigned, both work:  -1 and 0xFFFFFFFFFFFFFFFF are the same pattern.
        """
        return cls(doubles.double_from_raw(raw))

    @classmethod
    def from_hex(cls, s):
        return cls(s)

    @property
    def factory(self):
        return type(self).FACTORY

    # Raw internal format
    # -------------------
    @property
    def raw(self):
        """
        The raw bit pattern, a signed 64-bit integer.

            assert 0x3FF0000000000000 == DoubleUnum.ONE.raw
        """
        return doubles.raw_from_double(self._value)

    def hex(self):
        """The raw bit pattern in hex, e.g. '0x3FF0000000000000' for DoubleUnum.ONE"""
        return doubles.hex_from_double(self._value)

    def __getstate__(self):
        """For the 'pickle' package, object serialization.  Hex keeps the sign of a NAN."""
        return self.hex()

    def __setstate__(self, hex_incoming):
        """For the 'pickle' package, object serialization."""
        self._from_hex(hex_incoming)

    def __repr__(self):
        """Handle repr(DoubleUnum(x))"""
        return "DoubleUnum('{}')".format(self.hex())

    def __str__(self):
        """Handle str(DoubleUnum(x)), e.g. '2.0' or 'qNaN' or '(-1.0, -0.9999999999999998)'"""
        return doubles.to_string(self._value)

    # Predicates
    # ----------
    def is_nan(self):
        return math.isnan(self._value)

    def is_infinite(self):
        return math.isinf(self._value)

    def is_finite(self):
        return math.isfinite(self._value)

    def is_exact(self):
        """Does this stand for one real number?"""
        return doubles.is_exact(self._value)

    def is_inexact(self):
        """Does this stand for an open interval?  All NANs do."""
        return doubles.is_inexact(self._value)

    def is_negative(self):
        return self._value < 0

    def is_positive(self):
        return self._value > 0

    def is_sign_negative(self):
        """Is the sign bit set?  Unlike is_negative(), true for -0.0 and SNAN."""
        return doubles.is_sign_negative(self._value)

    def is_zero(self):
        """+0.0 or -0.0"""
        return self._value == 0

    # Derivations
    # -----------
    def _derived(self, value):
        """Wrap a derived float.  Reuse self when nothing changed."""
        if doubles.floats_really_same(value, self._value):
            return self
        return type(self)(value)

    def exact(self):
        return self._derived(doubles.exact(self._value))

    def inexact(self):
        return self._derived(doubles.inexact(self._value))

    def next_up(self):
        """The next unum up.  +infinity is followed by QNAN, and SNAN by -infinity."""
        return self._derived(doubles.next_up(self._value))

    def next_down(self):
        """The next unum down.  -infinity is followed by SNAN, and QNAN by +infinity."""
        return self._derived(doubles.next_down(self._value))

    def lower_bound(self):
        return self._derived(doubles.lower_bound(self._value))

    def upper_bound(self):
        """See doubles.upper_bound() about negative values, which come back unchanged."""
        return self._derived(doubles.upper_bound(self._value))

    def interval_size(self):
        """
        Width of the interval.

        ZERO for exact values.  QNAN or SNAN, same sign, for NANs.
        """
        size = doubles.interval_size(self._value)
        if math.isnan(size):
            return self.factory.signed_nan(doubles.is_sign_negative(size))
        if size == 0:
            return self.factory.zero()
        return type(self)(size)

    # Comparison
    # ----------
    def _comparable(self, other):
        """
        Get other ready to compare with self.  None if it cannot be.

        Only the same unum type, or a Python int or float, can be compared.
        A unum of some other backing type is never equal, even to the same value.
        """
        if type(other) is type(self):
            return other
        if isinstance(other, (int, float)):
            try:
                return type(self)(other)
            except self.ConstructorValueError:
                return None
        return None

    def compare_to(self, other):
        """-1, 0, or +1, by the total order of doubles.compare()"""
        other_ready = self._comparable(other)
        if other_ready is None:
            raise self.CompareError("DoubleUnum cannot be compared with a " + type_name(other))
        return doubles.compare(self._value, other_ready._value)

    def min(self, other):
        """The lesser of self and other.  On a tie, self."""
        return self if self.compare_to(other) <= 0 else self._comparable(other)

    def max(self, other):
        """The greater of self and other.  On a tie, self."""
        return self if self.compare_to(other) >= 0 else self._comparable(other)

    def _compare_or_not(self, other):
        other_ready = self._comparable(other)
        if other_ready is None:
            return NotImplemented
        return doubles.compare(self._value, other_ready._value)

    def __eq__(self, other):
        """
        Handle DoubleUnum(x) == something

        Never equal to a bare float NAN.  Python hashes those by identity, so no hash could agree.
        """
        if isinstance(other, float) and math.isnan(other):
            return NotImplemented
        c = self._compare_or_not(other)
        return c if c is NotImplemented else c == 0

    def __lt__(self, other):
        c = self._compare_or_not(other)
        return c if c is NotImplemented else c < 0

    def __le__(self, other):
        c = self._compare_or_not(other)
        return c if c is NotImplemented else c <= 0

    def __gt__(self, other):
        c = self._compare_or_not(other)
        return c if c is NotImplemented else c > 0

    def __ge__(self, other):
        c = self._compare_or_not(other)
        return c if c is NotImplemented else c >= 0

    def __hash__(self):
        """Equal unums hash the same:  +0.0 and -0.0 alike, every NAN of one sign alike."""
        if self.is_nan():
            return hash(doubles.raw_from_double(doubles.signed_nan(self._value)))
        return hash(self._value)

    # "to" conversions:  DoubleUnum --> other type
    # --------------------------------------------
    INT_BITS = 32
    LONG_BITS = 64

    def _to_saturated_int(self, bits):
        """Truncate toward zero, clamped to a signed integer of this many bits.  NAN is 0."""
        if self.is_nan():
            return 0
        most = (1 << (bits - 1)) - 1
        least = -(1 << (bits - 1))
        if self._value >= most:
            return most
        if self._value <= least:
            return least
        return int(self._value)

    def int_value(self):
        """To a 32-bit integer, saturating."""
        return self._to_saturated_int(self.INT_BITS)

    def long_value(self):
        """To a 64-bit integer, saturating."""
        return self._to_saturated_int(self.LONG_BITS)

    def float_value(self):
        """Rounded to IEEE-754 single precision.  Too big becomes infinity."""
        try:
            return struct.unpack('>f', struct.pack('>f', self._value))[0]
        except OverflowError:
            return math.copysign(float('inf'), self._value)

    def double_value(self):
        return self._value

    def __float__(self):
        return self._value

    def __int__(self):
        """Truncate toward zero.  No saturating here, infinity is an error, as with int(float('inf'))"""
        if self.is_infinite():
            raise self.IntOverflowError("{} cannot be represented by integers.".format(self))
        if self.is_nan():
            raise ValueError("{} cannot be represented by integers.".format(self))
        return int(self._value)

    def __bool__(self):
        return not self.is_zero()

    # Constants named for convenience
    # ---------
    ZERO = None
    ONE = None
    TWO = None
    TEN = None
    QNAN = None   # open interval up to +infinity
    SNAN = None   # open interval down to -infinity
    FACTORY = None

    @classmethod
    def internal_setup(cls):
        """Initialize DoubleUnum constants after the DoubleUnum class is defined."""
        cls.ZERO = cls(0.0)
        cls.ONE  = cls(1.0)
        cls.TWO  = cls(2.0)
        cls.TEN  = cls(10.0)
        cls.QNAN = cls(doubles.QNAN)
        cls.SNAN = cls(doubles.SNAN)
        cls.FACTORY = Factory(zero=cls.ZERO, one=cls.ONE, q_nan=cls.QNAN, s_nan=cls.SNAN)


DoubleUnum.internal_setup()
assert DoubleUnum.ZERO.is_exact()
assert DoubleUnum.QNAN.is_inexact()
assert not DoubleUnum.QNAN.is_sign_negative()
assert DoubleUnum.SNAN.is_sign_negative()


# Inspection
# ----------
def type_name(x):
    """
    Describe (very briefly) what type of object this is.

    THANKS:  http://stackoverflow.com/a/5008854/673991
    """
    return type(x).__name__
