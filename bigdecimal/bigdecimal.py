#
# An implementation of arbitrary-precision binary floating point arithmetic
#
# (c) Neil Booth 2007-2021.  All rights reserved.
#

import math
from collections import namedtuple
from enum import IntEnum
from fractions import Fraction

from .context import Flags, get_context
from .errors import ConstructionError
from .limbs import Magnitude, check_precision
from .radix import DefaultDecFormat, decimal_digits, decimal_precision, scan
from .rounding import normalize


__all__ = ('BigDecimal', 'Special', 'Compare',
           'with_precision', 'zero', 'one', 'from_int', 'from_float', 'parse',
           'OP_ADD', 'OP_SUBTRACT', 'OP_MULTIPLY', 'OP_DIVIDE', 'OP_REMAINDER',
           'OP_TO_PRECISION', 'OP_FROM_INT', 'OP_FROM_FLOAT', 'OP_FROM_STRING',
           'OP_TO_DECIMAL_STRING')


# Operation names
OP_ADD = 'add'
OP_SUBTRACT = 'subtract'
OP_MULTIPLY = 'multiply'
OP_DIVIDE = 'divide'
OP_REMAINDER = 'remainder'
OP_TO_PRECISION = 'to_precision'
OP_FROM_INT = 'from_int'
OP_FROM_FLOAT = 'from_float'
OP_FROM_STRING = 'from_string'
OP_TO_DECIMAL_STRING = 'to_decimal_string'


class Special(IntEnum):
    FINITE = 0
    ZERO = 1
    NAN = 2


# Four-way result of the compare() operation.
class Compare(IntEnum):
    LESS_THAN = 0
    EQUAL = 1
    GREATER_THAN = 2
    UNORDERED = 3


class BigDecimal(namedtuple('BigDecimal', 'precision special sign exponent significand')):
    '''Internal Representation
       -----------------------

    precision is the number of bits in the significand, and is at least 1.  Every operation
    on two values delivers a result with the greater of their precisions.

    special distinguishes finite non-zero numbers from zeroes and NaNs.  sign is True for
    negative numbers; NaNs are never negative.  Zeroes are signed but a zero of either
    sign compares equal to any other zero.

    For finite non-zero numbers significand is a Magnitude with exactly precision bits,
    so its MSB is set, and exponent is the arithmetic exponent of that MSB:

            value = (-1)^sign * significand * 2^(exponent - precision + 1).

    Exponents are unbounded, so there is no overflow, underflow or subnormals.  Zeroes
    and NaNs have a zero significand and exponent.
    '''

    __slots__ = ()

    def __new__(cls, precision, special, sign, exponent, significand):
        '''Validate and create a floating point number with the given precision, special
        state, sign, exponent and significand.
        '''
        check_precision(precision)
        if not isinstance(special, Special):
            raise TypeError('special must be a Special instance')
        if not isinstance(sign, bool):
            raise TypeError('sign must be a bool')
        if not isinstance(exponent, int):
            raise TypeError('exponent must be an integer')
        if not isinstance(significand, Magnitude):
            raise TypeError('significand must be a Magnitude')
        if special == Special.FINITE:
            if significand.bit_length() != precision:
                raise ValueError(f'significand must have exactly {precision:,d} bits')
        else:
            if significand or exponent:
                raise ValueError('zeroes and NaNs have a zero significand and exponent')
            if special == Special.NAN and sign:
                raise ValueError('NaNs are unsigned')
        return super().__new__(cls, precision, special, sign, exponent, significand)

    ##
    ## Non-computational operations.
    ##

    def is_nan(self):
        '''Return True if this is a NaN.'''
        return self.special == Special.NAN

    def is_finite(self):
        '''Return True if the value is not a NaN.'''
        return self.special != Special.NAN

    def is_zero(self):
        '''Return True if the value compares equal to zero, regardless of sign.'''
        return self.equals(zero())

    def is_negative(self):
        '''Return True if the sign bit is set.'''
        return self.sign

    def radix(self):
        '''We're binary!'''
        return 2

    def exponent_int(self):
        '''Return the arithmetic exponent of our significand interpreted as an integer.'''
        assert self.special == Special.FINITE
        return self.exponent - (self.precision - 1)

    def decimal_precision(self):
        '''The number of significant decimal digits needed to convert to and from decimal
        correctly at our precision.'''
        return decimal_precision(self.precision)

    def as_integer_ratio(self):
        '''Return a pair (n, d) of integers that represent the floating point value as a fraction
        in lowest terms and with a positive denominator.'''
        if self.is_nan():
            raise ValueError('cannot convert a NaN to an integer ratio')
        if self.special == Special.ZERO:
            return (0, 1)
        exp = self.exponent_int()
        significand = int(self.significand)
        while exp < 0 and not (significand & 1):
            significand >>= 1
            exp += 1

        if exp >= 0:
            n, d = significand << exp, 1
        else:
            n, d = significand, 1 << -exp
        return (-n if self.sign else n), d

    ##
    ## Quiet computational operations
    ##

    def set_sign(self, sign):
        '''Return a copy of this number with the given sign.  NaNs are returned unchanged.'''
        if self.sign is sign or self.is_nan():
            return self
        return self._replace(sign=sign)

    def copy_abs(self):
        '''Return this value with sign False (positive).'''
        return self.set_sign(False)

    def copy_negate(self):
        '''Return this value with the opposite sign.  A NaN stays a NaN.'''
        return self.set_sign(not self.sign)

    negate = copy_negate

    def to_precision(self, precision, context=None):
        '''Return this value correctly rounded to the given precision.'''
        check_precision(precision)
        if self.special != Special.FINITE:
            return self._replace(precision=precision)
        if precision >= self.precision:
            return self._widen(precision)
        context = context or get_context()
        op_tuple = (OP_TO_PRECISION, self, precision)
        return _round(self.sign, self.exponent_int(), self.significand, precision, op_tuple,
                      context)

    def _widen(self, precision):
        '''Return this finite value exactly at a precision no smaller than our own.'''
        if precision == self.precision:
            return self
        significand = self.significand << (precision - self.precision)
        return BigDecimal(precision, Special.FINITE, self.sign, self.exponent, significand)

    ##
    ## General computational operations.  The result has the greater precision of the
    ## operands.
    ##

    def add(self, rhs, context=None):
        '''Return the sum self + rhs.'''
        return self._add_sub((OP_ADD, self, rhs), rhs, False, context)

    def subtract(self, rhs, context=None):
        '''Return the difference self - rhs.'''
        return self._add_sub((OP_SUBTRACT, self, rhs), rhs, True, context)

    def _add_sub(self, op_tuple, rhs, is_subtract, context):
        precision = max(self.precision, rhs.precision)

        if self.is_nan() or rhs.is_nan():
            return make_nan(precision)

        rhs_sign = rhs.sign ^ is_subtract

        # Handle zeroes.  An exact zero sum is always a positive zero.
        if rhs.special == Special.ZERO:
            if self.special == Special.ZERO:
                return make_zero(precision)
            return self._widen(precision)
        if self.special == Special.ZERO:
            return rhs._widen(precision).set_sign(rhs_sign)

        context = context or get_context()
        lhs_exponent, lhs_sig = self.exponent_int(), self.significand
        rhs_exponent, rhs_sig = rhs.exponent_int(), rhs.significand

        # An operand lying wholly below the rounding point of the other contributes only
        # to the lost fraction, so replace it with a single sticky bit.
        if rhs.exponent < self.exponent - precision - 2:
            rhs_exponent, rhs_sig = self.exponent - precision - 3, Magnitude.ONE
        elif self.exponent < rhs.exponent - precision - 2:
            lhs_exponent, lhs_sig = rhs.exponent - precision - 3, Magnitude.ONE

        # Shift the significand with the greater exponent left until its effective
        # exponent is equal to the smaller exponent.
        lshift = lhs_exponent - rhs_exponent
        if lshift >= 0:
            lhs_sig <<= lshift
            exponent = rhs_exponent
        else:
            rhs_sig <<= -lshift
            exponent = lhs_exponent

        if self.sign == rhs_sign:
            significand = lhs_sig + rhs_sig
            sign = self.sign
        elif lhs_sig >= rhs_sig:
            significand = lhs_sig - rhs_sig
            sign = self.sign
        else:
            significand = rhs_sig - lhs_sig
            sign = rhs_sign

        if not significand:
            sign = False

        return _round(sign, exponent, significand, precision, op_tuple, context)

    def multiply(self, rhs, context=None):
        '''Return the product self * rhs.'''
        precision = max(self.precision, rhs.precision)

        if self.is_nan() or rhs.is_nan():
            return make_nan(precision)

        sign = self.sign ^ rhs.sign
        if self.special == Special.ZERO or rhs.special == Special.ZERO:
            return make_zero(precision, sign)

        context = context or get_context()
        op_tuple = (OP_MULTIPLY, self, rhs)
        exponent = self.exponent_int() + rhs.exponent_int()
        return _round(sign, exponent, self.significand * rhs.significand, precision,
                      op_tuple, context)

    def divide(self, rhs, context=None):
        '''Return the quotient self / rhs.  Division by zero delivers a NaN.'''
        precision = max(self.precision, rhs.precision)

        if self.is_nan() or rhs.is_nan():
            return make_nan(precision)

        context = context or get_context()
        op_tuple = (OP_DIVIDE, self, rhs)
        sign = self.sign ^ rhs.sign

        if rhs.special == Special.ZERO:
            # 0 / 0 is invalid; finite / 0 is a division by zero
            flag = Flags.INVALID if self.special == Special.ZERO else Flags.DIV_BY_ZERO
            context.set_flags(flag, op_tuple)
            return make_nan(precision)

        if self.special == Special.ZERO:
            return make_zero(precision, sign)

        exponent, quotient = _divide_significands(self.significand, rhs.significand,
                                                  precision)
        exponent += self.exponent_int() - rhs.exponent_int()
        return _round(sign, exponent, quotient, precision, op_tuple, context)

    def remainder(self, rhs, context=None):
        '''Return the remainder self - rhs * n, where n is the integer quotient self / rhs
        truncated towards zero.  The result is computed exactly before rounding and, if
        non-zero, has the sign of self.  A zero rhs delivers a NaN.
        '''
        precision = max(self.precision, rhs.precision)

        if self.is_nan() or rhs.is_nan():
            return make_nan(precision)

        context = context or get_context()
        op_tuple = (OP_REMAINDER, self, rhs)

        if rhs.special == Special.ZERO:
            context.set_flags(Flags.INVALID, op_tuple)
            return make_nan(precision)

        if self.special == Special.ZERO:
            return make_zero(precision, self.sign)

        # |self| < |rhs| means the quotient truncates to zero
        if self.exponent < rhs.exponent:
            return self._widen(precision)

        lhs_exponent = self.exponent_int()
        rhs_exponent = rhs.exponent_int()
        if lhs_exponent >= rhs_exponent:
            # Reduce 2^shift modulo rhs first so huge shifts stay cheap
            modulus = rhs.significand
            power = pow(_TWO, lhs_exponent - rhs_exponent, modulus)
            significand = (self.significand % modulus) * power % modulus
            exponent = rhs_exponent
        else:
            significand = self.significand % (rhs.significand << (rhs_exponent - lhs_exponent))
            exponent = lhs_exponent

        return _round(self.sign, exponent, significand, precision, op_tuple, context)

    ##
    ## Comparisons.  Any comparison involving a NaN is unordered.
    ##

    def compare(self, rhs):
        '''Return self vs rhs as one of the four comparison constants.'''
        if self.is_nan() or rhs.is_nan():
            return Compare.UNORDERED

        if self.special == Special.ZERO:
            if rhs.special == Special.ZERO:
                return Compare.EQUAL
            return Compare.GREATER_THAN if rhs.sign else Compare.LESS_THAN

        # If signs differ it's easy.  Also get the RHS-is-zero case out the way as zeroes
        # cannot have their exponents compared.
        if rhs.special == Special.ZERO or self.sign != rhs.sign:
            return Compare.LESS_THAN if self.sign else Compare.GREATER_THAN

        # Two non-zero finite numbers with equal signs.  Compare the exponents of their
        # MSBs.
        exponent_diff = self.exponent - rhs.exponent
        if exponent_diff:
            if (exponent_diff > 0) ^ self.sign:
                return Compare.GREATER_THAN
            return Compare.LESS_THAN

        # Exponents are the same.  Make the significands comparable.
        lhs_sig, rhs_sig = self.significand, rhs.significand
        length_diff = self.precision - rhs.precision
        if length_diff > 0:
            rhs_sig <<= length_diff
        elif length_diff < 0:
            lhs_sig <<= -length_diff

        if lhs_sig == rhs_sig:
            return Compare.EQUAL
        if (lhs_sig > rhs_sig) ^ self.sign:
            return Compare.GREATER_THAN
        return Compare.LESS_THAN

    def equals(self, rhs):
        '''Return True if self and rhs are the same number.  Always False if either is a NaN.'''
        return self.compare(rhs) == Compare.EQUAL

    def less_than(self, rhs):
        '''Return True if self is less than rhs.  Always False if either is a NaN.'''
        return self.compare(rhs) == Compare.LESS_THAN

    ##
    ## Conversion to text
    ##

    def __repr__(self):
        return self.to_string()

    def __str__(self):
        return self.to_string()

    def to_string(self, text_format=None, context=None):
        '''Return the shortest decimal text that reads back as this value at its precision.
        See TextFormat for output control.'''
        return self.to_decimal_string(0, text_format, context)

    def to_decimal_string(self, digits=0, text_format=None, context=None):
        '''Return text that is a decimal representation of the value.

        digits is the number of significant digits to output.  0 outputs the number in the
        shortest possible number of digits such that, when reading back with
        round-to-nearest at our precision, it shall give the original number.  Otherwise
        the output is rounded half-even to that many digits, and inexact is flagged if
        that loses information.
        '''
        if not isinstance(digits, int) or digits < 0:
            raise ValueError('digits must be a non-negative integer')
        text_format = text_format or DefaultDecFormat

        if self.is_nan():
            return text_format.format_nan()
        if self.special == Special.ZERO:
            return text_format.format_decimal(False, 1, '0')

        point, digit_str, is_inexact = decimal_digits(self.significand, self.exponent_int(),
                                                      self.precision, digits)
        if digits:
            if is_inexact:
                context = context or get_context()
                context.set_flags(Flags.INEXACT, (OP_TO_DECIMAL_STRING, self, digits))
            precision = digits
        else:
            precision = self.decimal_precision() - 1
        return text_format.format_decimal(self.sign, point, digit_str, precision)

    ##
    ## Python support - make it feel like a Python numeric data type.
    ##

    def _convert_for_arith(self, value):
        '''Convert value to something capable of doing arithmetic with us.

        BigDecimal values are returned unmodified.  Python ints and floats are converted at
        our precision.  Otherwise None is returned.
        '''
        if isinstance(value, BigDecimal):
            return value
        if isinstance(value, float):
            return from_float(value, self.precision)
        if isinstance(value, int):
            return from_int(value, self.precision)
        return None

    def __abs__(self):
        return self.copy_abs()

    def __neg__(self):
        return self.copy_negate()

    def __pos__(self):
        return self

    def __eq__(self, other):
        compare = compare_any(self, other)
        if compare is None:
            return NotImplemented
        return compare == Compare.EQUAL

    def __ne__(self, other):
        compare = compare_any(self, other)
        if compare is None:
            return NotImplemented
        return compare != Compare.EQUAL

    def __lt__(self, other):
        compare = compare_any(self, other)
        if compare is None:
            return NotImplemented
        return compare == Compare.LESS_THAN

    def __le__(self, other):
        compare = compare_any(self, other)
        if compare is None:
            return NotImplemented
        return compare in (Compare.EQUAL, Compare.LESS_THAN)

    def __ge__(self, other):
        compare = compare_any(self, other)
        if compare is None:
            return NotImplemented
        return compare in (Compare.EQUAL, Compare.GREATER_THAN)

    def __gt__(self, other):
        compare = compare_any(self, other)
        if compare is None:
            return NotImplemented
        return compare == Compare.GREATER_THAN

    def __bool__(self):
        return not self.is_zero()

    def __int__(self):
        '''Truncate towards zero.'''
        if self.is_nan():
            raise ValueError('cannot convert a NaN to an integer')
        n, d = self.as_integer_ratio()
        return -(-n // d) if n < 0 else n // d

    __trunc__ = __int__

    def __float__(self):
        if self.is_nan():
            return math.nan
        n, d = self.as_integer_ratio()
        return n / d

    def __add__(self, other):
        other = self._convert_for_arith(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        other = self._convert_for_arith(other)
        if other is None:
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        other = self._convert_for_arith(other)
        if other is None:
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other):
        other = self._convert_for_arith(other)
        if other is None:
            return NotImplemented
        return self.divide(other)

    def __mod__(self, other):
        other = self._convert_for_arith(other)
        if other is None:
            return NotImplemented
        return self.remainder(other)

    def __radd__(self, other):
        return self.__add__(other)

    def __rsub__(self, other):
        other = self._convert_for_arith(other)
        if other is None:
            return NotImplemented
        return other.subtract(self)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __rtruediv__(self, other):
        other = self._convert_for_arith(other)
        if other is None:
            return NotImplemented
        return other.divide(self)

    def __rmod__(self, other):
        other = self._convert_for_arith(other)
        if other is None:
            return NotImplemented
        return other.remainder(self)

    def __hash__(self):
        '''Python hash.  Must hash equally to other types with the same value.'''
        if self.is_nan():
            return 0
        return hash(Fraction(*self.as_integer_ratio()))


#
# Constructors
#

def make_zero(precision, sign=False):
    return BigDecimal(precision, Special.ZERO, sign, 0, Magnitude.allocate(precision))


def make_nan(precision):
    return BigDecimal(precision, Special.NAN, False, 0, Magnitude.allocate(precision))


def with_precision(precision):
    '''Return a positive zero with the given precision.'''
    return make_zero(precision)


def zero(context=None):
    '''Return a positive zero with the context's precision.'''
    context = context or get_context()
    return make_zero(context.precision)


def one(context=None):
    '''Return one with the context's precision.'''
    return from_int(1, context=context)


def from_int(value, precision=None, context=None):
    '''Return the integer value converted to the given precision (by default the context's),
    rounding if necessary.'''
    if not isinstance(value, int):
        raise TypeError('from_int requires an integer')
    precision, context = _resolve_precision(precision, context)
    op_tuple = (OP_FROM_INT, value)
    return _round(value < 0, 0, Magnitude.from_int(abs(value)), precision, op_tuple, context)


def from_float(value, precision=None, context=None):
    '''Return the exact binary value of a Python float rounded to the given precision (by
    default the context's).  A float NaN becomes a NaN; infinities cannot be represented
    and raise ConstructionError.'''
    if not isinstance(value, float):
        raise TypeError('from_float requires a float')
    precision, context = _resolve_precision(precision, context)
    if math.isnan(value):
        return make_nan(precision)
    if math.isinf(value):
        raise ConstructionError('cannot convert an infinity')
    sign = math.copysign(1.0, value) < 0
    numerator, denominator = abs(value).as_integer_ratio()
    # The denominator is a power of two
    exponent = 1 - denominator.bit_length()
    op_tuple = (OP_FROM_FLOAT, value)
    return _round(sign, exponent, Magnitude.from_int(numerator), precision, op_tuple, context)


def parse(text, radix=10, precision=None, context=None):
    '''Convert text in the given radix to a value correctly rounded to the given precision
    (by default the context's).

    radix must be 0 or from 2 to 62, otherwise InvalidRadix is raised.  A radix of 0
    recognises '0x' and '0b' prefixes and otherwise means radix 10.  Raises ParseError if
    the text is malformed.

    Exponents of any size are accepted.  When the power of the radix is too large for the
    result to be exact it is approximated with an error bound and refined until the bound
    decides the rounding, so the cost grows with the length of the exponent, not with its
    value.
    '''
    number = scan(text, radix)
    precision, context = _resolve_precision(precision, context)

    if number.is_nan:
        return make_nan(precision)

    significand = Magnitude.from_digits(number.digits, number.radix)
    if not significand:
        return make_zero(precision, number.sign)

    op_tuple = (OP_FROM_STRING, text)
    # radix = 2^twos * odd.  The power of two goes straight into the exponent.
    twos = (number.radix & -number.radix).bit_length() - 1
    odd = number.radix >> twos
    power = number.radix_exponent
    exponent = number.binary_exponent + twos * power

    # If odd^|power| exceeds both 2^(precision + 2) and the significand the result is
    # inexact and lies strictly inside a rounding interval.
    limit = max(precision, significand.bit_length()) + 3
    if odd > 1 and abs(power) * math.log2(odd) > limit:
        return _round_scaled(number.sign, exponent, significand, odd, power, precision,
                             op_tuple, context)

    if power >= 0:
        significand *= Magnitude.from_int(odd) ** power
    else:
        divisor = Magnitude.from_int(odd) ** -power
        quot_exponent, significand = _divide_significands(significand, divisor, precision)
        exponent += quot_exponent

    return _round(number.sign, exponent, significand, precision, op_tuple, context)


#
# Useful internal helper routines
#

_TWO = Magnitude.from_int(2)


def _resolve_precision(precision, context):
    '''Return a (precision, context) pair, taking defaults from the current context.'''
    context = context or get_context()
    if precision is None:
        precision = context.precision
    return check_precision(precision), context


def _round(sign, exponent, significand, precision, op_tuple, context):
    '''Return the correctly-rounded value of the infinitely precise result

           ± 2^exponent * significand

    with the given precision.  Flags inexact if appropriate.
    '''
    if not significand:
        return make_zero(precision, sign)

    exponent, significand, is_inexact = normalize(exponent, significand, precision)
    if is_inexact:
        context.set_flags(Flags.INEXACT, op_tuple)
    return BigDecimal(precision, Special.FINITE, sign, exponent, significand)


def _truncate(value, exponent, bits):
    '''Truncate value * 2^exponent to at most bits significant bits.'''
    excess = value.bit_length() - bits
    if excess > 0:
        value >>= excess
        exponent += excess
    return value, exponent


def _power_lower_bound(base, count, bits):
    '''Return a pair (lower, exponent) with lower * 2^exponent <= base^count.  Every
    intermediate product is truncated to bits bits.

    Each truncation loses a relative error under 2^(1 - bits), and the truncated value of
    base^(2^j) enters the result at most 2^j times, so the lower bound is at least
    base^count * (1 - 2^(1 - bits))^(count + count.bit_length()).
    '''
    base, base_exponent = Magnitude.from_int(base), 0
    result, exponent = Magnitude.ONE, 0
    while True:
        if count & 1:
            result, exponent = _truncate(result * base, exponent + base_exponent, bits)
        count >>= 1
        if not count:
            return result, exponent
        base, base_exponent = _truncate(base * base, base_exponent * 2, bits)


def _round_scaled(sign, exponent, significand, odd, power, precision, op_tuple, context):
    '''Return the correctly-rounded value of

           ± 2^exponent * significand * odd^power

    where the caller guarantees the result is inexact and not halfway between two values
    of the given precision.  odd^|power| is bracketed between two bounds, and the working
    precision doubles until both bounds round to the same value.
    '''
    count = abs(power)
    truncations = count + count.bit_length()
    bits = precision + truncations.bit_length() + 32
    while True:
        lower, power_exponent = _power_lower_bound(odd, count, bits)
        # base^count <= lower * (1 + truncations * 2^(2 - bits)) when that product of
        # truncations and error is at most a half
        upper = lower + ((lower * (truncations * 2)) >> (bits - 1)) + 1
        if power > 0:
            rounded = [normalize(exponent + power_exponent, significand * bound, precision)[:2]
                       for bound in (lower, upper)]
        else:
            rounded = []
            for bound in (upper, lower):
                quot_exponent, quotient = _divide_significands(significand, bound, precision)
                rounded.append(normalize(exponent + quot_exponent - power_exponent, quotient,
                                         precision)[:2])
        if rounded[0] == rounded[1]:
            break
        bits *= 2

    context.set_flags(Flags.INEXACT, op_tuple)
    exponent, significand = rounded[0]
    return BigDecimal(precision, Special.FINITE, sign, exponent, significand)


def _divide_significands(lhs_sig, rhs_sig, precision):
    '''Return an (exponent, quotient) pair such that 2^exponent * quotient rounds to the given
    precision exactly as the infinitely precise lhs_sig / rhs_sig would.

    The quotient has at least two guard bits beyond the precision, and its LSB is a sticky
    bit recording whether the division was inexact.
    '''
    shift = max(0, precision + 2 + rhs_sig.bit_length() - lhs_sig.bit_length())
    quotient, remainder = divmod(lhs_sig << shift, rhs_sig)
    exponent = -shift
    if remainder:
        quotient = (quotient << 1) + 1
        exponent -= 1
    return exponent, quotient


def compare_any(value, other):
    '''LHS is a BigDecimal.  RHS is any type.'''
    if isinstance(other, BigDecimal):
        return value.compare(other)
    if isinstance(other, float):
        if math.isnan(other):
            return Compare.UNORDERED
        if math.isinf(other):
            if value.is_nan():
                return Compare.UNORDERED
            return Compare.GREATER_THAN if other < 0 else Compare.LESS_THAN
    if isinstance(other, (int, float, Fraction)):
        if value.is_nan():
            return Compare.UNORDERED

        # We want an infinitely precise comparison so we must not convert to BigDecimal.
        # Compare both sides as fractions.
        a, b = value.as_integer_ratio()
        other = Fraction(other)
        diff = a * other.denominator - b * other.numerator
        if diff > 0:
            return Compare.GREATER_THAN
        if diff < 0:
            return Compare.LESS_THAN
        return Compare.EQUAL

    return None
