#
# Conversion between text in radices 2 to 62 and significand / exponent pairs
#
# (c) Neil Booth 2007-2021.  All rights reserved.
#

from collections import namedtuple
from math import floor, log2, log10

import attr

from .errors import InvalidRadix, ParseError
from .limbs import Magnitude
from .rounding import (
    LF_LESS_THAN_HALF, LF_EXACTLY_HALF, LF_MORE_THAN_HALF, round_up
)


__all__ = ('TextFormat', 'DefaultDecFormat', 'Dec_g_Format', 'ParsedNumber',
           'MIN_RADIX', 'MAX_RADIX', 'DIGIT_CHARS')


MIN_RADIX = 2
MAX_RADIX = 62

# Digit values are the index into this string.  Radices up to 36 are case-insensitive.
DIGIT_CHARS = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz'
_DIGIT_VALUES = {char: value for value, char in enumerate(DIGIT_CHARS)}

log2_10 = log2(10)
log10_2 = log10(2)
_TEN = Magnitude.from_int(10)


# sign is True for a minus sign.  digits is the list of significand digit values without
# the radix point.  The number is
#
#      (-1)^sign * int(digits, radix) * radix^radix_exponent * 2^binary_exponent
#
ParsedNumber = namedtuple('ParsedNumber',
                          'sign is_nan digits radix radix_exponent binary_exponent')


def check_radix(radix):
    '''Raise InvalidRadix unless radix is 0 or in the range [MIN_RADIX, MAX_RADIX].'''
    if not isinstance(radix, int) or isinstance(radix, bool):
        raise TypeError('radix must be an integer')
    if radix != 0 and not MIN_RADIX <= radix <= MAX_RADIX:
        raise InvalidRadix(f'radix must be 0 or from {MIN_RADIX} to {MAX_RADIX}, not {radix}')
    return radix


def digit_value(char, radix):
    '''Return the value of char as a digit in the given radix, or None.'''
    if radix <= 36 and 'a' <= char <= 'z':
        char = char.upper()
    value = _DIGIT_VALUES.get(char)
    if value is None or value >= radix:
        return None
    return value


def scan(text, radix):
    '''Scan text as a number in the given radix, which must be 0 or in [2, 62].  A radix of
    0 means a '0x' prefix selects radix 16, '0b' radix 2, and otherwise radix 10.

    Returns a ParsedNumber.  Raises ParseError if the text is malformed.
    '''
    check_radix(radix)
    if not isinstance(text, str):
        raise TypeError('parse requires a string')

    # Surrounding whitespace is ignored
    end = len(text.rstrip())
    pos = len(text) - len(text.lstrip())
    if pos >= end:
        raise ParseError(text, len(text), 'no digits')

    sign = False
    if text[pos] in '+-':
        sign = text[pos] == '-'
        pos += 1

    special = text[pos:end].lower()
    if special == '@nan@' or (special == 'nan' and radix <= 16):
        return ParsedNumber(False, True, [], radix or 10, 0, 0)

    prefix = text[pos: pos + 2].lower()
    if prefix == '0x' and radix in (0, 16):
        radix = 16
        pos += 2
    elif prefix == '0b' and radix in (0, 2):
        radix = 2
        pos += 2
    elif radix == 0:
        radix = 10

    # Significand digits with an optional radix point
    digits = []
    frac_len = 0
    seen_point = False
    while pos < end:
        char = text[pos]
        if char == '.' and not seen_point:
            seen_point = True
        else:
            value = digit_value(char, radix)
            if value is None:
                break
            digits.append(value)
            frac_len += seen_point
        pos += 1

    if not digits:
        if pos < end:
            raise ParseError(text, pos, f'invalid digit {text[pos]!r} for radix {radix}')
        raise ParseError(text, pos, 'no significand digits')

    # Optional exponent
    radix_exponent = binary_exponent = 0
    if pos < end:
        marker = text[pos]
        if marker == '@' or (marker in 'eE' and radix <= 10):
            is_binary = False
        elif marker in 'pP' and radix in (2, 16):
            is_binary = True
        else:
            raise ParseError(text, pos, f'invalid digit {marker!r} for radix {radix}')
        pos += 1
        start = pos
        if pos < end and text[pos] in '+-':
            pos += 1
        digits_start = pos
        while pos < end and '0' <= text[pos] <= '9':
            pos += 1
        if pos == digits_start:
            raise ParseError(text, pos, 'malformed exponent')
        if pos < end:
            raise ParseError(text, pos, f'unexpected character {text[pos]!r} after exponent')
        if is_binary:
            binary_exponent = int(text[start:pos])
        else:
            radix_exponent = int(text[start:pos])

    return ParsedNumber(sign, False, digits, radix, radix_exponent - frac_len,
                        binary_exponent)


def decimal_precision(precision):
    '''The least number of significant decimal digits to convert a value of the given binary
    precision to and from decimal correctly.'''
    return 2 + floor(precision / log2_10)


def decimal_digits(significand, exponent, precision, count=0):
    '''Convert the finite non-zero value significand * 2^exponent, where significand is a
    Magnitude with precision bits, to decimal.  Returns a tuple (point, digits, is_inexact).

    digits is a string of significant decimal digits and point is the number of digits
    that come before the decimal point; it can be negative or exceed len(digits).

    count is the number of significant digits to output, rounding half-even.  0 returns
    the shortest digit string that, when read back with round-to-nearest at the given
    precision, gives the original value.

    See "How to Print Floating-Point Numbers Accurately" by Steele and White, in
    particular Table 3.  This is an optimized implementation of their algorithm.
    '''
    R = significand << max(0, exponent)
    M = Magnitude.ONE << max(0, exponent)
    S = Magnitude.ONE << max(0, -exponent)

    # Scale by an estimate of the decimal exponent with a single power of ten.  The loops
    # below then correct the estimate in a step or two whichever way it is out.
    scale = floor((exponent + significand.bit_length()) * log10_2)
    if scale > 0:
        S *= _TEN ** scale
    elif scale < 0:
        power = _TEN ** -scale
        R *= power
        M *= power
    exponent = scale - 1

    # This loop is for negative exponents H. It scales R until divmod() delivers the
    # first significant digit.
    while R * 10 < S:
        exponent -= 1
        R *= 10
        M *= 10

    # This loop is for positive exponents H.  It scales S until digits can be reliably
    # delivered.
    while 2 * R + M >= 2 * S:
        S *= 10
        exponent += 1

    if count:
        # Precision is fixed.  Generate the digits.
        def gen_digits(count):
            nonlocal R
            while R and count:
                U, R = divmod(R * 10, S)
                yield int(U) + 48
                count -= 1

        digits = bytearray(gen_digits(count))
        # Rounding
        if R:
            R *= 2
            if R < S:
                lost_fraction = LF_LESS_THAN_HALF
            elif R == S:
                lost_fraction = LF_EXACTLY_HALF
            else:
                lost_fraction = LF_MORE_THAN_HALF

            # Handle rounding by bumping
            if round_up(lost_fraction, bool(digits[-1] & 1)):
                pos = len(digits)
                while True:
                    pos -= 1
                    digits[pos] = (digits[pos] - 48 + 1) % 10 + 48
                    if digits[pos] != 48:
                        break
                    if pos == 0:
                        digits[pos] = 49
                        exponent += 1
                        break
    else:
        # Now the arithmetic value is R / S.  M is the value of one high-ulp, and hence is
        # always scaled alongside the significand remainder R.  A low-ulp is the same
        # size as a high-ulp except when the significand is a power of two, in which
        # case it is half the size.  When the remainder R is strictly less than half a
        # low-ulp, or strictly greater than S less half a high-ulp, we can stop
        # generating digits as round-to-nearest of the output gives our value.  The
        # 'strictly' condition can be removed if we are even, because then round-to-even
        # will round correctly.
        low_shift = 2 if significand == Magnitude.ONE << (precision - 1) else 1
        is_even = not significand.is_odd()

        digits = bytearray()
        while True:
            U, R = divmod(R * 10, S)
            U = int(U)
            M *= 10
            # If we have equality with M then the decimal we output is exactly
            # half-an-ulp from the target value.  If the target value is even then it
            # will be rounded to and we can stop.
            low = (R << low_shift) < M + is_even
            high = 2 * (S - R) < M + is_even
            if low or high:
                break
            digits.append(U + 48)

        if low and not high:
            pass
        elif high and not low:
            U += 1
        elif 2 * R < S:
            pass
        elif 2 * R > S:
            U += 1
        else:
            U += (U & 1)
        digits.append(U + 48)

    digits = digits.decode()
    digits += '0' * (count - len(digits))

    return exponent + 1, digits, bool(R)


@attr.s(slots=True, kw_only=True, eq=False)
class TextFormat:
    '''Controls the output of conversion to decimal strings.'''

    # The minimum number of digits to output in the exponent of a finite number.  Defaults
    # to 1.  0 suppresses the exponent by adding leading or trailing zeroes to the
    # significand as needed (as for the printf 'f' format specifier in the C programming
    # language).  If negative, apply the rule for the printf 'g' format specifier to
    # decide whether to display an exponent or not, in which case the minimum number of
    # digits in the exponent is the absolute value.
    exp_digits = attr.ib(default=1)
    # If True positive exponents display a '+'.
    force_exp_sign = attr.ib(default=True)
    # If True, non-negative numbers are preceded with a '+'.
    force_leading_sign = attr.ib(default=False)
    # If True, display a point followed by a zero even though none is needed.  For
    # example, "5" and "1e2" would display as "5.0" and "1.0e2".
    force_point = attr.ib(default=False)
    # If True, the exponent character 'e' is in upper case.  This does not affect the
    # text of the NaN indicator below which is copied unmodified.
    upper_case = attr.ib(default=False)
    # If True, trailing insignificant zeroes are stripped
    rstrip_zeroes = attr.ib(default=False)
    # The string output for NaNs
    nan = attr.ib(default='NaN')

    def leading_sign(self, sign):
        '''Return the leading sign string.'''
        return '-' if sign else '+' if self.force_leading_sign else ''

    def exponent_str(self, exponent):
        '''Return the formatted exponent.'''
        sign = '-' if exponent < 0 else '+' if self.force_exp_sign else ''
        main = str(abs(exponent))
        zeroes = '0' * (abs(self.exp_digits) - len(main))
        return f'{sign}{zeroes}{main}'

    def format_nan(self):
        return self.nan

    def format_decimal(self, sign, point, digits, precision=None):
        '''sign is True if the number has a negative sign.  digits is a string of significant
        digits of a number converted to decimal.  point is the number of those digits
        before the decimal point, i.e. the decimal point is inserted into digits at that
        offset.  precision is the precision used to apply the printf 'g' rule.
        '''
        precision = precision or len(digits)
        assert precision > 0

        if self.rstrip_zeroes:
            digits = digits.rstrip('0') or '0'

        parts = [self.leading_sign(sign)]

        # The exponent of the leading digit
        exponent = point - 1
        exp_digits = self.exp_digits
        if exp_digits < 0:
            # Apply the fprintf 'g' format specifier rule
            if precision > exponent >= -4:
                exp_digits = 0

        if exp_digits:
            if len(digits) > 1:
                parts.extend((digits[0], '.', digits[1:]))
            elif self.force_point:
                parts.extend((digits, '.0'))
            else:
                parts.append(digits)
            parts.append('E' if self.upper_case else 'e')
            parts.append(self.exponent_str(exponent))
        else:
            if point <= 0:
                parts.extend(('0.', '0' * -point, digits))
            else:
                if point > len(digits):
                    digits += (point - len(digits)) * '0'
                if point < len(digits):
                    parts.extend((digits[:point], '.', digits[point:]))
                elif self.force_point:
                    parts.extend((digits, '.0'))
                else:
                    parts.append(digits)

        return ''.join(parts)


# Default format for decimal output.  Like Python's repr() of a float it switches to
# scientific notation for very large and very small numbers.
DefaultDecFormat = TextFormat(exp_digits=-2)

# This instance is intended to match the output of Python's **g** format specifier when
# the specified precisions are the same.
Dec_g_Format = TextFormat(exp_digits=-2, rstrip_zeroes=True, nan='nan')
