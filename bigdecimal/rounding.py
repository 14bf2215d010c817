#
# Rounding of raw significands to a target precision
#
# (c) Neil Booth 2007-2021.  All rights reserved.
#

__all__ = ('LF_EXACTLY_ZERO', 'LF_LESS_THAN_HALF', 'LF_EXACTLY_HALF', 'LF_MORE_THAN_HALF',
           'lost_bits_from_rshift', 'shift_right', 'round_up', 'normalize')


# When precision is lost during a calculation these indicate what fraction of the LSB the
# lost bits represented.  It essentially combines the roles of 'guard' and 'sticky' bits.
LF_EXACTLY_ZERO = 0           # 000000
LF_LESS_THAN_HALF = 1         # 0xxxxx  x's not all zero
LF_EXACTLY_HALF = 2           # 100000
LF_MORE_THAN_HALF = 3         # 1xxxxx  x's not all zero


def lost_bits_from_rshift(significand, bits):
    '''Return what the lost bits would be were the significand shifted right the given number
    of bits (negative is a left shift).
    '''
    if bits <= 0:
        return LF_EXACTLY_ZERO
    # Bits above the MSB are all zero
    bits = min(bits, significand.bit_length() + 2)
    first_bit = significand.test_bit(bits - 1)
    second_bit = significand.low_bits_nonzero(bits - 1)
    return first_bit * 2 + second_bit


def shift_right(significand, bits):
    '''Return the significand shifted right a given number of bits (left if bits is negative),
    and the fraction that is lost doing so.
    '''
    if bits <= 0:
        result = significand << -bits
    else:
        result = significand >> bits

    return result, lost_bits_from_rshift(significand, bits)


def round_up(lost_fraction, is_odd):
    '''Return True if, when an operation is inexact, the result should be rounded up (i.e.,
    away from zero by incrementing the significand).  Rounding is to nearest with ties to
    even; is_odd indicates if the LSB of the new significand is set.
    '''
    if lost_fraction == LF_EXACTLY_HALF:
        return is_odd
    return lost_fraction == LF_MORE_THAN_HALF


def normalize(exponent, significand, precision):
    '''Return an (exponent, significand, is_inexact) triple for the correctly-rounded value of
    the infinitely precise result

           2^exponent * significand

    The returned significand has precisely precision bits and the returned exponent is
    that of its MSB.  significand must be non-zero.
    '''
    size = significand.bit_length()
    assert size

    # Shifting the significand so it has exactly precision bits gives us the natural
    # shift.  The binary point follows the MSB so the exponent must be adjusted to
    # compensate.
    rshift = size - precision
    significand, lost_fraction = shift_right(significand, rshift)
    exponent += rshift + precision - 1

    if round_up(lost_fraction, significand.is_odd()):
        significand += 1
        # If the significand now overflows, halve it and increment the exponent
        if significand.bit_length() > precision:
            significand >>= 1
            exponent += 1

    return exponent, significand, lost_fraction != LF_EXACTLY_ZERO
