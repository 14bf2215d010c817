#
# Unsigned multi-precision integers stored as arrays of fixed-width limbs
#
# (c) Neil Booth 2007-2021.  All rights reserved.
#

import attr

from .errors import InvalidPrecision


__all__ = ('Magnitude', 'check_precision', 'LIMB_BITS')


LIMB_BITS = 32
LIMB_BASE = 1 << LIMB_BITS
LIMB_MASK = LIMB_BASE - 1


def check_precision(precision):
    '''Raise InvalidPrecision unless precision is an integer of at least one bit.'''
    if not isinstance(precision, int) or isinstance(precision, bool):
        raise InvalidPrecision(f'precision must be an integer, not {type(precision).__name__}')
    if precision < 1:
        raise InvalidPrecision(f'precision must be at least 1 bit, not {precision:,d}')
    return precision


def _trim(limbs):
    '''Return limbs as a tuple with high zero limbs removed.'''
    limbs = list(limbs)
    while limbs and not limbs[-1]:
        limbs.pop()
    return tuple(limbs)


@attr.s(slots=True, frozen=True, eq=False, repr=False)
class Magnitude:
    '''An immutable unsigned integer of arbitrary size.

    The value is held as a tuple of LIMB_BITS-wide limbs, least significant limb first,
    with no high zero limbs.  Zero is the empty tuple.  Arithmetic operators accept
    another Magnitude or a non-negative Python int and always return a new Magnitude, so
    magnitudes can be freely shared.
    '''

    limbs = attr.ib(converter=_trim)

    @classmethod
    def allocate(cls, precision):
        '''Return a zero magnitude for a significand of the given precision.  Raises
        InvalidPrecision for precisions less than 1.'''
        check_precision(precision)
        return cls.ZERO

    @classmethod
    def from_int(cls, value):
        '''Return the magnitude of a non-negative Python integer.'''
        if not isinstance(value, int):
            raise TypeError('from_int requires an integer')
        if value < 0:
            raise ValueError('magnitudes cannot be negative')
        limbs = []
        while value:
            limbs.append(value & LIMB_MASK)
            value >>= LIMB_BITS
        return cls(limbs)

    @classmethod
    def from_digits(cls, digits, radix):
        '''Return the magnitude whose radix-radix representation is the sequence of digit
        values, most significant first.'''
        # Consume as many digits as fit in a limb with each multiply
        per_limb = 1
        while radix ** (per_limb + 1) < LIMB_BASE:
            per_limb += 1
        limbs = []
        for start in range(0, len(digits), per_limb):
            chunk = digits[start: start + per_limb]
            value = 0
            for digit in chunk:
                value = value * radix + digit
            limbs = _mul_small(limbs, radix ** len(chunk), value)
        return cls(limbs)

    def __int__(self):
        result = 0
        for limb in reversed(self.limbs):
            result = (result << LIMB_BITS) | limb
        return result

    def __repr__(self):
        return f'Magnitude({int(self):#x})'

    def __bool__(self):
        return bool(self.limbs)

    def __hash__(self):
        return hash(self.limbs)

    def bit_length(self):
        '''Return the number of bits needed to represent the magnitude.'''
        if not self.limbs:
            return 0
        return (len(self.limbs) - 1) * LIMB_BITS + self.limbs[-1].bit_length()

    def is_odd(self):
        return bool(self.limbs) and bool(self.limbs[0] & 1)

    def test_bit(self, n):
        '''Return True if bit n (0 is the LSB) is set.'''
        index, bit = divmod(n, LIMB_BITS)
        return index < len(self.limbs) and bool(self.limbs[index] >> bit & 1)

    def low_bits_nonzero(self, n):
        '''Return True if any of the n least significant bits is set.'''
        if n <= 0:
            return False
        index, bit = divmod(n, LIMB_BITS)
        if any(self.limbs[:index]):
            return True
        return index < len(self.limbs) and bool(self.limbs[index] & ((1 << bit) - 1))

    #
    # Ordering
    #

    def _compare(self, other):
        other = _coerce(other)
        if other is None:
            return None
        return _cmp(self.limbs, other.limbs)

    def __eq__(self, other):
        result = self._compare(other)
        return NotImplemented if result is None else result == 0

    def __ne__(self, other):
        result = self._compare(other)
        return NotImplemented if result is None else result != 0

    def __lt__(self, other):
        result = self._compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other):
        result = self._compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other):
        result = self._compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other):
        result = self._compare(other)
        return NotImplemented if result is None else result >= 0

    #
    # Arithmetic
    #

    def __add__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return Magnitude(_add(self.limbs, other.limbs))

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        if _cmp(self.limbs, other.limbs) < 0:
            raise ValueError('magnitude subtraction would be negative')
        return Magnitude(_sub(self.limbs, other.limbs))

    def __rsub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return Magnitude(_mul(self.limbs, other.limbs))

    __rmul__ = __mul__

    def __divmod__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        quotient, remainder = _divmod(self.limbs, other.limbs)
        return Magnitude(quotient), Magnitude(remainder)

    def __rdivmod__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return divmod(other, self)

    def __floordiv__(self, other):
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[0]

    def __mod__(self, other):
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[1]

    def __pow__(self, exponent, modulus=None):
        '''Return the magnitude raised to a non-negative integer power, reduced by modulus if
        one is given.'''
        if not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            raise ValueError('negative powers of magnitudes are not integers')
        if modulus is not None:
            modulus = _coerce(modulus)
            if modulus is None:
                return NotImplemented

        def reduce(limbs):
            return limbs if modulus is None else _divmod(_trim(limbs), modulus.limbs)[1]

        result = reduce((1, ))
        base = reduce(self.limbs)
        while exponent:
            if exponent & 1:
                result = reduce(_mul(result, base))
            exponent >>= 1
            if exponent:
                base = reduce(_mul(base, base))
        return Magnitude(result)

    def __lshift__(self, bits):
        if not isinstance(bits, int):
            return NotImplemented
        if bits < 0:
            return self >> -bits
        if not self.limbs or not bits:
            return self
        return Magnitude(_shift_left(self.limbs, bits))

    def __rshift__(self, bits):
        if not isinstance(bits, int):
            return NotImplemented
        if bits < 0:
            return self << -bits
        if not bits:
            return self
        return Magnitude(_shift_right(self.limbs, bits))


Magnitude.ZERO = Magnitude(())
Magnitude.ONE = Magnitude((1, ))


def _coerce(value):
    '''Return value as a Magnitude, or None if that is not possible.'''
    if isinstance(value, Magnitude):
        return value
    if isinstance(value, int):
        return Magnitude.from_int(value)
    return None


#
# Limb-level primitives.  They take sequences of limbs (least significant first) and
# return lists that may have high zero limbs; Magnitude trims them.
#

def _cmp(lhs, rhs):
    '''Return -1, 0 or 1 comparing two trimmed limb sequences.'''
    if len(lhs) != len(rhs):
        return -1 if len(lhs) < len(rhs) else 1
    for a, b in zip(reversed(lhs), reversed(rhs)):
        if a != b:
            return -1 if a < b else 1
    return 0


def _add(lhs, rhs):
    if len(lhs) < len(rhs):
        lhs, rhs = rhs, lhs
    result = []
    carry = 0
    for n, limb in enumerate(lhs):
        total = limb + carry
        if n < len(rhs):
            total += rhs[n]
        result.append(total & LIMB_MASK)
        carry = total >> LIMB_BITS
    if carry:
        result.append(carry)
    return result


def _sub(lhs, rhs):
    '''Return lhs - rhs.  lhs must not be less than rhs.'''
    result = []
    borrow = 0
    for n, limb in enumerate(lhs):
        diff = limb - borrow
        if n < len(rhs):
            diff -= rhs[n]
        borrow = 1 if diff < 0 else 0
        result.append(diff & LIMB_MASK)
    assert not borrow
    return result


def _mul_small(limbs, multiplier, addend=0):
    '''Return limbs * multiplier + addend where both are less than LIMB_BASE.'''
    result = []
    carry = addend
    for limb in limbs:
        product = limb * multiplier + carry
        result.append(product & LIMB_MASK)
        carry = product >> LIMB_BITS
    if carry:
        result.append(carry)
    return result


def _mul(lhs, rhs):
    '''Schoolbook multiplication; the result has len(lhs) + len(rhs) limbs.'''
    if not lhs or not rhs:
        return []
    if len(lhs) < len(rhs):
        lhs, rhs = rhs, lhs
    result = [0] * (len(lhs) + len(rhs))
    for j, multiplier in enumerate(rhs):
        if not multiplier:
            continue
        carry = 0
        for i, limb in enumerate(lhs):
            product = result[i + j] + limb * multiplier + carry
            result[i + j] = product & LIMB_MASK
            carry = product >> LIMB_BITS
        result[j + len(lhs)] = carry
    return result


def _shift_left(limbs, bits):
    limb_shift, bit_shift = divmod(bits, LIMB_BITS)
    result = [0] * limb_shift
    if bit_shift:
        carry = 0
        for limb in limbs:
            result.append(((limb << bit_shift) & LIMB_MASK) | carry)
            carry = limb >> (LIMB_BITS - bit_shift)
        result.append(carry)
    else:
        result.extend(limbs)
    return result


def _shift_right(limbs, bits):
    limb_shift, bit_shift = divmod(bits, LIMB_BITS)
    limbs = limbs[limb_shift:]
    if not bit_shift:
        return list(limbs)
    result = []
    for n, limb in enumerate(limbs):
        high = limbs[n + 1] if n + 1 < len(limbs) else 0
        result.append((limb >> bit_shift) | ((high << (LIMB_BITS - bit_shift)) & LIMB_MASK))
    return result


def _divmod_small(limbs, divisor):
    '''Divide by a single non-zero limb.  Returns (quotient, remainder) limb lists.'''
    quotient = [0] * len(limbs)
    remainder = 0
    for n in range(len(limbs) - 1, -1, -1):
        remainder = (remainder << LIMB_BITS) | limbs[n]
        quotient[n], remainder = divmod(remainder, divisor)
    return quotient, [remainder]


def _divmod(lhs, rhs):
    '''Return (quotient, remainder) limb lists of trimmed sequences lhs and rhs.

    This is algorithm D of Knuth, TAOCP volume 2, section 4.3.1.
    '''
    if not rhs:
        raise ZeroDivisionError('magnitude division by zero')
    if _cmp(lhs, rhs) < 0:
        return [], list(lhs)
    if len(rhs) == 1:
        return _divmod_small(lhs, rhs[0])

    n = len(rhs)
    m = len(lhs) - n

    # Normalize so the divisor's top limb has its MSB set.  This guarantees the trial
    # quotient digit is at most two too large.
    shift = LIMB_BITS - rhs[-1].bit_length()
    v = _shift_left(rhs, shift)[:n]
    u = _shift_left(lhs, shift)
    u.extend([0] * (m + n + 1 - len(u)))
    del u[m + n + 1:]
    v_top, v_next = v[-1], v[-2]

    quotient = [0] * (m + 1)
    for j in range(m, -1, -1):
        qhat, rhat = divmod((u[j + n] << LIMB_BITS) | u[j + n - 1], v_top)
        while qhat >= LIMB_BASE or qhat * v_next > ((rhat << LIMB_BITS) | u[j + n - 2]):
            qhat -= 1
            rhat += v_top
            if rhat >= LIMB_BASE:
                break

        # Multiply and subtract
        borrow = carry = 0
        for i in range(n):
            product = qhat * v[i] + carry
            carry = product >> LIMB_BITS
            diff = u[i + j] - (product & LIMB_MASK) - borrow
            u[i + j] = diff & LIMB_MASK
            borrow = 1 if diff < 0 else 0
        diff = u[j + n] - carry - borrow
        u[j + n] = diff & LIMB_MASK

        # The trial digit was one too large; add back
        if diff < 0:
            qhat -= 1
            carry = 0
            for i in range(n):
                total = u[i + j] + v[i] + carry
                u[i + j] = total & LIMB_MASK
                carry = total >> LIMB_BITS
            u[j + n] = (u[j + n] + carry) & LIMB_MASK

        quotient[j] = qhat

    return quotient, _shift_right(u[:n], shift)
