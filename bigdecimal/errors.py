#
# Exceptions raised by the arbitrary-precision floating point package
#
# (c) Neil Booth 2007-2021.  All rights reserved.
#

__all__ = ('BigDecimalError', 'ConstructionError', 'InvalidPrecision', 'InvalidRadix',
           'ParseError')


class BigDecimalError(ArithmeticError):
    '''All exceptions raised by this package subclass from this.

    Numerically undefined results (division by zero, operations on NaNs) are never
    raised; they deliver a NaN and set a status flag in the context instead.
    '''


class ConstructionError(BigDecimalError, ValueError):
    '''A value could not be constructed because the caller broke a contract, for example
    by requesting a zero precision or an unsupported radix.'''


class InvalidPrecision(ConstructionError):
    '''Raised when a precision is not an integer of at least 1 bit.'''


class InvalidRadix(ConstructionError):
    '''Raised when a radix is neither 0 nor in the range [2, 62].'''


class ParseError(BigDecimalError, ValueError):
    '''Raised when text cannot be parsed as a number.

    ParseError expects three arguments:

         def __init__(self, text, position, reason):

    text is the string being parsed, position the index of the offending character (the
    length of the text if input ended prematurely), and reason a short description.
    '''

    @property
    def text(self):
        return self.args[0]

    @property
    def position(self):
        return self.args[1]

    @property
    def reason(self):
        return self.args[2]

    def __str__(self):
        return f'{self.reason} at position {self.position} in {self.text!r}'
