#
# Execution contexts: default precision and status flags
#
# (c) Neil Booth 2007-2021.  All rights reserved.
#

import logging
import threading
from enum import IntFlag

from .limbs import check_precision


__all__ = ('Context', 'DefaultContext', 'Flags', 'DEFAULT_PRECISION',
           'get_context', 'set_context', 'local_context')


logger = logging.getLogger(__name__)


# The precision of an IEEE double
DEFAULT_PRECISION = 53


# Operation status flags.
class Flags(IntFlag):
    INVALID     = 0x01
    DIV_BY_ZERO = 0x02
    INEXACT     = 0x10


class Context:
    '''The execution context for operations.  Carries the default precision of values
    constructed without an explicit precision, and the status flags raised by operations.

    Flags are sticky and only ever recorded; undefined results are delivered as NaNs and
    computation continues.
    '''

    __slots__ = ('_precision', 'flags')

    def __init__(self, *, precision=DEFAULT_PRECISION, flags=0):
        '''precision is the default precision in bits.  flags represents the initially
        raised flags.'''
        self.precision = precision
        self.flags = Flags(flags)

    @property
    def precision(self):
        '''The default precision in bits.  Raises InvalidPrecision when set to anything but
        a positive integer.'''
        return self._precision

    @precision.setter
    def precision(self, precision):
        self._precision = check_precision(precision)

    def copy(self):
        '''Return a copy of the context.'''
        return Context(precision=self.precision, flags=self.flags)

    def clear_flags(self):
        self.flags = Flags(0)

    def set_flags(self, flags, op_tuple=None):
        '''Raise the given flags.  op_tuple, if given, is a tuple of the operation name and
        its operands and is only used for diagnostics.'''
        if flags & (Flags.INVALID | Flags.DIV_BY_ZERO) and op_tuple:
            logger.debug('%s delivered NaN (%r)', op_tuple[0], Flags(flags))
        self.flags |= flags

    def __repr__(self):
        return f'<Context precision={self.precision} flags={self.flags!r}>'


#
# Exported functions
#

DefaultContext = Context()
tls = threading.local()


def get_context():
    '''Return the current thread's context, creating it as a copy of DefaultContext if the
    thread has none.'''
    try:
        return tls.context
    except AttributeError:
        tls.context = DefaultContext.copy()
        return tls.context


def set_context(context):
    '''Sets the current thread's context to context (not a copy of it).'''
    if not isinstance(context, Context):
        raise TypeError('context must be a Context instance')
    tls.context = context


class LocalContext:
    '''A context manager that will set the current context for the active thread to a copy of
    context on entry to the with-statement and restore the previous context on exit.  If
    no context is specified a copy of the current context is taken instead.
    '''

    def __init__(self, context=None):
        self.saved_context = None
        self.context_to_set = context

    def __enter__(self):
        self.saved_context = get_context()
        context = (self.context_to_set or self.saved_context).copy()
        set_context(context)
        return context

    def __exit__(self, etype, value, traceback):
        set_context(self.saved_context)


local_context = LocalContext
