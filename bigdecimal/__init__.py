#
# Arbitrary-precision binary floating point arithmetic
#
# (c) Neil Booth 2007-2021.  All rights reserved.
#

from .bigdecimal import *
from .context import *
from .errors import *
from .radix import TextFormat, DefaultDecFormat, Dec_g_Format


__all__ = (bigdecimal.__all__ + context.__all__ + errors.__all__
           + ('TextFormat', 'DefaultDecFormat', 'Dec_g_Format'))

_version_str = '0.1.0'
