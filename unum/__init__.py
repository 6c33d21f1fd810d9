"""
unum - Universal numbers backed by IEEE-754 doubles.

Usage example:

    import unum

    x = unum.DoubleUnum.inexact_value_of(2.0)
    assert x.is_inexact()
    assert unum.DoubleUnum.ZERO < x < unum.DoubleUnum.QNAN

Usage example:

    from unum import doubles

    assert doubles.is_exact(2.0)
    assert 'qNaN' == doubles.to_string(doubles.QNAN)
"""

from . import doubles
from .number import DoubleUnum
from .number import Factory

__all__ = [
    'DoubleUnum',
    'Factory',
    'doubles',
]

from . import version
__version__ = version.__doc__
