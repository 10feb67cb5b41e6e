'''
Built in functions and name resolution.

The registries are read-only and shared by every evaluation. Functions answer
the way C's libm does: domain problems give NaN and overflow gives an infinity,
never an exception.
'''

from collections import namedtuple
from enum import Enum
from functools import wraps
from types import MappingProxyType
import math


def _ieee(f):
    '''
    Turn math's ValueError into NaN and OverflowError into infinity.
    '''
    @wraps(f)
    def wrapped(*args):
        try:
            return float(f(*args))
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf
    return wrapped


def _integral(f):
    '''
    Rounding function that leaves infinities and NaN alone.
    '''
    @wraps(f)
    def wrapped(number):
        if not math.isfinite(number):
            return number
        return float(f(number))
    return wrapped


@_integral
def round_half_away(number):
    '''
    Round to the nearest integer, halfway cases away from zero.
    '''
    magnitude = abs(number)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(whole, number)


@_ieee
def ln(number):
    if number == 0:
        return -math.inf
    return math.log(number)


@_ieee
def log10(number):
    if number == 0:
        return -math.inf
    return math.log10(number)


def power(base, exponent):
    '''
    base to the exponent, as C's pow.
    '''
    odd = exponent.is_integer() and exponent % 2 == 1
    try:
        return math.pow(base, exponent)
    except ValueError:
        if base == 0:
            # Negative power of zero.
            return math.copysign(math.inf, base) if odd else math.inf
        return math.nan
    except OverflowError:
        return -math.inf if base < 0 and odd else math.inf


UNARY = MappingProxyType({
    'sin': _ieee(math.sin),
    'cos': _ieee(math.cos),
    'tan': _ieee(math.tan),
    'asin': _ieee(math.asin),
    'acos': _ieee(math.acos),
    'atan': _ieee(math.atan),
    'sqrt': _ieee(math.sqrt),
    'cbrt': _ieee(math.cbrt),
    'exp': _ieee(math.exp),
    'abs': math.fabs,
    'floor': _integral(math.floor),
    'ceil': _integral(math.ceil),
    'round': round_half_away,
    # Both natural.
    'ln': ln,
    'log': ln,
    'log10': log10,
})

BINARY = MappingProxyType({
    'pow': power,
})


class Binding(Enum):
    UNDEFINED = 'undefined'
    UNARY = 'unary'
    BINARY = 'binary'
    VARIABLE = 'variable'


# target is the function, or the variable's value, or None.
Resolution = namedtuple('Resolution', ['binding', 'target'])


def resolve(name, variables):
    '''
    Look name up: unary functions, then binary functions, then variables.
    '''
    if name in UNARY:
        return Resolution(Binding.UNARY, UNARY[name])
    elif name in BINARY:
        return Resolution(Binding.BINARY, BINARY[name])
    elif name in variables:
        return Resolution(Binding.VARIABLE, variables[name])
    return Resolution(Binding.UNDEFINED, None)
