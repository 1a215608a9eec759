#!/usr/bin/env python
# -*- coding: utf-8 -*-

import numpy as np

'''
Stateless functions that are used throughout the fixed-width integer type
and the overflow policy wrappers.
'''

U32_MAX = (2 ** 32) - 1


def is_bare_int(o):
    '''
    Is this a plain Python integer, or a numpy integer scalar? Booleans are not
    treated as integers here, even though Python's bool sub-classes int.
    '''
    return isinstance(o, (int, np.integer)) and not isinstance(o, bool)


def trunc_div(a, b):
    '''
    Integer quotient rounded toward zero, the way fixed-width machine division
    works. Python's `//` floors instead, which disagrees for negative operands.
    Raises ZeroDivisionError if `b` is zero.
    '''
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def trunc_rem(a, b):
    '''
    Remainder of truncating division, which takes the sign of the dividend.
    '''
    return a - (b * trunc_div(a, b))


def euclid_rem(a, b):
    '''
    Euclidean remainder, always non-negative.
    '''
    return a % abs(b)


def euclid_div(a, b):
    '''
    Euclidean quotient, the `q` for which `a == b * q + euclid_rem(a, b)`.
    '''
    return (a - euclid_rem(a, b)) // b


def shift_amount(amt):
    '''
    Convert a shift amount of any integer type into the unsigned 32-bit shift
    count. Returns None if the amount does not fit.
    '''
    amt = int(amt)
    if 0 <= amt <= U32_MAX:
        return amt
    return None


def pow_exponent(exp):
    '''
    Validate an exponent, which must be a non-negative integer that fits in an
    unsigned 32-bit count.
    '''
    if not is_bare_int(exp):
        raise TypeError(f"Exponent must be an integer, not {type(exp).__name__}")
    exp = int(exp)
    if not 0 <= exp <= U32_MAX:
        raise ValueError(f"Exponent {exp} does not fit in u32")
    return exp
