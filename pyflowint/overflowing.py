#!/usr/bin/env python
# -*- coding: utf-8 -*-

import functools
import logging

from pyflowint.base import is_bare_int, shift_amount
from pyflowint.flowint import FlowInt


@functools.total_ordering
class Overflowing:
    '''
    Fixed-width integer with overflow-detecting arithmetic. The value wraps
    like `Wrapping`, but an overflow also sets the `has_overflowed` flag, which
    then stays set through all further arithmetic until explicitly cleared.
    Computation never halts, callers choose whether to look at the flag.
    '''

    __slots__ = ('num', 'has_overflowed', 'int_type')

    def __init__(self, num, has_overflowed=False, int_type=None):
        '''
        :param num: Integer value.
        :param has_overflowed: Initial state of the sticky overflow flag.
        :param int_type: FlowInt, numpy dtype or type name. Inferred from a numpy
        scalar if not passed, else 64-bit signed.
        '''
        self.int_type = FlowInt.infer(num, int_type)
        self.num = self.int_type.coerce(num)
        self.has_overflowed = bool(has_overflowed)

    @property
    def value(self):
        return self.int_type.scalar(self.num)

    def __repr__(self):
        return f"overflowing<{self.int_type.name}>({self.num}, has_overflowed={self.has_overflowed})"

    def __format__(self, *fmt_args):
        return self.num.__format__(*fmt_args)

    def __int__(self):
        return self.num

    def __hash__(self):
        return hash(self.num)

    def _other_key(self, o):
        '''
        Comparison key for the other operand, and ours to match it. Against a
        bare integer only the values are compared.
        '''
        if isinstance(o, Overflowing) and o.int_type == self.int_type:
            return (self.num, self.has_overflowed), (o.num, o.has_overflowed)
        if is_bare_int(o):
            return self.num, int(o)
        return None

    def __eq__(self, o):
        keys = self._other_key(o)
        if keys is None:
            return NotImplemented
        return keys[0] == keys[1]

    def __lt__(self, o):
        keys = self._other_key(o)
        if keys is None:
            return NotImplemented
        return keys[0] < keys[1]

    def clear(self):
        '''
        The same value, with the overflow flag reset.
        '''
        return self.__class__(self.num, False, self.int_type)

    def _apply(self, op, *args, rhs_overflowed=False):
        num, has_overflowed = self.int_type.overflowing(op, self.num, *args)
        if has_overflowed:
            logging.debug(f"Overflowing {self.int_type.name} {op} of {self.num} with {args} overflowed, wrapped to {num}.")
        return self.__class__(num, self.has_overflowed or rhs_overflowed or has_overflowed, self.int_type)

    def _binop(self, op, o):
        if isinstance(o, Overflowing) and o.int_type == self.int_type:
            return self._apply(op, o.num, rhs_overflowed=o.has_overflowed)
        if is_bare_int(o):
            return self._apply(op, self.int_type.coerce(o))
        return NotImplemented

    def _shift(self, op, o):
        # an Overflowing shift amount of any integer type also passes on its flag
        if isinstance(o, Overflowing):
            amt, rhs_overflowed = o.num, o.has_overflowed
        elif is_bare_int(o):
            amt, rhs_overflowed = int(o), False
        else:
            return NotImplemented
        count = shift_amount(amt)
        if count is None:
            raise ValueError(f"Could not convert the shift amount {amt} to u32")
        return self._apply(op, count, rhs_overflowed=rhs_overflowed)

    def __add__(self, o): return self._binop('add', o)
    def __sub__(self, o): return self._binop('sub', o)
    def __mul__(self, o): return self._binop('mul', o)
    def __truediv__(self, o): return self._binop('div', o)
    def __floordiv__(self, o): return self._binop('div', o)
    def __mod__(self, o): return self._binop('rem', o)
    def __lshift__(self, o): return self._shift('shl', o)
    def __rshift__(self, o): return self._shift('shr', o)

    def div_euclid(self, rhs):
        '''
        Euclidean quotient. `MIN / -1` on a signed type sets the flag and wraps
        to `MIN`. Raises ZeroDivisionError if `rhs` is zero.
        '''
        return self._binop('div_euclid', rhs)

    def rem_euclid(self, rhs):
        '''
        Euclidean remainder. `MIN % -1` on a signed type sets the flag and gives
        0. Raises ZeroDivisionError if `rhs` is zero.
        '''
        return self._binop('rem_euclid', rhs)

    def __neg__(self):
        if not self.int_type.is_signed:
            raise TypeError(f"bad operand type for unary -: unsigned {self!r}")
        return self._apply('neg')

    def abs(self):
        if not self.int_type.is_signed:
            raise TypeError(f"bad operand type for abs(): unsigned {self!r}")
        return self._apply('abs')

    def __abs__(self):
        return self.abs()

    def pow(self, exp):
        return self._apply('pow', exp)

    def __pow__(self, exp, mod=None):
        if mod is not None or not is_bare_int(exp):
            return NotImplemented
        return self.pow(exp)
