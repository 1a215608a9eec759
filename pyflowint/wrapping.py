#!/usr/bin/env python
# -*- coding: utf-8 -*-

import functools

from pyflowint.base import is_bare_int, shift_amount
from pyflowint.flowint import FlowInt


@functools.total_ordering
class Wrapping:
    '''
    Fixed-width integer with wrapping-overflow arithmetic. Output bits that do
    not fit in the type are discarded, so arithmetic always succeeds. Useful
    for ring arithmetic, but not where boundary conditions must be observed.
    '''

    __slots__ = ('num', 'int_type')

    def __init__(self, num, int_type=None):
        self.int_type = FlowInt.infer(num, int_type)
        self.num = self.int_type.coerce(num)

    @property
    def value(self):
        return self.int_type.scalar(self.num)

    def __repr__(self):
        return f"wrapping<{self.int_type.name}>({self.num})"

    def __format__(self, *fmt_args):
        '''
        Just use the underlying Python int()'s formatting.
        '''
        return self.num.__format__(*fmt_args)

    def __int__(self):
        return self.num

    def __hash__(self):
        return hash(self.num)

    def _other_num(self, o):
        if isinstance(o, Wrapping):
            return o.num if o.int_type == self.int_type else None
        if is_bare_int(o):
            return int(o)
        return None

    def __eq__(self, o):
        num = self._other_num(o)
        return NotImplemented if num is None else self.num == num

    def __lt__(self, o):
        num = self._other_num(o)
        return NotImplemented if num is None else self.num < num

    def _apply(self, op, *args):
        return self.__class__(self.int_type.wrapping(op, self.num, *args), self.int_type)

    def _binop(self, op, o):
        if isinstance(o, Wrapping) and o.int_type == self.int_type:
            return self._apply(op, o.num)
        if is_bare_int(o):
            return self._apply(op, self.int_type.coerce(o))
        return NotImplemented

    def _shift(self, op, o):
        if isinstance(o, Wrapping):
            amt = o.num
        elif is_bare_int(o):
            amt = int(o)
        else:
            return NotImplemented
        count = shift_amount(amt)
        if count is None:
            raise ValueError(f"Could not convert the shift amount {amt} to u32")
        return self._apply(op, count)

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
        Wrapping Euclidean division. Wrapping only occurs for `MIN / -1` on a
        signed type, which gives `MIN` itself. Raises ZeroDivisionError if
        `rhs` is zero.
        '''
        return self._binop('div_euclid', rhs)

    def rem_euclid(self, rhs):
        '''
        Wrapping Euclidean remainder. `MIN % -1` on a signed type gives 0.
        Raises ZeroDivisionError if `rhs` is zero.
        '''
        return self._binop('rem_euclid', rhs)

    def __neg__(self):
        if not self.int_type.is_signed:
            raise TypeError(f"bad operand type for unary -: unsigned {self!r}")
        return self._apply('neg')

    def abs(self):
        '''
        Wrapping absolute value. The signed minimum has no positive
        counterpart, so it stays `MIN`.
        '''
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
