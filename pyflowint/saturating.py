#!/usr/bin/env python
# -*- coding: utf-8 -*-

import functools

from pyflowint.base import is_bare_int
from pyflowint.flowint import FlowInt


@functools.total_ordering
class Saturating:
    '''
    Fixed-width integer with saturating-overflow arithmetic. Results that leave
    the type's range are clamped to the edge in the direction of overflow.

    Arithmetic stays pinned at the edge until an operation reverses direction,
    and then resumes from the edge value, so intermediate results are lost.
    Division, remainder and shifts have no sensible clamping direction, so
    they are not defined.
    '''

    __slots__ = ('num', 'int_type')

    def __init__(self, num, int_type=None):
        self.int_type = FlowInt.infer(num, int_type)
        self.num = self.int_type.coerce(num)

    @property
    def value(self):
        return self.int_type.scalar(self.num)

    def __repr__(self):
        return f"saturating<{self.int_type.name}>({self.num})"

    def __format__(self, *fmt_args):
        return self.num.__format__(*fmt_args)

    def __int__(self):
        return self.num

    def __hash__(self):
        return hash(self.num)

    def _other_num(self, o):
        if isinstance(o, Saturating):
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

    def _binop(self, op, o):
        if isinstance(o, Saturating) and o.int_type == self.int_type:
            rhs = o.num
        elif is_bare_int(o):
            rhs = self.int_type.coerce(o)
        else:
            return NotImplemented
        return self.__class__(self.int_type.saturating(op, self.num, rhs), self.int_type)

    def __add__(self, o): return self._binop('add', o)
    def __sub__(self, o): return self._binop('sub', o)
    def __mul__(self, o): return self._binop('mul', o)

    def pow(self, exp):
        '''
        Saturating exponentiation. An overflowing negative base with an odd
        exponent clamps to `MIN`, anything else that overflows to `MAX`.
        '''
        return self.__class__(self.int_type.saturating('pow', self.num, exp), self.int_type)

    def __pow__(self, exp, mod=None):
        if mod is not None or not is_bare_int(exp):
            return NotImplemented
        return self.pow(exp)
