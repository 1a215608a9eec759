#!/usr/bin/env python
# -*- coding: utf-8 -*-

import functools
import logging

from pyflowint.base import is_bare_int, pow_exponent, shift_amount
from pyflowint.flowint import FlowInt


@functools.total_ordering
class Checked:
    '''
    Fixed-width integer with checked-overflow arithmetic. Once an operation
    overflows, the value is erased (absent) and stays absent through all
    further arithmetic, until it is explicitly reset to a fresh integer.

    Besides the arithmetic operators, this type has an option-like API for
    inspecting and resetting the possibly-missing integer. Accessors hand back
    the bare integer as a numpy scalar of the integer type; callbacks receive
    plain Python integers.
    '''

    __slots__ = ('num', 'int_type')

    def __init__(self, num, int_type=None):
        '''
        :param num: Integer value, or None for an absent (overflowed) value.
        :param int_type: FlowInt, numpy dtype or type name. Inferred from a numpy
        scalar if not passed, else 64-bit signed.
        '''
        self.int_type = FlowInt.infer(num, int_type)
        self.num = None if num is None else self.int_type.coerce(num)

    @property
    def value(self):
        if self.num is None:
            return None
        return self.int_type.scalar(self.num)

    def __repr__(self):
        return f"checked<{self.int_type.name}>({self.num})"

    def __format__(self, *fmt_args):
        '''
        Use the underlying Python int()'s formatting. An absent value has no
        integer to format, and always renders as 'None'.
        '''
        if self.num is None:
            return 'None'
        return self.num.__format__(*fmt_args)

    def __int__(self):
        return int(self.unwrap())

    def __hash__(self):
        return hash(self.num)

    def __iter__(self):
        if self.num is not None:
            yield self.int_type.scalar(self.num)

    def iter(self):
        return iter(self)

    def _copy(self):
        return self.__class__(self.num, self.int_type)

    def _absent(self, int_type=None):
        return self.__class__(None, self.int_type if int_type is None else int_type)

    def _lift(self, o):
        '''
        Interpret a Checked, a bare integer or None as a new Checked of this
        integer type.
        '''
        if isinstance(o, Checked):
            if o.int_type != self.int_type:
                raise TypeError(f"Expected a Checked {self.int_type.name}, not {o!r}")
            return o._copy()
        if o is None:
            return self._absent()
        if is_bare_int(o):
            return self.__class__(self.int_type.coerce(o), self.int_type)
        raise TypeError(f"Expected an integer, None or Checked, not {type(o).__name__}")

    def _other_num(self, o):
        if isinstance(o, Checked):
            if o.int_type != self.int_type:
                return NotImplemented
            return o.num
        if o is None:
            return None
        if is_bare_int(o):
            return int(o)
        return NotImplemented

    @staticmethod
    def _key(num):
        # absent orders before every present value
        return (0, 0) if num is None else (1, num)

    '''
    Comparison dunders cannot overflow, so compare the underlying Python int()
    values directly, against another Checked, a bare integer or None.
    '''
    def __eq__(self, o):
        num = self._other_num(o)
        if num is NotImplemented:
            return NotImplemented
        return self.num == num

    def __lt__(self, o):
        num = self._other_num(o)
        if num is NotImplemented:
            return NotImplemented
        return self._key(self.num) < self._key(num)

    def is_present(self):
        return self.num is not None

    def is_absent(self):
        return self.num is None

    def expect(self, msg):
        '''
        Unwrap the bare integer, raising OverflowError with `msg` if absent.
        '''
        if self.num is None:
            raise OverflowError(msg)
        return self.int_type.scalar(self.num)

    def unwrap(self):
        return self.expect(f"Checked {self.int_type.name} value is absent, it overflowed")

    def unwrap_or(self, default):
        if self.num is None:
            return self.int_type.scalar(self.int_type.coerce(default))
        return self.int_type.scalar(self.num)

    def unwrap_or_else(self, func):
        if self.num is None:
            return self.int_type.scalar(self.int_type.coerce(func()))
        return self.int_type.scalar(self.num)

    def map(self, func, int_type=None):
        '''
        Transform the integer, if present, into an integer of `int_type`
        (defaults to this value's type).
        '''
        int_type = self.int_type if int_type is None else FlowInt.of(int_type)
        if self.num is None:
            return self._absent(int_type)
        return self.__class__(func(self.num), int_type)

    def map_or(self, default, func, int_type=None):
        '''
        Transform the integer, substituting `default` if absent. The result is
        always present.
        '''
        int_type = self.int_type if int_type is None else FlowInt.of(int_type)
        if self.num is None:
            return self.__class__(default, int_type)
        return self.__class__(func(self.num), int_type)

    def map_or_else(self, default, func, int_type=None):
        int_type = self.int_type if int_type is None else FlowInt.of(int_type)
        if self.num is None:
            return self.__class__(default(), int_type)
        return self.__class__(func(self.num), int_type)

    def ok_or(self, err):
        '''
        Return the bare integer, or raise `err` if absent.
        '''
        if self.num is None:
            raise err
        return self.int_type.scalar(self.num)

    def ok_or_else(self, func):
        if self.num is None:
            raise func()
        return self.int_type.scalar(self.num)

    def and_(self, other):
        '''
        A copy of `other` if this integer is present, otherwise absent. Unlike
        the other combinators, `other` may be of a different integer type.
        '''
        if isinstance(other, Checked):
            other = other._copy()
        elif is_bare_int(other):
            other = self.__class__(other, FlowInt.infer(other, None) if not isinstance(other, int) else self.int_type)
        else:
            other = self._lift(other)
        if self.num is None:
            return self._absent(other.int_type)
        return other

    def and_then(self, func, int_type=None):
        '''
        Pass the integer, if present, into a fallible computation. `func` may
        return an integer, None or a Checked.
        '''
        int_type = self.int_type if int_type is None else FlowInt.of(int_type)
        if self.num is None:
            return self._absent(int_type)
        result = func(self.num)
        if isinstance(result, Checked):
            return result._copy()
        return self.__class__(result, int_type)

    def filter(self, pred):
        if self.num is not None and pred(self.num):
            return self._copy()
        return self._absent()

    def or_(self, other):
        if self.num is not None:
            return self._copy()
        return self._lift(other)

    def or_else(self, func):
        if self.num is not None:
            return self._copy()
        return self._lift(func())

    def or_insert(self, num):
        if self.num is not None:
            return self._copy()
        return self.__class__(num, self.int_type)

    def or_insert_with(self, func):
        if self.num is not None:
            return self._copy()
        return self.__class__(func(), self.int_type)

    def xor(self, other):
        other = self._lift(other)
        if self.num is not None and other.num is None:
            return self._copy()
        if self.num is None and other.num is not None:
            return other
        return self._absent()

    '''
    Mutating helpers. These reset this object in place, the only way an absent
    value becomes present again. The hash follows the integer, so do not call
    them on a Checked that sits in a set or is used as a dict key.
    '''
    def get_or_insert(self, num):
        if self.num is None:
            self.num = self.int_type.coerce(num)
        return self.int_type.scalar(self.num)

    def get_or_insert_with(self, func):
        if self.num is None:
            self.num = self.int_type.coerce(func())
        return self.int_type.scalar(self.num)

    def take(self):
        return self.__class__(self.take_value(), self.int_type)

    def take_value(self):
        num, self.num = self.num, None
        return num

    def replace(self, num):
        return self.__class__(self.replace_value(num), self.int_type)

    def replace_value(self, num):
        old_num, self.num = self.num, self.int_type.coerce(num)
        return old_num

    def _result(self, op, num, *args):
        if num is None and self.num is not None:
            logging.debug(f"Checked {self.int_type.name} {op} of {self.num} with {args} overflowed.")
        return self.__class__(num, self.int_type)

    def _unop(self, op):
        if self.num is None:
            return self._absent()
        return self._result(op, self.int_type.checked(op, self.num))

    def _binop(self, op, o):
        if isinstance(o, Checked):
            if o.int_type != self.int_type:
                return NotImplemented
            rhs = o.num
        elif is_bare_int(o):
            rhs = self.int_type.coerce(o)
        else:
            return NotImplemented
        if self.num is None or rhs is None:
            return self._absent()
        return self._result(op, self.int_type.checked(op, self.num, rhs), rhs)

    def _shift(self, op, o):
        # the shift amount may be a Checked over any integer type
        if isinstance(o, Checked):
            amt = o.num
        elif is_bare_int(o):
            amt = int(o)
        else:
            return NotImplemented
        if self.num is None or amt is None:
            return self._absent()
        count = shift_amount(amt)
        if count is None:
            return self._result(op, None, amt)
        return self._result(op, self.int_type.checked(op, self.num, count), count)

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
        Checked Euclidean division. Absent if `rhs` is zero or the division
        overflows.
        '''
        return self._binop('div_euclid', rhs)

    def rem_euclid(self, rhs):
        '''
        Checked Euclidean remainder. Absent if `rhs` is zero or the division
        overflows.
        '''
        return self._binop('rem_euclid', rhs)

    def __neg__(self):
        if not self.int_type.is_signed:
            raise TypeError(f"bad operand type for unary -: unsigned {self!r}")
        return self._unop('neg')

    def abs(self):
        '''
        Checked absolute value, absent for the signed minimum.
        '''
        if not self.int_type.is_signed:
            raise TypeError(f"bad operand type for abs(): unsigned {self!r}")
        return self._unop('abs')

    def __abs__(self):
        return self.abs()

    def pow(self, exp):
        exp = pow_exponent(exp)
        if self.num is None:
            return self._absent()
        return self._result('pow', self.int_type.checked('pow', self.num, exp), exp)

    def __pow__(self, exp, mod=None):
        if mod is not None or not is_bare_int(exp):
            return NotImplemented
        return self.pow(exp)
