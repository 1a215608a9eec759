#!/usr/bin/env python
# -*- coding: utf-8 -*-

import numpy as np

from pyflowint.base import (
    euclid_div,
    euclid_rem,
    pow_exponent,
    trunc_div,
    trunc_rem,
)


class FlowInt:
    '''
    Fixed-width signed or unsigned integer type, describing how integers
    explicitly under- or over-flow according to a particular number of bits.
    Every overflow policy wrapper carries one of these, and defers to its
    primitive operations.

    The primitives take and return plain Python integers. The `overflowing_*`
    family is the base of all the others: it returns the wrapped result and
    whether the true result was out-of-range.
    '''

    def __init__(self, name, is_signed=False, num_bits=8, dtype=None):
        '''
        Initialize the type with a name, a signedness and a bit size.
        :param name: Short name, like 'i8' or 'usize'.
        :param is_signed: Is this a signed integer type, or an unsigned one with
        twice the range only on the positive side? Defaults to False for a
        traditional unsigned byte.
        :param num_bits: Number of bits for this type. Must be a power of two.
        Defaults to 8 for a traditional unsigned byte.
        :param dtype: Matching numpy scalar type, if numpy has one.
        '''
        assert num_bits > 0 and (num_bits & (num_bits - 1)) == 0, f"Bit width {num_bits} is not a power of two"
        self.name = name
        self.is_signed = is_signed
        self.num_bits = num_bits
        self.dtype = dtype

        self.two_pow = 2 ** num_bits
        if dtype is not None:
            info = np.iinfo(dtype)
            assert info.bits == num_bits, f"{dtype} is not {num_bits:,d} bits"
            self.min_value, self.max_value = int(info.min), int(info.max)
        elif self.is_signed:
            self.min_value, self.max_value = -self.two_pow // 2, (self.two_pow // 2) - 1
        else:
            self.min_value, self.max_value = 0, self.two_pow - 1
        self.mask = self.two_pow - 1  # 0xFFF... or 0b111...

    def __repr__(self):
        return self.name

    @classmethod
    def of(cls, int_type):
        '''
        Look up an integer type from a FlowInt, a name like 'i8', or anything
        numpy accepts as an integer dtype.
        '''
        if isinstance(int_type, FlowInt):
            return int_type
        if isinstance(int_type, str) and int_type in TYPES:
            return TYPES[int_type]
        dtype = np.dtype(int_type)
        if dtype.kind not in 'iu':
            raise TypeError(f"{dtype} is not a fixed-width integer dtype")
        return _BY_DTYPE[(dtype.kind, dtype.itemsize)]

    @classmethod
    def infer(cls, num, int_type=None):
        '''
        Pick the integer type for a new value: the explicit one if passed,
        else the dtype of a numpy integer scalar, else 64-bit signed.
        '''
        if int_type is not None:
            return cls.of(int_type)
        if isinstance(num, np.integer):
            return cls.of(num.dtype)
        return I64

    def fits(self, num):
        return self.min_value <= num <= self.max_value

    def coerce(self, num):
        '''
        Convert to a Python integer that must already be in range.
        '''
        int_num = int(num)
        assert self.fits(int_num), f"Value {int_num} out-of-range for {self.name}"
        return int_num

    def scalar(self, num):
        '''
        The bare fixed-width integer, as a numpy scalar. numpy has no 128-bit
        integers, so those stay Python integers.
        '''
        if self.dtype is None:
            return num
        return self.dtype(num)

    def wrap(self, num):
        '''
        Two's-complement reduction of an arbitrary integer into this type.
        '''
        num &= self.mask
        if self.is_signed and num > self.max_value:
            num -= self.two_pow
        return num

    def saturate(self, num):
        return max(self.min_value, min(self.max_value, num))

    def _flow(self, num):
        return self.wrap(num), not self.fits(num)

    def _is_min_by_neg_one(self, a, b):
        return self.is_signed and a == self.min_value and b == -1

    '''
    Overflowing primitives. Each returns a (wrapped result, overflowed) pair.
    Division and remainder raise ZeroDivisionError on a zero divisor.
    '''
    def overflowing_add(self, a, b): return self._flow(a + b)
    def overflowing_sub(self, a, b): return self._flow(a - b)
    def overflowing_mul(self, a, b): return self._flow(a * b)
    def overflowing_div(self, a, b): return self._flow(trunc_div(a, b))
    def overflowing_div_euclid(self, a, b): return self._flow(euclid_div(a, b))
    def overflowing_neg(self, a): return self._flow(-a)
    def overflowing_abs(self, a): return self._flow(abs(a))

    def overflowing_rem(self, a, b):
        num = trunc_rem(a, b)
        # MIN % -1 is zero, but MIN / -1 is not representable
        return num, self._is_min_by_neg_one(a, b)

    def overflowing_rem_euclid(self, a, b):
        num = euclid_rem(a, b)
        return num, self._is_min_by_neg_one(a, b)

    def overflowing_pow(self, a, exp):
        exp = pow_exponent(exp)
        if abs(a) <= 1 or exp <= self.num_bits:
            return self._flow(a ** exp)
        # |a| >= 2 raised past the bit width can never fit
        return self.wrap(pow(a, exp, self.two_pow)), True

    def overflowing_shl(self, a, amt):
        return self.wrap(a << (amt & (self.num_bits - 1))), amt >= self.num_bits

    def overflowing_shr(self, a, amt):
        return a >> (amt & (self.num_bits - 1)), amt >= self.num_bits

    '''
    Saturating primitives, only defined where clamping has a direction.
    '''
    def saturating_add(self, a, b): return self.saturate(a + b)
    def saturating_sub(self, a, b): return self.saturate(a - b)
    def saturating_mul(self, a, b): return self.saturate(a * b)

    def saturating_pow(self, a, exp):
        exp = pow_exponent(exp)
        num, has_overflowed = self.overflowing_pow(a, exp)
        if not has_overflowed:
            return num
        return self.min_value if a < 0 and exp % 2 == 1 else self.max_value

    def overflowing(self, op, *args):
        return getattr(self, f"overflowing_{op}")(*args)

    def wrapping(self, op, *args):
        return self.overflowing(op, *args)[0]

    def saturating(self, op, *args):
        return getattr(self, f"saturating_{op}")(*args)

    def checked(self, op, *args):
        '''
        Result of the operation, or None if it overflowed. A zero divisor is
        an overflow here, not an error.
        '''
        try:
            num, has_overflowed = self.overflowing(op, *args)
        except ZeroDivisionError:
            return None
        return None if has_overflowed else num


I8 = FlowInt('i8', is_signed=True, num_bits=8, dtype=np.int8)
I16 = FlowInt('i16', is_signed=True, num_bits=16, dtype=np.int16)
I32 = FlowInt('i32', is_signed=True, num_bits=32, dtype=np.int32)
I64 = FlowInt('i64', is_signed=True, num_bits=64, dtype=np.int64)
I128 = FlowInt('i128', is_signed=True, num_bits=128)
ISIZE = FlowInt('isize', is_signed=True, num_bits=np.dtype(np.intp).itemsize * 8, dtype=np.intp)

U8 = FlowInt('u8', is_signed=False, num_bits=8, dtype=np.uint8)
U16 = FlowInt('u16', is_signed=False, num_bits=16, dtype=np.uint16)
U32 = FlowInt('u32', is_signed=False, num_bits=32, dtype=np.uint32)
U64 = FlowInt('u64', is_signed=False, num_bits=64, dtype=np.uint64)
U128 = FlowInt('u128', is_signed=False, num_bits=128)
USIZE = FlowInt('usize', is_signed=False, num_bits=np.dtype(np.uintp).itemsize * 8, dtype=np.uintp)

TYPES = {t.name: t for t in (I8, I16, I32, I64, I128, ISIZE, U8, U16, U32, U64, U128, USIZE)}

# pointer-width types share a dtype with a fixed-width one, which wins
_BY_DTYPE = {(np.dtype(t.dtype).kind, np.dtype(t.dtype).itemsize): t for t in (I8, I16, I32, I64, U8, U16, U32, U64)}
