#!/usr/bin/env python
# -*- coding: utf-8 -*-

from pyflowint.checked import Checked
from pyflowint.flowint import FlowInt
from pyflowint.overflowing import Overflowing
from pyflowint.saturating import Saturating
from pyflowint.wrapping import Wrapping


class Ensure:
    '''
    Attaches an overflow policy to a plain integer. This is the entry point
    from ordinary numeric code:

        >>> Ensure(np.int8(120)).wrapping() + 10
        wrapping<i8>(-126)
    '''

    def __init__(self, num, int_type=None):
        '''
        :param num: Python int or numpy integer scalar.
        :param int_type: FlowInt, numpy dtype or type name. Inferred from a numpy
        scalar if not passed, else 64-bit signed.
        '''
        self.int_type = FlowInt.infer(num, int_type)
        self.num = self.int_type.coerce(num)

    def checked(self):
        return Checked(self.num, self.int_type)

    def wrapping(self):
        return Wrapping(self.num, self.int_type)

    def saturating(self):
        return Saturating(self.num, self.int_type)

    def overflowing(self):
        return Overflowing(self.num, int_type=self.int_type)


def checked(num, int_type=None):
    return Ensure(num, int_type).checked()


def wrapping(num, int_type=None):
    return Ensure(num, int_type).wrapping()


def saturating(num, int_type=None):
    return Ensure(num, int_type).saturating()


def overflowing(num, int_type=None):
    return Ensure(num, int_type).overflowing()
