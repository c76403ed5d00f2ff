# -*- coding: utf-8 -*-

# Copyright 2006 Joe Wreschnig
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License version 2 as
# published by the Free Software Foundation.

"""Utility classes for id3dump.

You should not rely on the interfaces here being stable. They are
intended for internal use in id3dump only.
"""

import struct


class cdata(object):
    """C character buffer to Python numeric type conversions."""

    from struct import error
    error = error

    @staticmethod
    def ushort_be(data): return struct.unpack('>H', data)[0]

    @staticmethod
    def to_ushort_be(data): return struct.pack('>H', data)

    @staticmethod
    def to_uint_be(data): return struct.pack('>I', data)

    @staticmethod
    def test_bit(value, n): return bool((value >> n) & 1)


def fullread(fileobj, size):
    """Read exactly size bytes from fileobj.

    Raises EOFError if the file ends first, so callers never see a
    partially filled buffer.
    """

    if size < 0:
        raise ValueError("Requested bytes ({}) less than zero".format(size))

    data = fileobj.read(size)
    if len(data) != size:
        raise EOFError("Read: {:d} Requested: {:d}".format(len(data), size))
    return data


def reverse_bytes(data):
    """Return the bytes of data in reverse order."""

    return bytes(reversed(data))
