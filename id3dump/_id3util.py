# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#               2013  Christoph Reiter
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.

from warnings import warn

from id3dump._util import reverse_bytes


class error(Exception):
    pass


class ID3NoHeaderError(error, ValueError):
    pass


class ID3UnsupportedVersionError(error, NotImplementedError):
    pass


class ID3UnsupportedEncodingError(error, NotImplementedError):
    pass


class ID3BadTextError(error, ValueError):
    pass


class ID3Warning(error, UserWarning):
    pass


def is_valid_frame_id(frame_id):
    """Whether frame_id only holds the characters A-Z and 0-9.

    Accepts str or bytes; an empty ID is not valid.
    """

    if isinstance(frame_id, (bytes, bytearray)):
        frame_id = frame_id.decode('latin1')
    if not frame_id:
        return False
    return all(('A' <= c <= 'Z') or ('0' <= c <= '9') for c in frame_id)


class BitPaddedInt(int):
    def __new__(cls, value, bits=7, bigendian=True):
        "Strips 8-bits bits out of every byte"
        mask = (1 << (bits)) - 1
        if isinstance(value, int):
            reformed_bytes = []
            while value:
                reformed_bytes.append(value & mask)
                value = value >> 8
        elif isinstance(value, (bytes, bytearray)):
            reformed_bytes = [b & mask for b in value]
            if bigendian:
                reformed_bytes.reverse()
        else:
            raise TypeError

        numeric_value = 0
        for shift, byte in zip(range(0, len(reformed_bytes) * bits, bits),
                               reformed_bytes):
            numeric_value += byte << shift

        self = int.__new__(BitPaddedInt, numeric_value)
        self.bits = bits
        self.bigendian = bigendian
        return self

    @staticmethod
    def to_bytes(value, bits=7, bigendian=True, width=4):
        bits = getattr(value, 'bits', bits)
        bigendian = getattr(value, 'bigendian', bigendian)
        value = int(value)
        if value < 0:
            raise ValueError("Negative values can't be encoded")
        mask = (1 << bits) - 1

        index = 0
        bytes_ = bytearray(width)
        try:
            while value:
                bytes_[index] = value & mask
                value >>= bits
                index += 1
        except IndexError:
            raise ValueError('Value too wide (>%d bytes)' % width)

        if bigendian:
            return reverse_bytes(bytes_)
        return bytes(bytes_)

    def as_bytes(self, bits=7, bigendian=True, width=4):
        return BitPaddedInt.to_bytes(self, bits, bigendian, width)

    @staticmethod
    def has_valid_padding(value, bits=7):
        """Whether the padding bits are all zero"""

        assert bits <= 8

        mask = (((1 << (8 - bits)) - 1) << bits)

        if isinstance(value, int):
            while value:
                if value & mask:
                    return False
                value >>= 8
        elif isinstance(value, (bytes, bytearray)):
            for byte in value:
                if byte & mask:
                    return False
        else:
            raise TypeError

        return True


def synchsafe_to_int(data):
    """Decode a big-endian synchsafe integer (7 bits used per byte).

    A byte with its top bit set is not synchsafe; real files carry them,
    so the bit is dropped with an ID3Warning instead of failing.
    """

    if not BitPaddedInt.has_valid_padding(data):
        warn("synchsafe integer {!r} has its high bit set".format(
             bytes(data)), ID3Warning)
    return int(BitPaddedInt(data))


def int_to_synchsafe(value, width=4):
    """Encode value as a synchsafe integer, left padded to width bytes."""

    return BitPaddedInt.to_bytes(value, width=width)


def bytes_to_int(data):
    """Decode a plain big-endian unsigned integer of any width."""

    return int(BitPaddedInt(data, bits=8))
