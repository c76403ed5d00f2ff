# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.

"""ID3v2 reading.

This is based off of the following references:

* http://id3.org/id3v2.4.0-structure
* http://id3.org/id3v2.3.0
* http://id3.org/id3v2-00

Only tags at the very start of a file are read. Frame bodies are kept
as raw bytes; text and URL frames are decoded when the tag is
rendered.
"""

import struct

from warnings import warn

import id3dump
from id3dump._util import cdata, fullread
from id3dump._id3util import (
    error, ID3NoHeaderError, ID3UnsupportedVersionError,
    ID3UnsupportedEncodingError, ID3BadTextError, ID3Warning,
    BitPaddedInt, synchsafe_to_int, int_to_synchsafe, bytes_to_int,
    is_valid_frame_id)
from id3dump._constants import FRAMES_2_2, FRAMES_2_3, FRAMES_2_4


def _decode_utf16(data):
    if len(data) < 2:
        raise ID3BadTextError("Sequence is too short to contain a "
                              "UTF-16 BOM")
    if len(data) % 2:
        data += b'\x00'

    bom, data = data[:2], data[2:]
    if bom == b'\xff\xfe':
        codec = 'utf_16_le'
    elif bom == b'\xfe\xff':
        codec = 'utf_16_be'
    else:
        raise ID3BadTextError(
            "Unrecognized UTF-16 BOM: 0x{:02X}{:02X}".format(*bom))

    try:
        return data.decode(codec)
    except UnicodeDecodeError as err:
        raise ID3BadTextError(str(err))


def decode_text(data):
    """Decode the body of a text or URL frame.

    The first byte selects the encoding:
        0  ISO-8859-1
        1  UTF-16 with a byte order mark
        2  UTF-16BE without a BOM (not supported)
        3  UTF-8
    Any other first byte means the frame carries no encoding byte and
    the whole body is read as ISO-8859-1. Trailing NULs are removed.
    """

    if not data:
        return ""

    encoding = data[0]
    if encoding == 0:
        text = data[1:].decode('latin1')
    elif encoding == 1:
        text = _decode_utf16(data[1:])
    elif encoding == 2:
        raise ID3UnsupportedEncodingError(
            "Unsupported text encoding UTF-16BE")
    elif encoding == 3:
        try:
            text = data[1:].decode('utf8')
        except UnicodeDecodeError as err:
            raise ID3BadTextError(str(err))
    else:
        text = data.decode('latin1')

    return text.rstrip('\x00')


class ID3Header(object):
    """The ten byte header at the start of an ID3v2 tag.

    version and minor_version are the two version bytes (4 and 0 for
    ID3v2.4.0), size is the length of the tag following the header.

    Only the flags the tag's version defines are set by
    FrameGrammar.fill_header; the rest stay False.
    """

    def __init__(self, version, minor_version, flags, size):
        self.version = version
        self.minor_version = minor_version
        self.flags = flags
        self.size = size

        self.f_unsynch = False
        self.f_extended = False
        self.f_experimental = False
        self.f_footer = False
        self.f_compression = False

    def __repr__(self):
        return "{}(version={!r}, minor_version={!r}, flags={:#04x}, " \
               "size={!r})".format(type(self).__name__, self.version,
                                   self.minor_version, self.flags,
                                   self.size)

    def pprint(self):
        return "\n".join([
            "Version: {}".format(self.version),
            "MinorVersion: {}".format(self.minor_version),
            "Unsynchronization: {}".format(self.f_unsynch),
            "Compression: {}".format(self.f_compression),
            "Extended: {}".format(self.f_extended),
            "Experimental: {}".format(self.f_experimental),
            "Footer: {}".format(self.f_footer),
            "Size: {}".format(self.size),
        ])


def read_header(fileobj):
    """Read the tag header at the current position of fileobj.

    Returns a (ID3Header, raw bytes) tuple. Raises EOFError if fewer
    than ten bytes are left and ID3NoHeaderError if they don't start
    with 'ID3'. Flags are left unset; the version's FrameGrammar fills
    them in from the raw bytes.
    """

    data = fullread(fileobj, 10)
    id3, vmaj, vrev, flags, size = struct.unpack('>3sBBB4s', data)
    if id3 != b'ID3':
        raise ID3NoHeaderError("'{}' doesn't start with an ID3 tag".format(
                               getattr(fileobj, 'name', fileobj)))

    return ID3Header(vmaj, vrev, flags, synchsafe_to_int(size)), data


class FrameHeader(object):
    """ID, body size and raw flag bytes of a single frame.

    ID3v2.2 frames have no flags; flags is b'' for them.
    """

    def __init__(self, name, size, flags=b''):
        self.name = name
        self.size = size
        self.flags = flags

    def __repr__(self):
        return "{}({!r}, {!r}, {!r})".format(type(self).__name__,
                                             self.name, self.size,
                                             self.flags)


class Frame(object):
    """Fundamental unit of ID3 data.

    A frame is a header plus the raw body bytes that followed it in
    the file. The body is not interpreted here.
    """

    def __init__(self, header, data):
        self.header = header
        self.data = data

    FrameID = property(
        lambda s: s.header.name,
        doc="ID3v2 three or four character frame ID")

    def __repr__(self):
        return "{}({!r}, {!r})".format(type(self).__name__,
                                       self.header, self.data)

    def pprint(self):
        """Return the frame's fields in a human-readable format."""

        if len(self.header.flags) == 2:
            flags = "{:#06x}".format(cdata.ushort_be(self.header.flags))
        else:
            flags = "none"
        return "\n".join([
            "ID: {}".format(self.FrameID),
            "Size: {}".format(self.header.size),
            "Flags: {}".format(flags),
            "Body: {!r}".format(self.data),
        ])


class FrameGrammar(object):
    """The on-disk frame layout of one ID3v2 version.

    All versions share the same reading loop and differ only in the
    parameters given here:

    version -- the major version byte this grammar reads
    id_width -- length of the frame ID
    size_width -- length of the frame size field
    size_codec -- callable turning the size field into an int
    flags_width -- length of the frame flags field (0 if none)
    header_flags -- (attribute, bit) pairs valid in the tag header
    frames -- frame ID to description mapping
    """

    def __init__(self, version, id_width, size_width, size_codec,
                 flags_width, header_flags, frames):
        self.version = version
        self.id_width = id_width
        self.size_width = size_width
        self.size_codec = size_codec
        self.flags_width = flags_width
        self.header_flags = header_flags
        self.frames = frames

    def __repr__(self):
        return "<{} ID3v2.{}>".format(type(self).__name__, self.version)

    @property
    def header_size(self):
        return self.id_width + self.size_width + self.flags_width

    @property
    def flags_mask(self):
        mask = 0
        for attr, bit in self.header_flags:
            mask |= 1 << bit
        return mask

    def with_frames(self, frames):
        """A copy of this grammar using another description table."""

        return FrameGrammar(self.version, self.id_width, self.size_width,
                            self.size_codec, self.flags_width,
                            self.header_flags, frames)

    def fill_header(self, header, data):
        for attr, bit in self.header_flags:
            setattr(header, attr, cdata.test_bit(data[5], bit))

    def read_frames(self, fileobj, size):
        """Read at most size bytes from fileobj and return its frames.

        A file ending before size bytes is not an error; whatever
        frames were complete enough are returned.
        """

        return list(self.iter_frames(fileobj.read(size)))

    def iter_frames(self, data):
        id_width = self.id_width
        header_size = self.header_size

        while data:
            header = data[:header_size]
            name = header[:id_width]
            if len(name) < id_width or not is_valid_frame_id(name):
                return  # padding
            if len(header) < header_size:
                return  # not enough header

            size = self.size_codec(header[id_width:id_width +
                                          self.size_width])
            flags = header[id_width + self.size_width:]

            framedata = data[header_size:header_size + size]
            data = data[header_size + size:]

            yield Frame(FrameHeader(name.decode('ascii'), size, flags),
                        framedata)

    def describe(self, frame_id):
        return self.frames.get(frame_id)

    def is_renderable(self, frame):
        """Whether frame is a text or URL frame this version knows."""

        frame_id = frame.FrameID
        return (frame_id.startswith(("T", "W")) and
                frame_id in self.frames)

    def render(self, frame):
        """Return a 'description: text' line for the frame.

        Frames that aren't known text or URL frames get a placeholder
        line instead. Undecodable text raises ID3UnsupportedEncodingError
        or ID3BadTextError.
        """

        if not self.is_renderable(frame):
            return "Frame is not text frame ({})".format(frame.FrameID)
        return "{}: {}".format(self.describe(frame.FrameID),
                               decode_text(frame.data))


V2_2 = FrameGrammar(2, 3, 3, bytes_to_int, 0,
                    (("f_unsynch", 7), ("f_compression", 6)),
                    FRAMES_2_2)

V2_3 = FrameGrammar(3, 4, 4, bytes_to_int, 2,
                    (("f_unsynch", 7), ("f_extended", 6),
                     ("f_experimental", 5)),
                    FRAMES_2_3)

V2_4 = FrameGrammar(4, 4, 4, synchsafe_to_int, 2,
                    (("f_unsynch", 7), ("f_extended", 6),
                     ("f_experimental", 5), ("f_footer", 4)),
                    FRAMES_2_4)

GRAMMARS = {2: V2_2, 3: V2_3, 4: V2_4}


class ID3(id3dump.Metadata):
    """An ID3v2 tag read from the start of a file.

    ID3(filename) or ID3(fileobj=...) reads the tag; frames keeps every
    frame in the order it was found. Raises ID3NoHeaderError if there
    is no tag and ID3UnsupportedVersionError for versions other than
    2.2, 2.3 and 2.4.

    Set PEDANTIC to make reserved header flag bits an error instead
    of a warning.
    """

    filename = None
    PEDANTIC = False

    def __init__(self, *args, **kwargs):
        self.header = None
        self.grammar = None
        self.frames = []

        super(ID3, self).__init__(*args, **kwargs)

    version = property(
        lambda s: (2, s.header.version, s.header.minor_version),
        doc="the (2, major, minor) version of the loaded tag")

    size = property(
        lambda s: s.header.size + 10,
        doc="the tag size including its header")

    def load(self, filename=None, fileobj=None, known_frames=None):
        """Read the tag from filename or an open binary fileobj.

        known_frames replaces the version's frame descriptions, e.g.
        to render only a subset of text frames.
        """

        if fileobj is not None:
            self.filename = filename or getattr(fileobj, 'name', None)
            self.__load(fileobj, known_frames)
        elif filename is not None:
            self.filename = filename
            fileobj = open(filename, 'rb')
            try:
                self.__load(fileobj, known_frames)
            finally:
                fileobj.close()
        else:
            raise TypeError("load() needs a filename or a fileobj")

    def __load(self, fileobj, known_frames):
        fn = self.filename
        try:
            header, data = read_header(fileobj)
        except EOFError:
            raise ID3NoHeaderError("'{}' is too small for an ID3 "
                                   "tag".format(fn))

        try:
            grammar = GRAMMARS[header.version]
        except KeyError:
            raise ID3UnsupportedVersionError(
                "'{}' ID3v2.{} not supported".format(fn, header.version))
        if known_frames is not None:
            grammar = grammar.with_frames(known_frames)

        grammar.fill_header(header, data)
        if header.flags & ~grammar.flags_mask:
            msg = "'{}' has invalid flags {:#04x}".format(fn, header.flags)
            if self.PEDANTIC:
                raise ValueError(msg)
            warn(msg, ID3Warning)

        self.header = header
        self.grammar = grammar
        self.frames = grammar.read_frames(fileobj, header.size)

    def __iter__(self):
        return iter(self.frames)

    def __len__(self):
        return len(self.frames)

    def getall(self, key):
        """Return all frames with a given ID, in file order.

            id3.getall('TXXX') == [<Frame TXXX>, <Frame TXXX>]
            id3.getall('TTTT') == []
        """

        return [frame for frame in self.frames if frame.FrameID == key]

    def describe(self, frame_id):
        return self.grammar.describe(frame_id)

    def render(self, verbose=False):
        """Yield a 'description: text' line per text or URL frame.

        Other frames are skipped unless verbose is set. A frame whose
        text can't be decoded is skipped with an ID3Warning so the
        rest of the tag still renders.
        """

        for frame in self.frames:
            if not self.grammar.is_renderable(frame):
                if verbose:
                    yield self.grammar.render(frame)
                continue

            try:
                yield self.grammar.render(frame)
            except (ID3UnsupportedEncodingError, ID3BadTextError) as err:
                warn("'{}': skipping {} frame: {}".format(
                     self.filename, frame.FrameID, err), ID3Warning)
                if verbose:
                    yield "{}: <{}>".format(
                        self.describe(frame.FrameID), err)

    def pprint(self, verbose=False):
        """Return tags in a human-readable format.

        One line per text or URL frame, in file order:
            Album/Movie/Show title: Test
        """

        return "\n".join(self.render(verbose))


Open = ID3
