# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.

"""id3dump reads ID3v2.2, 2.3 and 2.4 tags from the start of audio
files and renders their text and URL frames in a readable form.

The interesting entry point is :class:`id3dump.id3.ID3`.
"""

version = (0, 3)
version_string = ".".join(str(v) for v in version)


class Metadata(object):
    """An abstract dict-like object.

    Metadata is the base class for tag readers; subclasses load their
    state from a file name or file object passed to the constructor.
    """

    def __init__(self, *args, **kwargs):
        if args or kwargs:
            self.load(*args, **kwargs)

    def load(self, *args, **kwargs):
        raise NotImplementedError

    def pprint(self):
        raise NotImplementedError
