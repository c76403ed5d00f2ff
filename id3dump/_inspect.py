# -*- coding: utf-8 -*-

# Copyright 2005 Joe Wreschnig
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License version 2 as
# published by the Free Software Foundation.

"""Text and URL frames of the ID3v2 tags of the given files."""

import argparse
import sys

from id3dump.id3 import ID3, ID3NoHeaderError, ID3UnsupportedVersionError


def inspect_file(filename, args, out=sys.stdout):
    tag = ID3(filename)

    out.write("[{}:{}]\n".format(tag.version[1], filename))
    if args.header:
        out.write(tag.header.pprint() + "\n")
    if args.frames:
        for frame in tag.frames:
            out.write(frame.pprint() + "\n")
    text = tag.pprint(verbose=args.verbose)
    if text:
        out.write(text + "\n")


def main(argv, out=sys.stdout, err=sys.stderr):
    parser = argparse.ArgumentParser(
        prog="id3-inspect", usage="%(prog)s [options] FILE [FILE...]")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="also list frames that aren't text frames")
    parser.add_argument("--header", action="store_true",
                        help="show the tag header fields")
    parser.add_argument("--frames", action="store_true",
                        help="show the raw fields of every frame")
    parser.add_argument("files", nargs="+", metavar="FILE",
                        help="Files to inspect")

    args = parser.parse_args(argv[1:])

    failed = 0
    for index, filename in enumerate(args.files):
        if index:
            out.write("\n")
        try:
            inspect_file(filename, args, out)
        except (ID3NoHeaderError, ID3UnsupportedVersionError) as e:
            err.write("{}\n".format(e))
            failed += 1
        except EnvironmentError as e:
            err.write("Can't open file '{}' ({})\n".format(filename, e))
            failed += 1

    return 1 if failed else 0


def entry_point():
    sys.exit(main(sys.argv))
