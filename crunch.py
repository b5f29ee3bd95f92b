#!/usr/bin/env python3

# Renames identifiers in source text so the result compresses better.
#
# New names are picked by estimating the information content of the text
# they end up in, so they reuse the bytes that are already common there.
#
import argparse
import os
import re
import sys

from idcrunch.common import log_error
from idcrunch.config import CONFIG_get
from idcrunch.mangler import crunch, default_output

prog = 'crunch'
PROG_VER = "0.3"


def create_parser():
    parser = argparse.ArgumentParser(prog=prog)

    parser.add_argument('inputfile', nargs='*',
                        help="Source file(s) to mangle")

    parser.add_argument('-o', dest='outfile', default=None,
                        help="Output filename or directory")

    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help="Increase verbosity level")

    parser.add_argument('--pattern', '-p',
                        default=CONFIG_get('mangle_pattern'),
                        help="Regex selecting identifiers to rename "
                             "(default: '%(default)s')")

    parser.add_argument('--reserved', '-r', action='append', default=[],
                        help="File with names that must never be generated")

    parser.add_argument('--no-ambience', action='store_true',
                        help="Don't bias new names towards the surrounding"
                             " text")

    parser.add_argument('--pedantic', action='store_true',
                        help="Verbose size units")

    parser.add_argument('--version', '-V', action='version',
                        version='%(prog)s version ' + PROG_VER)
    return parser


def main(argv=None):
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.inputfile:
        s = "usage:\n"
        ex = [("file.js", "Create file.min.js from file.js")]
        ex += [("lib.js -o out.js", "Create out.js from lib.js")]
        ex += [("*.js -o min/", "Process multiple files and store in min/")]
        ex += [("-p '^m_' file.lua", "Rename identifiers starting with m_")]
        for e in ex:
            s += "{} {}{}# {}\n".format(prog, e[0], ' ' * (25 - len(e[0])),
                                        e[1])

        s += "\nUse -h for more help"
        print(s, file=sys.stderr)
        return 1

    try:
        re.compile(args.pattern)
    except re.error as e:
        log_error("Invalid pattern '{}': {}".format(args.pattern, e))
        return 1

    single = len(args.inputfile) == 1
    if args.outfile and not single and not os.path.isdir(args.outfile):
        log_error("Use a directory as output for multiple input files.")
        return 1

    result = 0
    for file_in in args.inputfile:
        path_out = args.outfile

        if not path_out:
            path_out = default_output(file_in)
        elif os.path.isdir(path_out):
            path_out = os.path.join(path_out, os.path.basename(file_in))
        elif not os.path.isdir(os.path.dirname(path_out) or '.'):
            log_error("No such directory: '{}'".format(
                os.path.dirname(path_out)))
            return 1

        if os.path.abspath(path_out) == os.path.abspath(file_in):
            log_error("Input file '{}' would be overwritten.".format(file_in))
            result = 1
            continue

        args.filename_in = file_in
        args.filename_out = path_out

        if crunch(args) is None:
            result = 1

    return result


if __name__ == '__main__':
    sys.exit(main())
