#!/usr/bin/env python3

r"""
usage: cat.py [-h] [-E] [-e] [-n] [-T] [-t] [-v] FILE [FILE ...]

copy each file to stdout, one after another (as if "cat"enating them)

positional arguments:
  FILE                  a file to copy out, or "-" to copy stdin

options:
  -h, --help            show this help message and exit
  -E, --show-ends       show each line-feed as "$" then line-feed
  -e                    call for -E and -v
  -n, --number          number each line of output
  -T, --show-tabs       show each tab as "^I"
  -t                    call for -T and -v
  -v, --show-nonprinting
                        show control chars as ^X, and non-ascii bytes as M- escapes

quirks:
  numbers each line as "{:6} ", with a space after the number, not a hard tab
  keeps counting line numbers up across files, like bash "cat -n a b"
  prints the last line without a line-feed, when the file ends without one
  reads each file as utf-8, and quits at the first file that isn't utf-8
  prints an error for each file it can't read, and exits 1 after trying the rest

unsurprising quirks:
  prompts for stdin, like mac bash "grep -R .", unlike bash "cat -" and "cat"
  exits 1, quietly, when stdout closes early, as at:  cat.py big.txt |head

examples:
  cat.py a.txt b.txt  # copy out two files
  cat.py -n a.txt  # number each line
  cat.py -e a.txt  # show where each line ends, and each nonprinting char
  echo a b c |tr ' ' '\n' |cat.py -  # pass stdin through to stdout
  (echo a; echo b; echo c) |cat -n |cat.py -tv  # show each tab as ^I
"""


import contextlib
import io
import os
import sys

import argdoc


# deffed in many files  # missing from docs.python.org
class BrokenPipeErrorSink(contextlib.ContextDecorator):
    """Cut unhandled BrokenPipeError down to sys.exit(1)

    Test with large Stdout cut sharply, such as:  cat.py big.txt |head

    More narrowly than:  signal.signal(signal.SIGPIPE, handler=signal.SIG_DFL)
    As per https://docs.python.org/3/library/signal.html#note-on-sigpipe
    """

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        (exc_type, exc, exc_traceback) = exc_info
        if isinstance(exc, BrokenPipeError):  # catch this one

            null_fileno = os.open(os.devnull, flags=os.O_WRONLY)
            os.dup2(null_fileno, sys.stdout.fileno())  # avoid the next one

            sys.exit(1)


@BrokenPipeErrorSink()
def main(argv=None):
    """Run from the command line"""

    alt_argv = sys.argv if (argv is None) else argv
    args = parse_cat_args(alt_argv[1:])

    # Catenate each text file

    if "-" in args.files:
        prompt_tty_stdin()

    exit_status = 0
    line_index = 0
    for path in args.files:

        try:
            chars = read_chars(path)
        except UnicodeDecodeError as exc:
            stderr_print("cat.py: error: {}: {}: {}".format(path, type(exc).__name__, exc))

            return 1  # quit at first invalid input

        except OSError as exc:
            stderr_print("cat.py: error: {}: {}".format(type(exc).__name__, exc))
            exit_status = 1

            continue

        (rep, line_index) = cat_chars(chars, args=args, line_index=line_index)

        sys.stdout.write(rep)
        sys.stdout.flush()

    return exit_status


def parse_cat_args(argv):
    """Parse the command line, as per the top-of-file doc"""

    parser = argdoc.parser_from_doc(__doc__, epi="quirks:")

    parser.add_argument(
        "files",
        metavar="FILE",
        nargs="+",  # argparse.ONE_OR_MORE
        help='a file to copy out, or "-" to copy stdin',
    )

    parser.add_argument(
        "-E",
        "--show-ends",
        action="count",
        default=0,
        help='show each line-feed as "$" then line-feed',
    )
    parser.add_argument("-e", action="count", default=0, help="call for -E and -v")
    parser.add_argument(
        "-n", "--number", action="count", default=0, help="number each line of output"
    )
    parser.add_argument(
        "-T", "--show-tabs", action="count", default=0, help='show each tab as "^I"'
    )
    parser.add_argument("-t", action="count", default=0, help="call for -T and -v")
    parser.add_argument(
        "-v",
        "--show-nonprinting",
        action="count",
        default=0,
        help="show control chars as ^X, and non-ascii bytes as M- escapes",
    )

    argdoc.parser_exit_unless_doc_eq(parser, doc=__doc__, file_=__file__)

    args = parser.parse_args(argv)

    if args.e:
        args.show_ends = True
        args.show_nonprinting = True

    if args.t:
        args.show_tabs = True
        args.show_nonprinting = True

    return args


def read_chars(path):
    """Read the whole File as Text, but don't translate its Line Ends"""

    if path == "-":
        incoming = io.TextIOWrapper(
            sys.stdin.buffer, encoding="utf-8", errors="strict", newline=""
        )
        try:
            chars = incoming.read()
        finally:
            incoming.detach()  # leave sys.stdin open

        return chars

    with open(path, encoding="utf-8", errors="strict", newline="") as incoming:
        chars = incoming.read()

    return chars


def cat_chars(chars, args, line_index=0):
    """Show each Line of Chars, and count up the Lines shown"""

    lines = chars.split("\n")
    tail = lines.pop()  # empty when the Chars end with a Line-Feed

    reps = list()
    for line in lines:
        rep = cat_repr_line(line, args=args, line_index=line_index)
        rep += "$\n" if args.show_ends else "\n"
        reps.append(rep)
        line_index += 1

    if tail:
        rep = cat_repr_line(tail, args=args, line_index=line_index)
        reps.append(rep)
        line_index += 1

    return ("".join(reps), line_index)


def cat_repr_line(line, args, line_index):
    """Show the Line, as numbered or not"""

    tag = "{:6} ".format(1 + line_index) if args.number else ""

    if not (args.show_tabs or args.show_nonprinting):
        return tag + line

    rep = tag + "".join(cat_repr_char(_, args=args) for _ in line)

    return rep


def cat_repr_char(ch, args):
    """Choose how to show each char in the line"""

    if ch == "\t":
        rep = "^I" if args.show_tabs else ch
        return rep

    if not args.show_nonprinting:
        return ch

    if ch.isascii():
        rep = cat_repr_byte(ord(ch))
        return rep

    rep = "".join(cat_repr_byte(_) for _ in ch.encode())

    return rep


def cat_repr_byte(xx):
    """Show a Byte as Printable Ascii, else as ^X or M-X, same as bash "cat -v" """

    if xx >= 0x80:
        rep = "M-" + cat_repr_byte(xx - 0x80)
        return rep

    if xx == 0x7F:
        return "^?"

    if xx < ord(" "):
        rep = "^" + chr(xx + ord("@"))
        return rep

    return chr(xx)


#
# Define some Python idioms
#


# deffed in many files  # missing from docs.python.org
def prompt_tty_stdin():
    if sys.stdin.isatty():
        stderr_print("Press ⌃D EOF to quit")


# deffed in many files  # missing from docs.python.org
def stderr_print(*args, **kwargs):
    sys.stdout.flush()
    print(*args, **kwargs, file=sys.stderr)
    sys.stderr.flush()  # esp. when kwargs["end"] != "\n"


if __name__ == "__main__":
    sys.exit(main(sys.argv))


# copied from:  git clone https://github.com/pelavarre/pybashish.git
