#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
usage: import argdoc

compile an argparse parser from a top-of-file docstring of help lines

quirks:
  takes the prog from the usage line, and the description from the next paragraph
  takes the epilog as all the doc from the given epi heading to the end
  exits 1 when the doc doesn't match the help of the parser, after cutting jitter
  pins COLUMNS at 89 while formatting the help to compare

examples:
  parser = argdoc.parser_from_doc(__doc__, epi="quirks:")
  parser.add_argument("files", metavar="FILE", nargs="+", help="a file to copy out")
  argdoc.parser_exit_unless_doc_eq(parser, doc=__doc__, file_=__file__)
"""


import argparse
import difflib
import os
import re
import sys


_89_COLUMNS = 89  # the Black app for styling Python promotes 89 columns per line


#
# Compile an ArgumentParser from a DocString
#


# deffed in many files  # missing from docs.python.org
def parser_from_doc(doc, epi=None):
    """Form an ArgumentParser with Epilog, with no Args and no Options, from Doc"""

    # Pick the ArgParse Prog, Description, & Epilog out of the Doc

    prog = doc.strip().splitlines()[0].split()[1]

    headlines = list(_ for _ in doc.strip().splitlines() if _ and not _.startswith(" "))
    description = headlines[1]

    epilog = None
    if epi:
        epilog_at = doc.index(epi)
        epilog = doc[epilog_at:].rstrip()

    # Form an ArgumentParser with Epilog, with no Args and no Options

    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        add_help=True,
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=epilog,
    )

    return parser


# deffed in many files  # missing from docs.python.org
def parser_exit_unless_doc_eq(parser, doc, file_):
    """Exit nonzero, unless the Doc equals 'parser.format_help()'"""

    fromfile = "{} --help".format(os.path.split(file_)[-1])
    tofile = "ArgumentParser(..."

    # Fetch the Parser Doc with Lines wrapped by a virtual Terminal of a fixed width

    with_columns = os.getenv("COLUMNS")  # often '!= os.get_terminal_size().columns'
    os.environ["COLUMNS"] = str(_89_COLUMNS)
    try:
        parser_doc = parser.format_help()
    finally:
        if with_columns is None:
            os.environ.pop("COLUMNS")
        else:
            os.environ["COLUMNS"] = with_columns

    # Count significant differences between Doc's of ArgParse Help Lines

    diffchars = diff_doc_lines(
        fromdoc=argparse_doc_upgrade(doc),
        todoc=argparse_doc_upgrade(parser_doc),
        fromfile=fromfile,
        tofile=tofile,
    )

    if diffchars:
        stderr_print(diffchars)  # '... --help' vs 'ArgumentParser(...'
        stderr_print(
            "{}: error: Doc doesn't match Parser compiled from Doc".format(
                os.path.split(file_)[-1]
            )
        )

        sys.exit(1)  # exit 1 to require Parser == Doc


def diff_doc_lines(fromdoc, todoc, fromfile, tofile):
    """Format the Diffs as a string of lines joined by line-end, else empty string"""

    difflines = list(
        difflib.unified_diff(
            a=fromdoc.splitlines(),
            b=todoc.splitlines(),
            fromfile=fromfile,
            tofile=tofile,
            lineterm="",
        )
    )

    diffchars = "\n".join(difflines)

    return diffchars


#
# Cut the jitter in Doc from ArgParse evolving across Python 3
#


# deffed in many files  # missing from docs.python.org
def argparse_doc_upgrade(doc):
    """Cut the jitter in Doc from ArgParse evolving across Python 3"""

    if doc is None:

        return None

    # Drop the Color of Python 3.14, and its Python 3.10 rename of Options

    alt_doc = re.sub(r"\x1b\[[0-9;]*m", repl="", string=doc)
    alt_doc = alt_doc.strip()
    alt_doc = textwrap_unwrap_first_paragraph(alt_doc)
    alt_doc = alt_doc.replace("\noptional arguments:", "\noptions:")

    # Join each wrapped Help Line, and collapse each run of Blanks

    lines = list()
    for para in textwrap_split_paras(alt_doc):
        head = para[0]
        body = para[1:]
        if head.startswith(" "):
            head = None
            body = para

        if head is not None:
            lines.append(" ".join(head.split()))
        for line in textwrap_para_unbreakdent_lines(para=body):
            words = " ".join(line.split())
            lines.append(words)

        lines.append("")

    # Speak '-t TIME, --time TIME' as '-t, --time TIME', same as Python 3.13

    pattern = r"^(-[A-Za-z0-9]) ([A-Z][A-Z0-9_]*), (--[A-Za-z0-9-]+) \2(?= |$)"
    alt_lines = list(re.sub(pattern, repl=r"\1, \3 \2", string=_) for _ in lines)

    alt_doc = "\n".join(alt_lines).strip()

    return alt_doc


def textwrap_unwrap_first_paragraph(text):
    """Join by single spaces all the leading lines up to the first empty line"""

    index = (text + "\n\n").index("\n\n")
    lines = text[:index].splitlines()
    chars = " ".join(_.strip() for _ in lines)
    alt_text = chars + text[index:]

    return alt_text


# deffed in many files  # missing from docs.python.org
def textwrap_split_paras(text):
    """Divide the Chars into a List of non-empty Lists of possibly dented Lines"""

    if text is None:

        return None

    paras = list()

    para = None
    for line in (text + "\n\n").splitlines():
        if not line.strip():
            if para is not None:
                paras.append(para)
            para = None
        elif not para:
            para = [line]
        else:
            para.append(line)

    assert para is None

    return paras

    # such as:  "  a\n    b\n  c\n"  ->  [['  a', '    b', '  c']]


def textwrap_para_unbreakdent_lines(para):
    """Join the continuation lines dented beneath each leading line"""

    above_dent = None

    lines = list()
    for line in para:
        lstripped = line.lstrip()

        dent = ""
        if line != lstripped:
            dent = line[: -len(lstripped)]

        if lines:
            if len(dent) > len(above_dent):
                lines[-1] += " " + line.strip()

                continue

        lines.append(line)
        above_dent = dent

    return lines

    # such as:  [' a', '    b', ' c']  ->  [' a b', ' c']


#
# Define some Python idioms
#


# deffed in many files  # missing from docs.python.org
def stderr_print(*args):
    """Print the Args, but to Stderr, not to Stdout"""

    sys.stdout.flush()
    print(*args, file=sys.stderr)
    sys.stderr.flush()  # like for kwargs["end"] != "\n"


# copied from:  git clone https://github.com/pelavarre/pybashish.git
