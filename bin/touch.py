#!/usr/bin/env python3

"""
usage: touch.py [-h] [-a] [-c] [-d DATE] [-m] [-r FILE] [-t TIME] FILE [FILE ...]

mark each file as accessed and modified, or create a new empty file

positional arguments:
  FILE                  a file to mark (created empty, when missing)

options:
  -h, --help            show this help message and exit
  -a                    change only the access time
  -c, --no-create       don't create any file that's missing
  -d, --date DATE       use this date and time, not now
  -m                    change only the modification time
  -r, --reference FILE  use the times of this file, not now
  -t, --time TIME       same as --date

quirks:
  takes -t TIME in the same formats as -d DATE, not as [[CC]YY]MMDDhhmm[.ss]
  requires a timezone offset in each date, such as +0000 or -07:00 or Z
  keeps each fraction of a second given, down to microseconds
  falls back to now, after a date it can't read, but then exits 1
  gives each new empty file it creates the same times as the rest

formats:
  YYYY-MM-DD HH:MM:SS.sss +HHMM
  YYYY-MM-DD HH:MM:SS +HHMM
  YYYY-MM-DD HH:MM:SS.sss+HHMM
  YYYY-MM-DD HH:MM:SS+HHMM
  YYYY-MM-DDTHH:MM:SS.sss+HHMM
  YYYY-MM-DDTHH:MM:SS+HHMM
  YYYY-MM-DDTHH:MM:SS.sss +HHMM
  YYYY-MM-DDTHH:MM:SS +HHMM

examples:
  touch.py a.txt  # create "a.txt", else mark it as accessed and modified now
  touch.py -c a.txt  # mark "a.txt" as modified now, but don't create it
  touch.py -r b.txt a.txt  # copy the times of "b.txt" onto "a.txt"
  touch.py -d '2001-02-03 04:05:06.789 +0000' a.txt  # mark a time long ago
  touch.py -m -d 2001-02-03T04:05:06Z a.txt  # change only the modification time
"""


import datetime as dt
import errno
import os
import sys
import time

import argdoc


TIME_FORMATS = [
    "%Y-%m-%d %H:%M:%S.%f %z",
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f %z",
    "%Y-%m-%dT%H:%M:%S %z",
]

EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


def main(argv=None):
    """Run from the command line"""

    alt_argv = sys.argv if (argv is None) else argv
    args = parse_touch_args(alt_argv[1:])

    now_ns = time.time_ns()

    (times, ok) = choose_times(args, now_ns=now_ns)
    exit_status = 0 if ok else 1

    for path in args.files:
        if not touch_path(path, times=times, args=args):
            exit_status = 1

    return exit_status


def parse_touch_args(argv):
    """Parse the command line, as per the top-of-file doc, and reject conflicts"""

    parser = argdoc.parser_from_doc(__doc__, epi="quirks:")

    parser.add_argument(
        "files",
        metavar="FILE",
        nargs="+",  # argparse.ONE_OR_MORE
        help="a file to mark (created empty, when missing)",
    )

    parser.add_argument(
        "-a", action="count", default=0, help="change only the access time"
    )
    parser.add_argument(
        "-c",
        "--no-create",
        action="count",
        default=0,
        help="don't create any file that's missing",
    )
    parser.add_argument(
        "-d", "--date", metavar="DATE", help="use this date and time, not now"
    )
    parser.add_argument(
        "-m", action="count", default=0, help="change only the modification time"
    )
    parser.add_argument(
        "-r",
        "--reference",
        metavar="FILE",
        help="use the times of this file, not now",
    )
    parser.add_argument("-t", "--time", metavar="TIME", help="same as --date")

    argdoc.parser_exit_unless_doc_eq(parser, doc=__doc__, file_=__file__)

    args = parser.parse_args(argv)

    if args.a and args.m:
        stderr_print("touch.py: error: choose -a or -m, not both")
        sys.exit(2)  # exit 2 from rejecting usage

    if (args.time is not None) and (args.date is not None):
        stderr_print("touch.py: error: choose -t or -d, not both")
        sys.exit(2)  # exit 2 from rejecting usage

    if (args.reference is not None) and ((args.time, args.date) != (None, None)):
        stderr_print("touch.py: error: choose -t, -d, or -r, not more than one")
        sys.exit(2)  # exit 2 from rejecting usage

    return args


def choose_times(args, now_ns):
    """Choose the (atime_ns, mtime_ns) to give each File, and say if that went ok"""

    now_times = (now_ns, now_ns)

    # Take the Date, if given

    chars = args.time if (args.time is not None) else args.date
    if chars is not None:
        try:
            when = parse_time(chars)
        except ValueError:
            stderr_print(
                "touch.py: error: invalid date {!r}, use:  -d {!r}".format(
                    chars, "YYYY-MM-DD HH:MM:SS.sss +HHMM"
                )
            )

            return (now_times, False)  # fall back to now

        when_ns = datetime_to_ns(when)

        return ((when_ns, when_ns), True)

    # Else copy the Times of the Reference File, if given

    if args.reference is not None:
        try:
            stats = os.stat(args.reference)
        except OSError as exc:
            stderr_print(
                "touch.py: error: cannot stat reference {!r}: {}".format(
                    args.reference, describe_oserror(exc)
                )
            )

            return (now_times, False)  # fall back to now

        return ((stats.st_atime_ns, stats.st_mtime_ns), True)

    # Else take the Time of Now

    return (now_times, True)


def touch_path(path, times, args):
    """Create the File if need be and allowed, then give it the Times"""

    if not os.path.exists(path):  # False at a dangling symlink
        if args.no_create:
            return True

        try:
            with open(path, mode="w"):
                pass
        except OSError as exc:
            stderr_print(
                "touch.py: error: cannot create {!r}: {}".format(
                    path, describe_oserror(exc)
                )
            )

            return False

    try:
        alt_times = pick_times(path, times=times, args=args)
        os.utime(path, ns=alt_times)
    except (OSError, NotImplementedError) as exc:
        stderr_print(
            "touch.py: error: cannot touch {!r}: {}".format(path, describe_oserror(exc))
        )

        return False

    return True


def pick_times(path, times, args):
    """Keep the Access or Modification Time of the File, when told to change only one"""

    (atime_ns, mtime_ns) = times

    if args.a or args.m:
        stats = os.stat(path)
        if args.a:
            mtime_ns = stats.st_mtime_ns
        else:
            atime_ns = stats.st_atime_ns

    return (atime_ns, mtime_ns)


def describe_oserror(exc):
    """Say briefly what went wrong, as one of a few kinds of trouble"""

    if isinstance(exc, PermissionError):
        return "permission denied"

    if isinstance(exc, FileNotFoundError):
        return "no such file or directory"

    if isinstance(exc, NotImplementedError):
        return "setting times not supported here"

    if getattr(exc, "errno", None) in (errno.ENOTSUP, errno.EOPNOTSUPP):
        return "setting times not supported here"

    return "{}: {}".format(type(exc).__name__, exc)


def parse_time(chars):
    """Read a Date and Time with Timezone, trying each Format in order"""

    for format_ in TIME_FORMATS:
        try:
            parsed = dt.datetime.strptime(chars, format_)

            return parsed

        except ValueError:
            if format_ == TIME_FORMATS[-1]:
                raise

    return None


def datetime_to_ns(when):
    """Count the Nanoseconds since the Unix Epoch, without rounding through Float"""

    delta = when - EPOCH
    seconds = delta.days * 24 * 60 * 60 + delta.seconds
    ns = seconds * 10**9 + delta.microseconds * 10**3

    return ns


#
# Define some Python idioms
#


# deffed in many files  # missing from docs.python.org
def stderr_print(*args):
    """Print the Args, but to Stderr, not to Stdout"""

    sys.stdout.flush()
    print(*args, file=sys.stderr)
    sys.stderr.flush()  # like for kwargs["end"] != "\n"


if __name__ == "__main__":
    sys.exit(main(sys.argv))


# copied from:  git clone https://github.com/pelavarre/pybashish.git
