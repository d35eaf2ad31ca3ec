"""Echo arguments, or standard input lines, without adding newlines."""

import argparse
import sys

EXIT_STATUS = 2


def catecho(text):
    """Write ``text`` to standard output as is."""
    sys.stdout.write(text)


def _strip_line_end(line):
    return line.removesuffix("\n").removesuffix("\r")


def main(argv=None):
    """Echo the joined arguments, or every input line, and return exit status 2."""
    parser = argparse.ArgumentParser(prog="echo")
    parser.add_argument("words", nargs=argparse.REMAINDER)
    args = parser.parse_args(argv)

    if args.words:
        catecho(" ".join(args.words))
    else:
        for line in sys.stdin:
            catecho(_strip_line_end(line))
    sys.stdout.flush()
    return EXIT_STATUS


if __name__ == "__main__":
    sys.exit(main())