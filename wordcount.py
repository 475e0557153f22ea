#!/usr/bin/env python3
"""
wordcount.py

Frequency counting of characters, words or lines in UTF-8 text.

Usage:
  python wordcount.py corpus.txt
  python wordcount.py corpus.txt --mode char
  cat corpus.txt | python wordcount.py --mode line --top 20
"""

import argparse
import enum
import io
import re
import sys
from collections import Counter

# ----------------------------
# DEFAULT CONFIG
# ----------------------------
DEFAULTS = {
    "mode": "word",
    "top": 0,                  # 0 prints every token
    "encoding": "utf-8",
    "word_pattern": r"\w+",    # str pattern, so \w is Unicode aware
}
# ----------------------------

WORD_PATTERN = re.compile(DEFAULTS["word_pattern"])


class CountOption(enum.Enum):
    """What count() treats as a token."""
    CHAR = "char"
    WORD = "word"
    LINE = "line"

    @classmethod
    def default(cls):
        return cls.WORD


class InvalidEncoding(ValueError):
    """A line of input is not valid UTF-8."""

    def __init__(self, line_number, reason):
        super().__init__(line_number, reason)
        self.line_number = line_number
        self.reason = reason

    def __str__(self):
        return f"line {self.line_number}: invalid {DEFAULTS['encoding']} ({self.reason})"


# ----------------------------
# Line source
# ----------------------------
def strip_line_ending(line: str) -> str:
    # \n or \r\n, nothing else
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def iter_lines(source):
    """Yield stripped text lines from a text/binary stream, an iterable of
    str/bytes lines, or a whole str/bytes object.

    Raises InvalidEncoding on the first line that does not decode.
    """
    if isinstance(source, str):
        source = io.StringIO(source)
    elif isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    elif isinstance(source, io.TextIOBase) and getattr(source, "buffer", None) is not None:
        # TextIOWrapper decodes whole chunks, so go line by line on the bytes
        source = source.buffer

    lines = iter(source)
    line_number = 0
    while True:
        line_number += 1
        try:
            raw = next(lines)
        except StopIteration:
            return
        except UnicodeDecodeError as exc:
            raise InvalidEncoding(line_number, exc.reason) from exc

        if isinstance(raw, (bytes, bytearray)):
            try:
                raw = bytes(raw).decode(DEFAULTS["encoding"])
            except UnicodeDecodeError as exc:
                raise InvalidEncoding(line_number, exc.reason) from exc
        else:
            # lone surrogates, e.g. from surrogateescape
            try:
                raw.encode(DEFAULTS["encoding"])
            except UnicodeEncodeError as exc:
                raise InvalidEncoding(line_number, exc.reason) from exc
        yield strip_line_ending(raw)


# ----------------------------
# Counting
# ----------------------------
def count(source, option=CountOption.WORD) -> Counter:
    """Count token frequencies in every line of source.

    * CountOption.CHAR: each Unicode code point
    * CountOption.WORD: each match of \\w+
    * CountOption.LINE: each line, without its \\n or \\r\\n

    Example:

        >>> freqs = count(io.StringIO("aa bb cc bb"), CountOption.WORD)
        >>> freqs["bb"]
        2

    Raises InvalidEncoding if the input is not valid UTF-8. Nothing counted
    so far is returned in that case.
    """
    option = CountOption(option)
    freqs = Counter()

    for line in iter_lines(source):
        if option is CountOption.CHAR:
            freqs.update(line)
        elif option is CountOption.WORD:
            freqs.update(m.group(0) for m in WORD_PATTERN.finditer(line))
        else:
            freqs[line] += 1
    return freqs


# ----------------------------
# CLI interface
# ----------------------------
def non_negative_int(text):
    n = int(text)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {n}")
    return n


def build_parser():
    p = argparse.ArgumentParser(
        prog="wordcount",
        description="Count characters, words or lines in a UTF-8 text file.",
    )
    p.add_argument("input", nargs="?", default="-",
                   help="input file ('-' or omitted reads standard input)")
    p.add_argument("--mode", choices=[o.value for o in CountOption], default=DEFAULTS["mode"])
    p.add_argument("--top", type=non_negative_int, default=DEFAULTS["top"],
                   help="print only the N most frequent tokens")
    return p


def print_frequencies(freqs, top=0):
    for token, n in freqs.most_common(top or None):
        print(f"{token}: {n}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    option = CountOption(args.mode)

    try:
        if args.input == "-":
            freqs = count(sys.stdin.buffer, option)
        else:
            # binary, so decoding errors come out of count() as InvalidEncoding
            with open(args.input, "rb") as f:
                freqs = count(f, option)
    except (OSError, InvalidEncoding) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print_frequencies(freqs, args.top)
    return 0


if __name__ == "__main__":
    sys.exit(main())
