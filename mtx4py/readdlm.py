"""load matrices from delimited text files, like CSV or TSV files

Copyright (c) 2011-2023 Nephics AB
The MIT License (MIT)
"""

__all__ = ['readdlm', 'tokenizer', 'ReadOptions']


import re
from collections import namedtuple
from functools import lru_cache

import numpy as np
from scipy.sparse import lil_array

from .numeric import INVARIANT, numeric_kind, token_parser
from .textio import open_text


# tokens are parenthesized or quoted spans, or runs of characters that are
# not a delimiter; the delimiter set is filled in by tokenizer()
TOKEN_PATTERN = r'''\([^)]*\)|'[^']*'|"[^"]*"|[^{}]*'''

ReadOptions = namedtuple(
    'ReadOptions', ['delimiter', 'culture', 'header', 'sparse', 'container'])


@lru_cache(maxsize=32)
def tokenizer(delimiter=None):
    """Return the compiled token pattern for the delimiter. Each character
    of the delimiter separates tokens; None (or '') means any whitespace.
    """
    chars = re.escape(delimiter) if delimiter else r'\s'
    return re.compile(TOKEN_PATTERN.format(chars))


def split_row(line, pattern):
    return [m.group() for m in pattern.finditer(line) if m.group()]


def strip_quotes(token):
    return token.replace("'", '').replace('"', '')


def read_rows(fd, options):
    """Read the rows of tokens in the file fd.
    Returns the list of rows, and the length of the longest row.
    """
    pattern = tokenizer(options.delimiter)
    if options.header:
        # the header row is skipped unread
        next(fd, None)

    rows = []
    width = 0
    for line in fd:
        line = line.strip()
        if line:
            row = split_row(line, pattern)
            width = max(width, len(row))
            rows.append(row)
    return rows, width


def allocate(shape, dtype, options):
    if options.container is not None:
        return options.container(shape, dtype=dtype)
    if options.sparse:
        return lil_array(shape, dtype=dtype)
    return np.zeros(shape, dtype=dtype)


#
# Read from delimited file
#

def readdlm(filename, dtype=float, delimiter=None, culture=INVARIANT,
            header=False, sparse=False, container=None):
    """Load a matrix from a delimited text file:

    m = readdlm(filename, dtype=float, delimiter=None, culture=INVARIANT,
                header=False, sparse=False, container=None)

    The filename argument is either a string with the filename, or
    a file like object (binary or text).

    Each non-blank line is a row of the matrix. Values are separated by any
    character of ``delimiter``, or by whitespace when no delimiter is given.
    Values in parentheses or quotes are read as one value, so complex
    numbers may be written as ``(1.5, -2)`` as well as ``1.5-2j``.
    Numbers are read with the punctuation of ``culture``. When ``header``
    is true, the first line of the file is skipped.

    Rows may have different lengths. The matrix gets as many columns as the
    longest row, and shorter rows are padded with zeros.

    The matrix is a ``numpy.ndarray``, or a ``scipy.sparse.csr_array`` if
    ``sparse`` is true. To get another type of matrix, give a ``container``
    callable that is called as ``container(shape, dtype=dtype)`` and
    returns an empty matrix supporting item assignment.

    Returns None if the file has no data rows.
    """
    options = ReadOptions(delimiter, culture, header, sparse, container)
    dtype = numeric_kind(dtype)['dtype']
    parse = token_parser(dtype, options.culture)

    with open_text(filename) as fd:
        rows, width = read_rows(fd, options)

    if not rows:
        return None

    m = allocate((len(rows), width), dtype, options)
    for i, row in enumerate(rows):
        for j, token in enumerate(row):
            m[i, j] = parse(strip_quotes(token))

    if options.container is None and options.sparse:
        m = m.tocsr()
    return m
