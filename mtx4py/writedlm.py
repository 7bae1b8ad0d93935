"""save matrices to delimited text files, like CSV or TSV files

Copyright (c) 2011-2023 Nephics AB
The MIT License (MIT)
"""

__all__ = ['writedlm', 'WriteOptions']


import os
from collections import namedtuple

import numpy as np
from scipy.sparse import issparse

from .errors import InvalidArgumentError
from .numeric import INVARIANT, check_formatter, value_formatter
from .textio import open_text


WriteOptions = namedtuple(
    'WriteOptions', ['delimiter', 'fmt', 'culture', 'columns'])


def matrix_rows(matrix):
    """Return the dtype of the matrix, and an iterator over its rows as
    one dimensional numpy arrays.
    """
    if issparse(matrix):
        if matrix.ndim != 2:
            raise InvalidArgumentError('Expected a two dimensional matrix')
        csr = matrix.tocsr()
        rows = (csr[i:i + 1].toarray()[0] for i in range(csr.shape[0]))
        return csr.dtype, rows
    matrix = np.asarray(matrix)
    if matrix.ndim != 2:
        raise InvalidArgumentError('Expected a two dimensional matrix')
    return matrix.dtype, iter(matrix)


def write_rows(fd, rows, format_value, options):
    delimiter = options.delimiter
    if options.columns:
        fd.write(delimiter.join(str(c) for c in options.columns))
        fd.write(os.linesep)

    for i, row in enumerate(rows):
        if i:
            fd.write(os.linesep)
        fd.write(delimiter.join(format_value(v) for v in row))


#
# Write to delimited file
#

def writedlm(filename, matrix, delimiter=',', fmt=None, culture=INVARIANT,
             columns=None):
    """Save a matrix to a delimited text file:

    writedlm(filename, matrix, delimiter=',', fmt=None, culture=INVARIANT,
             columns=None)

    The filename argument is either a string with the filename, or
    a file like object (binary or text).

    The matrix is a two dimensional numpy array (or anything
    ``numpy.asarray`` accepts), or a scipy sparse matrix. Each row is
    written on a line, with the values separated by ``delimiter``. Values
    are formatted with the format spec ``fmt`` (as for the builtin
    ``format``) and the punctuation of ``culture``. If ``columns`` is
    given, it is written as a header line before the rows.

    Lines are separated by ``os.linesep``. No line separator is written
    after the last row.

    An ``InvalidArgumentError`` exception is raised, before anything is
    written, if the filename or matrix is missing, if the matrix is not
    two dimensional, or if ``fmt`` does not apply to its values.
    """
    if matrix is None:
        raise InvalidArgumentError('Matrix to save is missing')
    if filename is None:
        raise InvalidArgumentError('Filename or file object is missing')

    options = WriteOptions(delimiter, fmt, culture, columns)
    dtype, rows = matrix_rows(matrix)
    format_value = value_formatter(dtype, options.fmt, options.culture)
    check_formatter(format_value, dtype)

    with open_text(filename, 'w') as fd:
        write_rows(fd, rows, format_value, options)
