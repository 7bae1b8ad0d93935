"""save data in the NIST MatrixMarket format

Copyright (c) 2011-2023 Nephics AB
The MIT License (MIT)
"""

__all__ = ['savemtx']


import numpy as np
from scipy.sparse import coo_array, issparse

from .errors import InvalidArgumentError, UnsupportedTypeError
from .loadmtx import MARKER
from .numeric import check_formatter, number_formatter
from .textio import open_text


# MatrixMarket field types of numpy dtype kinds
dtype_fields = {
    'b': 'integer',
    'i': 'integer',
    'u': 'integer',
    'f': 'real',
    'c': 'complex'
}

objects = {
    1: 'vector',
    2: 'matrix'
}


#
# Utility functions
#

def guess_header(data):
    """Guess the header information of the data.
    Returns a header dict and the data as a numpy or scipy COO array.
    """
    if issparse(data):
        data = coo_array(data)
        fmt = 'coordinate'
    else:
        data = np.asarray(data)
        fmt = 'array'

    if data.ndim not in objects:
        raise InvalidArgumentError(
            'Only one and two dimensional arrays are supported, '
            'got {} dimensions'.format(data.ndim))
    if data.dtype.kind not in dtype_fields:
        raise UnsupportedTypeError(
            'Data type {} not supported'.format(data.dtype.name))

    header = {
        'object': objects[data.ndim],
        'format': fmt,
        'field': dtype_fields[data.dtype.kind],
        'symmetry': 'general',
        'shape': data.shape
    }
    return header, data


def write_header(fd, header, comment=None):
    fd.write('{} {} {} {} {}\n'.format(
        MARKER, header['object'], header['format'], header['field'],
        header['symmetry']))
    if comment:
        for line in comment.splitlines():
            fd.write('%{}\n'.format(line))


def value_tokens(header, fmt):
    """Return a function formatting a value as the tokens of a data line."""
    format_number = number_formatter(fmt)
    if header['field'] == 'complex':
        return lambda v: '{} {}'.format(format_number(v.real),
                                        format_number(v.imag))
    return format_number


def write_array(fd, header, data, tokens):
    fd.write(' '.join(str(n) for n in header['shape']) + '\n')
    # array data is stored in column-major order
    for value in data.ravel(order='F'):
        fd.write(tokens(value) + '\n')


def write_coordinate(fd, header, data, tokens):
    coords = data.coords
    fd.write('{} {}\n'.format(
        ' '.join(str(n) for n in header['shape']), data.nnz))
    # list the entries in row-major order
    order = np.lexsort(coords[::-1])
    for k in order:
        indices = ' '.join(str(c[k] + 1) for c in coords)
        fd.write('{} {}\n'.format(indices, tokens(data.data[k])))


#
# Write to MatrixMarket file
#

def savemtx(filename, data, fmt=None, comment=None):
    """Save a matrix or vector to a MatrixMarket file:

    savemtx(filename, data, fmt=None, comment=None)

    The filename argument is either a string with the filename, or
    a file like object (binary or text).

    Scipy sparse data is written in coordinate format, other data is
    converted with ``numpy.asarray`` and written in array format. One
    dimensional data is written as a vector, two dimensional as a matrix.

    Numbers are formatted with the format spec ``fmt`` (as for the builtin
    ``format``), by default the shortest text that reads back to the same
    value. The optional ``comment`` is written as comment lines after the
    header.

    An ``InvalidArgumentError`` exception is raised if the filename or
    data is missing, if the data has more than two dimensions, or if
    ``fmt`` does not apply to its values. Nothing is written then.
    """
    if data is None:
        raise InvalidArgumentError('Data to save is missing')
    if filename is None:
        raise InvalidArgumentError('Filename or file object is missing')

    header, data = guess_header(data)
    tokens = value_tokens(header, fmt)
    check_formatter(tokens, data.dtype)

    with open_text(filename, 'w') as fd:
        write_header(fd, header, comment)
        if header['format'] == 'coordinate':
            write_coordinate(fd, header, data, tokens)
        else:
            write_array(fd, header, data, tokens)
