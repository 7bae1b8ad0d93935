"""load data in the NIST MatrixMarket format

Copyright (c) 2011-2023 Nephics AB
The MIT License (MIT)
"""

__all__ = ['loadmtx', 'loadmtx_vector', 'mminfo']


import numpy as np
from scipy.sparse import coo_array

from .errors import (MalformedHeaderError, MissingHeaderError,
                     NumberParseError, ParseError, UnexpectedEofError,
                     UnsupportedFieldError, UnsupportedFormatError,
                     UnsupportedSymmetryError, WrongObjectKindError)
from .numeric import numeric_kind, value_parser
from .textio import open_text


MARKER = '%%MatrixMarket'

HEADER_HELP = 'see http://math.nist.gov/MatrixMarket/ for details'

# field types, mapped to whether the values are complex
fields = {
    'real': False,
    'double': False,
    'integer': False,
    'complex': True
}

# body formats, mapped to whether the body is sparse
formats = {
    'array': False,
    'coordinate': True
}

# number of dimensions of each object type
objects = {
    'matrix': 2,
    'vector': 1
}


#
# Utility functions
#

def read_header(fd, obj=None):
    """Read lines of the file fd up to and including the MatrixMarket
    header line. Returns a dict with the header values.

    If obj is given, the header must describe an object of that type.
    """
    for line in fd:
        line = line.strip()
        if not line.startswith(MARKER):
            continue
        tokens = line[len(MARKER):].lower().split()
        if len(tokens) != 4:
            raise MalformedHeaderError(
                'Expected MatrixMarket header with 4 attributes: object, '
                'format, field, symmetry; ' + HEADER_HELP)
        header = dict(zip(('object', 'format', 'field', 'symmetry'), tokens))

        if obj is not None and header['object'] != obj:
            raise WrongObjectKindError('Expected {} content, got {}'.format(
                obj, header['object']))
        if header['object'] not in objects:
            raise WrongObjectKindError(
                'Unknown object type: {}'.format(header['object']))
        # general | symmetric | skew-symmetric | hermitian
        if header['symmetry'] != 'general':
            raise UnsupportedSymmetryError(
                'Expected {} in general format, got {}'.format(
                    header['object'], header['symmetry']))
        if header['field'] not in fields:
            raise UnsupportedFieldError(
                'Field type not supported: {}'.format(header['field']))
        if header['format'] not in formats:
            raise UnsupportedFormatError(
                'Format type not supported: {}'.format(header['format']))

        header['is_complex'] = fields[header['field']]
        header['is_sparse'] = formats[header['format']]
        return header

    raise MissingHeaderError('Expected MatrixMarket header, ' + HEADER_HELP)


def read_lines(fd):
    """Generate the data lines of the file fd, skipping blank and
    comment lines.
    """
    for line in fd:
        line = line.strip()
        if line and not line.startswith('%'):
            yield line


def expect_line(lines):
    line = next(lines, None)
    if line is None:
        raise UnexpectedEofError('End of file reached unexpectedly.')
    return line


def parse_index(token):
    try:
        return int(token)
    except ValueError as e:
        raise NumberParseError('Invalid integer: {!r}'.format(token)) from e


def read_size(lines, header):
    """Read the dimension line. Sets the 'shape' of the header, and 'nnz'
    when the line declares the number of coordinate entries.
    """
    ndim = objects[header['object']]
    line = expect_line(lines)
    tokens = line.split()
    if len(tokens) < ndim:
        raise ParseError('Expected {} dimension(s), got {!r}'.format(
            ndim, line))
    shape = tuple(parse_index(t) for t in tokens[:ndim])
    if any(n < 0 for n in shape):
        raise ParseError('Invalid dimensions: {!r}'.format(line))
    header['shape'] = shape
    if header['is_sparse'] and len(tokens) > ndim:
        header['nnz'] = parse_index(tokens[ndim])
    return shape


def array_values(lines, parse):
    """Generate the values of an array body, in column-major order."""
    for line in lines:
        tokens = line.split()
        try:
            yield parse(0, tokens)
        except IndexError:
            raise ParseError('Too few values on line: {!r}'.format(line))


def coordinate_entries(lines, parse, ndim):
    """Generate (indices, value) tuples of a coordinate body, with the
    indices converted to 0-based.
    """
    for line in lines:
        tokens = line.split()
        if len(tokens) <= ndim:
            raise ParseError('Too few values on line: {!r}'.format(line))
        indices = tuple(parse_index(t) - 1 for t in tokens[:ndim])
        try:
            yield indices, parse(ndim, tokens)
        except IndexError:
            raise ParseError('Too few values on line: {!r}'.format(line))


def read_array(lines, shape, dtype, parse):
    """Read a dense array body. Returns a numpy array of the given shape.

    The body must hold exactly one value per element.
    """
    count = 1
    for n in shape:
        count *= n
    data = np.fromiter(array_values(lines, parse), dtype=dtype, count=count)
    line = next(lines, None)
    if line is not None:
        raise ParseError('Expected {} values, got more: {!r}'.format(
            count, line))
    return data.reshape(shape, order='F')


def read_coordinate(lines, shape, dtype, parse):
    """Read a sparse coordinate body. Returns a scipy sparse COO array."""
    ndim = len(shape)
    coords = [[] for i in range(ndim)]
    data = []
    for indices, value in coordinate_entries(lines, parse, ndim):
        for axis, index in enumerate(indices):
            coords[axis].append(index)
        data.append(value)
    return coo_array(
        (np.array(data, dtype=dtype),
         tuple(np.array(c, dtype=np.int64) for c in coords)),
        shape=shape)


def read_object(filename, obj, dtype):
    dtype = numeric_kind(dtype)['dtype']
    with open_text(filename) as fd:
        header = read_header(fd, obj)
        parse = value_parser(dtype, header['is_complex'])
        lines = read_lines(fd)
        shape = read_size(lines, header)
        if header['is_sparse']:
            return read_coordinate(lines, shape, dtype, parse)
        return read_array(lines, shape, dtype, parse)


#
# Read from MatrixMarket file
#

def loadmtx(filename, dtype=float):
    """Load a matrix from a MatrixMarket file:

    m = loadmtx(filename, dtype=float)

    The filename argument is either a string with the filename, or
    a file like object (binary or text).

    The ``dtype`` selects the type of the returned values, and is one of
    float64, float32, complex128 or complex64. Complex values in the file
    are truncated to their real part when read as a real type, and real
    values get a zero imaginary part when read as a complex type.

    Coordinate (sparse) files are returned as a ``scipy.sparse.csr_array``,
    array (dense) files as a two dimensional ``numpy.ndarray``.

    A ``ParseError`` exception is raised if the file is not a general
    MatrixMarket matrix or has malformed content.
    """
    m = read_object(filename, 'matrix', dtype)
    if isinstance(m, coo_array):
        m = m.tocsr()
    return m


def loadmtx_vector(filename, dtype=float):
    """Load a vector from a MatrixMarket file:

    v = loadmtx_vector(filename, dtype=float)

    Works as ``loadmtx``, but for files with vector content. Coordinate
    files are returned as a one dimensional ``scipy.sparse.coo_array``,
    array files as a one dimensional ``numpy.ndarray``.
    """
    return read_object(filename, 'vector', dtype)


def mminfo(filename):
    """Read the header and dimension line of a MatrixMarket file.

    Returns a dict with the keys 'object', 'format', 'field', 'symmetry',
    'is_complex', 'is_sparse' and 'shape', and 'nnz' for coordinate files
    that declare the number of entries.
    """
    with open_text(filename) as fd:
        header = read_header(fd)
        read_size(read_lines(fd), header)
    return header
