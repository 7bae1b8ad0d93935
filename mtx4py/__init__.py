"""mtx4py - load and save matrices in MatrixMarket and delimited text formats

This module provides functions for loading and saving numeric matrices
and vectors in the NIST MatrixMarket format:

    m = loadmtx(filename, dtype=float)

    v = loadmtx_vector(filename, dtype=float)

    savemtx(filename, data)

and in delimited text formats, like CSV and TSV files:

    m = readdlm(filename, dtype=float, delimiter=None, header=False)

    writedlm(filename, matrix, delimiter=',', fmt=None, columns=None)

Matrices are loaded as numpy arrays, or as scipy sparse arrays for
MatrixMarket files in coordinate format (and for delimited files, when
asked for). Values are read as one of the numpy types float64, float32,
complex128 or complex64, selected by the ``dtype`` argument.

Numbers in delimited files may be written with the punctuation of a
culture, e.g. ``get_culture('de-DE')`` for a decimal comma. MatrixMarket
files always use a decimal point.

The following MatrixMarket features are not supported:

* Symmetric, skew-symmetric and Hermitian matrices
* Pattern matrices (without values)

"""
from .errors import (InvalidArgumentError, MalformedHeaderError,
                     MissingHeaderError, Mtx4pyError, NumberParseError,
                     ParseError, UnexpectedEofError, UnsupportedFieldError,
                     UnsupportedFormatError, UnsupportedSymmetryError,
                     UnsupportedTypeError, WrongObjectKindError)
from .numeric import INVARIANT, Culture, get_culture, kinds
from .loadmtx import loadmtx, loadmtx_vector, mminfo
from .savemtx import savemtx
from .readdlm import readdlm
from .writedlm import writedlm

__version__ = '0.1.0'
__all__ = ['loadmtx', 'loadmtx_vector', 'mminfo', 'savemtx', 'readdlm',
           'writedlm', 'Culture', 'INVARIANT', 'get_culture', 'kinds',
           'Mtx4pyError', 'ParseError', 'MissingHeaderError',
           'MalformedHeaderError', 'WrongObjectKindError',
           'UnsupportedSymmetryError', 'UnsupportedFieldError',
           'UnsupportedFormatError', 'UnexpectedEofError',
           'NumberParseError', 'UnsupportedTypeError',
           'InvalidArgumentError']
__license__ = """The MIT License (MIT), Copyright (c) 2011-2023 Nephics AB"""
