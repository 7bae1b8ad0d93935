"""numeric types, number parsing and number formatting

Copyright (c) 2011-2023 Nephics AB
The MIT License (MIT)
"""

__all__ = ['kinds', 'Culture', 'INVARIANT', 'cultures', 'get_culture',
           'numeric_kind', 'parse_number', 'parse_complex', 'value_parser',
           'token_parser', 'number_formatter', 'value_formatter',
           'check_formatter']


from collections import namedtuple

import numpy as np

from .errors import (InvalidArgumentError, NumberParseError,
                     UnsupportedTypeError)


# numeric types that can be read, keyed by numpy dtype name
kinds = {
    'float64': {'dtype': np.float64, 'is_complex': False},
    'float32': {'dtype': np.float32, 'is_complex': False},
    'complex128': {'dtype': np.complex128, 'is_complex': True},
    'complex64': {'dtype': np.complex64, 'is_complex': True}
}

# numeric punctuation: decimal point, digit group separator, and the
# separator between the parts of a "(re, im)" complex tuple
Culture = namedtuple('Culture', ['decimal', 'group', 'list_separator'])

INVARIANT = Culture('.', '', ',')

cultures = {
    'invariant': INVARIANT,
    'en-us': Culture('.', ',', ','),
    'en-gb': Culture('.', ',', ','),
    'de-de': Culture(',', '.', ';'),
    'da-dk': Culture(',', '.', ';'),
    'nl-nl': Culture(',', '.', ';'),
    'fr-fr': Culture(',', '\u202f', ';'),
    'sv-se': Culture(',', '\u00a0', ';'),
    'de-ch': Culture('.', '\u2019', ';')
}


def get_culture(name):
    """Return the culture with the given name, e.g. 'de-DE'."""
    try:
        return cultures[name.lower().replace('_', '-')]
    except KeyError:
        raise InvalidArgumentError('Unknown culture "{}", expected one of: '
                                   '{}'.format(name, ', '.join(cultures)))


def numeric_kind(dtype):
    """Look up the numeric kind of a numpy dtype (or anything accepted by
    ``numpy.dtype``). Raises ``UnsupportedTypeError`` for types that
    cannot be read.
    """
    try:
        name = np.dtype(dtype).name
    except TypeError as e:
        raise UnsupportedTypeError(
            'Not a numeric data type: {!r}'.format(dtype)) from e
    if name not in kinds:
        raise UnsupportedTypeError(
            'Data type {} not supported, expected one of: {}'.format(
                name, ', '.join(kinds)))
    return kinds[name]


#
# Parsing
#

def delocalize(text, culture):
    """Rewrite a localized number with invariant punctuation."""
    if culture.group:
        text = text.replace(culture.group, '')
    if culture.decimal != '.':
        text = text.replace(culture.decimal, '.')
    return text


def parse_number(token, culture=INVARIANT):
    text = token.strip()
    if culture != INVARIANT:
        text = delocalize(text, culture)
    try:
        return float(text)
    except ValueError as e:
        raise NumberParseError('Invalid number: {!r}'.format(token)) from e


def parse_complex(token, culture=INVARIANT):
    """Parse a complex number written as a real number, as a literal like
    ``1.5-2j`` or ``1.5-2i``, or as a tuple ``(1.5, -2)``.
    """
    text = token.strip()
    if text.startswith('(') and text.endswith(')'):
        inner = text[1:-1]
        if culture.list_separator in inner:
            re_part, im_part = inner.split(culture.list_separator, 1)
            return complex(parse_number(re_part, culture),
                           parse_number(im_part, culture))
        text = inner
    text = delocalize(text, culture).replace(' ', '')
    if text.endswith(('i', 'I')):
        text = text[:-1] + 'j'
    try:
        return complex(text)
    except ValueError as e:
        raise NumberParseError(
            'Invalid complex number: {!r}'.format(token)) from e


def value_parser(dtype, source_is_complex, culture=INVARIANT):
    """Return a function ``parse(offset, tokens)`` reading one value of
    the given dtype from a row of tokens.

    A complex source stores the imaginary part in the token following the
    real part. Real types ignore that token; complex types read from a real
    source get a zero imaginary part.
    """
    kind = numeric_kind(dtype)
    scalar = kind['dtype']

    if not kind['is_complex']:
        def parse(offset, tokens):
            return scalar(parse_number(tokens[offset], culture))
    elif source_is_complex:
        def parse(offset, tokens):
            return scalar(complex(parse_number(tokens[offset], culture),
                                  parse_number(tokens[offset + 1], culture)))
    else:
        def parse(offset, tokens):
            return scalar(complex(parse_number(tokens[offset], culture), 0.0))
    return parse


def token_parser(dtype, culture=INVARIANT):
    """Return a function parsing a single token to the given dtype."""
    kind = numeric_kind(dtype)
    scalar = kind['dtype']
    if kind['is_complex']:
        return lambda token: scalar(parse_complex(token, culture))
    return lambda token: scalar(parse_number(token, culture))


#
# Formatting
#

def number_formatter(fmt=None, culture=INVARIANT):
    """Return a function formatting a real number with the format spec
    ``fmt`` (as for the builtin ``format``) and the culture's punctuation.
    """
    spec = fmt or ''
    table = str.maketrans({'.': culture.decimal, ',': culture.group})

    def format_number(value):
        if isinstance(value, (int, np.integer, np.bool_)):
            text = format(int(value), spec)
        elif not spec and isinstance(value, (np.float32, np.float16)):
            # shortest text reading back to the same single precision value
            text = str(value)
        else:
            text = format(float(value), spec)
        return text.translate(table)
    return format_number


def value_formatter(dtype, fmt=None, culture=INVARIANT):
    """Return a function formatting values of the given dtype. Complex
    values are written as ``re+imj``.
    """
    dtype = np.dtype(dtype)
    format_number = number_formatter(fmt, culture)
    if dtype.kind in 'biuf':
        return format_number
    if dtype.kind != 'c':
        raise UnsupportedTypeError(
            'Cannot format values of data type {}'.format(dtype.name))

    def format_complex(value):
        im_text = format_number(value.imag)
        if not im_text.startswith(('-', '+')):
            im_text = '+' + im_text
        return '{}{}j'.format(format_number(value.real), im_text)
    return format_complex


def check_formatter(format_value, dtype):
    """Format a zero of the given dtype, and raise an InvalidArgumentError
    if the format spec does not apply to values of that type.
    """
    try:
        format_value(np.dtype(dtype).type(0))
    except (ValueError, TypeError) as e:
        raise InvalidArgumentError(
            'Invalid number format: {}'.format(e)) from e
