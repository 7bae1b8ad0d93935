"""exceptions raised by mtx4py

Copyright (c) 2011-2023 Nephics AB
The MIT License (MIT)
"""

__all__ = [
    'Mtx4pyError', 'ParseError', 'MissingHeaderError', 'MalformedHeaderError',
    'WrongObjectKindError', 'UnsupportedSymmetryError',
    'UnsupportedFieldError', 'UnsupportedFormatError', 'UnexpectedEofError',
    'NumberParseError', 'UnsupportedTypeError', 'InvalidArgumentError'
]


class Mtx4pyError(Exception):
    pass


class ParseError(Mtx4pyError, ValueError):
    """The input text could not be parsed."""
    pass


#
# MatrixMarket header errors
#

class MissingHeaderError(ParseError):
    pass


class MalformedHeaderError(ParseError):
    pass


class WrongObjectKindError(ParseError):
    pass


class UnsupportedSymmetryError(ParseError):
    pass


class UnsupportedFieldError(ParseError):
    pass


class UnsupportedFormatError(ParseError):
    pass


class UnexpectedEofError(ParseError):
    pass


class NumberParseError(ParseError):
    """A token is not a valid number literal."""
    pass


class UnsupportedTypeError(Mtx4pyError, TypeError):
    """No parser or formatter exists for the requested numeric type."""
    pass


class InvalidArgumentError(Mtx4pyError, ValueError):
    pass
