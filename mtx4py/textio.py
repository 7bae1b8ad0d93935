"""text stream handling shared by the readers and writers

Copyright (c) 2011-2023 Nephics AB
The MIT License (MIT)
"""

__all__ = ['open_text']


import io
import os
from contextlib import contextmanager


@contextmanager
def open_text(file, mode='r'):
    """Open ``file`` as a text stream for the duration of a with block.

    The file argument is either a filename, a binary file like object, or
    a text file like object. Files opened by name are closed on exit.
    File objects are left open; binary ones are read and written through
    a utf-8 text wrapper that is detached on exit.

    Text written to files opened here is not newline translated.
    """
    writing = 'w' in mode or 'a' in mode
    newline = '' if writing else None
    # a leading byte order mark is dropped when reading
    encoding = 'utf-8' if writing else 'utf-8-sig'

    if isinstance(file, (str, bytes, os.PathLike)):
        with open(file, mode, encoding=encoding, newline=newline) as fd:
            yield fd
    elif isinstance(file, io.TextIOBase):
        yield file
    else:
        fd = io.TextIOWrapper(file, encoding=encoding, newline=newline)
        try:
            yield fd
        finally:
            if writing:
                fd.flush()
            fd.detach()
