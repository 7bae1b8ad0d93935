"""Command line utility for mtx4py.

Provides a routine for converting MatrixMarket files to/from delimited
text files.

Call

    python -m mtx4py.cmd -h

to get help with command line usage.
"""

import argparse
import os
import sys

import numpy as np
from scipy.sparse import issparse

from mtx4py import (Mtx4pyError, get_culture, kinds, loadmtx, loadmtx_vector,
                    mminfo, readdlm, savemtx, writedlm)


# default delimiters of delimited text files, by file extension
delimiters = {
    '.csv': ',',
    '.tsv': '\t',
    '.txt': None
}


def parse_delimiter(text):
    if text in ('\\t', 'tab'):
        return '\t'
    return text


def mtx_to_text(path, dest, args):
    info = mminfo(path)
    if info['object'] == 'vector':
        # vectors are written as a single column
        v = loadmtx_vector(path, dtype=args.dtype)
        m = (v.toarray() if issparse(v) else v).reshape(-1, 1)
    else:
        m = loadmtx(path, dtype=args.dtype)
    delimiter = args.delimiter
    if delimiter is None:
        delimiter = delimiters.get(os.path.splitext(dest)[1]) or ','
    writedlm(dest, m, delimiter=delimiter, fmt=args.fmt,
             culture=get_culture(args.culture))


def text_to_mtx(path, dest, args):
    ext = os.path.splitext(path)[1].lower()
    delimiter = args.delimiter
    if delimiter is None:
        delimiter = delimiters[ext]
    m = readdlm(path, dtype=args.dtype, delimiter=delimiter,
                culture=get_culture(args.culture), header=args.header,
                sparse=args.sparse)
    if m is None:
        m = np.zeros((0, 0), dtype=args.dtype)
    savemtx(dest, m, fmt=args.fmt)


def main(argv=None):
    #
    # get arguments and invoke the conversion routines
    #

    parser = argparse.ArgumentParser(
        prog='python -m mtx4py.cmd',
        description='Convert MatrixMarket files to delimited text files, '
        'and the other way around.')

    parser.add_argument(
        'file', nargs='+',
        help='path to a MatrixMarket file (.mtx) or a delimited text file '
        '(.csv, .tsv, .txt)')
    parser.add_argument(
        '-d', '--delimiter', type=parse_delimiter, default=None,
        help='value delimiter of the text files (default: "," for .csv, '
        'tab for .tsv, whitespace when reading .txt)')
    parser.add_argument(
        '-t', '--tsv', action='store_const', const=True, default=False,
        help='write tab separated .tsv files instead of .csv files')
    parser.add_argument(
        '--header', action='store_const', const=True, default=False,
        help='skip the first line of delimited text files')
    parser.add_argument(
        '--culture', default='invariant',
        help='culture of the numbers in delimited text files, e.g. de-DE '
        '(default: invariant)')
    parser.add_argument(
        '--dtype', default='float64', choices=sorted(kinds),
        help='numeric type of the values (default: float64)')
    parser.add_argument(
        '--sparse', action='store_const', const=True, default=False,
        help='write MatrixMarket files in coordinate (sparse) format')
    parser.add_argument(
        '--fmt', default=None,
        help='format spec of the written numbers, e.g. .6g')
    parser.add_argument(
        '--remove-input', action='store_const', const=True,
        default=False, help='remove input file after conversion')
    parser.add_argument(
        '-f', '--force', action='store_const', const=True,
        default=False, help='overwrite existing files when converting')
    args = parser.parse_args(argv)

    for path in args.file:
        spl = os.path.splitext(path)
        ext = spl[1].lower()

        if ext == '.mtx':
            dest = spl[0] + ('.tsv' if args.tsv else '.csv')
            convert = mtx_to_text
        elif ext in delimiters:
            dest = spl[0] + '.mtx'
            convert = text_to_mtx
        else:
            print('Unsupported file extension on file: {}'.format(path))
            sys.exit(1)

        try:
            if os.path.exists(dest) and not args.force:
                raise FileExistsError('File {} already exists.'.format(dest))
            convert(path, dest, args)
            if args.remove_input:
                os.remove(path)
        except (Mtx4pyError, OSError, ValueError) as e:
            print('Error: {}'.format(e))
            sys.exit(1)


if __name__ == '__main__':
    main()
