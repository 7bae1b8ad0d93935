import contextlib
import io
import json
import os
import tempfile
import unittest
from unittest import mock

import numpy as np
from scipy.sparse import coo_array, csr_array, dok_array, issparse

import mtx4py
from mtx4py import cmd
from mtx4py.readdlm import tokenizer


DATA = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')

with open(os.path.join(DATA, 'test_data.json')) as fp:
    test_data = json.load(fp)


def data_path(filename):
    return os.path.join(DATA, filename)


def dense(m):
    """Return the matrix as nested lists."""
    if issparse(m):
        m = m.toarray()
    return np.asarray(m).tolist()


def mtx(text):
    return io.StringIO(text)


class TestLoadMtx(unittest.TestCase):

    def test_loadmtx1(self):
        """Test reading MatrixMarket files"""
        for filename, result in test_data['loadmtx'].items():
            with self.subTest(msg=filename):
                m = mtx4py.loadmtx(data_path(filename))
                self.assertEqual(m.dtype, np.float64)
                self.assertEqual(dense(m), result)

    def test_loadmtx2(self):
        """Test reading MatrixMarket files using a fileobject"""
        for filename, result in test_data['loadmtx'].items():
            with self.subTest(msg=filename):
                with open(data_path(filename), 'rb') as fileobj:
                    m = mtx4py.loadmtx(fileobj)
                    self.assertFalse(fileobj.closed)
                self.assertEqual(dense(m), result)
                with open(data_path(filename)) as fileobj:
                    m = mtx4py.loadmtx(fileobj)
                    self.assertFalse(fileobj.closed)
                self.assertEqual(dense(m), result)

    def test_loadmtx_vector(self):
        """Test reading MatrixMarket vector files"""
        for filename, result in test_data['loadmtx_vector'].items():
            with self.subTest(msg=filename):
                v = mtx4py.loadmtx_vector(data_path(filename))
                self.assertEqual(v.shape, (len(result),))
                self.assertEqual(dense(v), result)

    def test_container_types(self):
        m = mtx4py.loadmtx(data_path('coordinate_real.mtx'))
        self.assertIsInstance(m, csr_array)
        m = mtx4py.loadmtx(data_path('array_real.mtx'))
        self.assertIsInstance(m, np.ndarray)
        v = mtx4py.loadmtx_vector(data_path('vector_coordinate.mtx'))
        self.assertIsInstance(v, coo_array)
        v = mtx4py.loadmtx_vector(data_path('vector_array.mtx'))
        self.assertIsInstance(v, np.ndarray)

    def test_fidap007_double(self):
        m = mtx4py.loadmtx(data_path('fidap007_excerpt.mtx'))
        self.assertEqual(m.shape, (1633, 1633))
        self.assertEqual(m.dtype, np.float64)
        self.assertEqual(m.nnz, 4)
        self.assertEqual(m[1604, 1631], -6.8596032449032e+06)
        self.assertEqual(m[1616, 1628], -9.1914585107976e+06)
        self.assertEqual(m[905, 726], 7.9403870156486e+07)
        self.assertEqual(m[0, 0], 1.0)

    def test_fidap007_single(self):
        m = mtx4py.loadmtx(data_path('fidap007_excerpt.mtx'), np.float32)
        self.assertEqual(m.shape, (1633, 1633))
        self.assertEqual(m.dtype, np.float32)
        self.assertEqual(m[1604, 1631], np.float32(-6.8596032449032e+06))
        self.assertEqual(m[1616, 1628], np.float32(-9.1914585107976e+06))
        self.assertEqual(m[905, 726], np.float32(7.9403870156486e+07))

    def test_fidap007_complex(self):
        for dtype, part in [(np.complex128, np.float64),
                            (np.complex64, np.float32)]:
            with self.subTest(msg=np.dtype(dtype).name):
                m = mtx4py.loadmtx(data_path('fidap007_excerpt.mtx'), dtype)
                self.assertEqual(m.dtype, dtype)
                for (i, j), value in [((1604, 1631), -6.8596032449032e+06),
                                      ((1616, 1628), -9.1914585107976e+06),
                                      ((905, 726), 7.9403870156486e+07)]:
                    self.assertEqual(m[i, j].real, part(value))
                    self.assertEqual(m[i, j].imag, 0.0)

    def test_complex_source(self):
        m = mtx4py.loadmtx(data_path('coordinate_complex.mtx'), complex)
        self.assertEqual(dense(m), [[1 + 2j, 0j], [0j, -3.5 + 0.25j]])
        m = mtx4py.loadmtx(data_path('array_complex.mtx'), 'complex64')
        self.assertEqual(m.dtype, np.complex64)
        self.assertEqual(dense(m), [[1 - 1j], [2 + 0.5j]])

    def test_complex_to_real(self):
        """Imaginary parts are ignored when reading real values"""
        m = mtx4py.loadmtx(data_path('coordinate_complex.mtx'))
        self.assertEqual(dense(m), [[1.0, 0.0], [0.0, -3.5]])
        m = mtx4py.loadmtx(data_path('array_complex.mtx'), 'float32')
        self.assertEqual(dense(m), [[1.0], [2.0]])

    def test_real_to_complex(self):
        m = mtx4py.loadmtx(data_path('array_real.mtx'), complex)
        self.assertTrue(np.all(m.imag == 0.0))
        self.assertEqual(dense(m.real), test_data['loadmtx']['array_real.mtx'])

    def test_complex_vector(self):
        v = mtx4py.loadmtx_vector(mtx(
            '%%MatrixMarket vector coordinate complex general\n'
            '3 1\n'
            '3 1.5 -2\n'), complex)
        self.assertEqual(dense(v), [0j, 0j, 1.5 - 2j])

    def test_preamble_and_comments(self):
        m = mtx4py.loadmtx(mtx(
            'written by some tool\n'
            '\n'
            '%%MatrixMarket matrix array real general\n'
            '% comment\n'
            '\n'
            '   2 1  \n'
            '% comment\n'
            '  5  \n'
            '\n'
            '-6e-1\n'))
        self.assertEqual(dense(m), [[5.0], [-0.6]])

    def test_empty_matrix(self):
        m = mtx4py.loadmtx(mtx('%%MatrixMarket matrix coordinate real general\n'
                               '0 0 0\n'))
        self.assertEqual(m.shape, (0, 0))

    def test_header_errors(self):
        cases = [
            ('', mtx4py.MissingHeaderError),
            ('1 1\n1.0\n', mtx4py.MissingHeaderError),
            ('%%MatrixMarket matrix array real\n1 1\n1\n',
             mtx4py.MalformedHeaderError),
            ('%%MatrixMarket matrix array real general extra\n1 1\n1\n',
             mtx4py.MalformedHeaderError),
            ('%%MatrixMarket vector array real general\n1\n1\n',
             mtx4py.WrongObjectKindError),
            ('%%MatrixMarket matrix coordinate pattern general\n1 1 1\n1 1\n',
             mtx4py.UnsupportedFieldError),
            ('%%MatrixMarket matrix elemental real general\n1 1\n1\n',
             mtx4py.UnsupportedFormatError),
            ('%%MatrixMarket matrix array real general\n',
             mtx4py.UnexpectedEofError),
            ('%%MatrixMarket matrix array real general\n% only\n\n%\n',
             mtx4py.UnexpectedEofError),
        ]
        for text, error in cases:
            with self.subTest(msg=text):
                with self.assertRaises(error):
                    mtx4py.loadmtx(mtx(text))
        with self.assertRaises(mtx4py.WrongObjectKindError):
            mtx4py.loadmtx_vector(mtx(
                '%%MatrixMarket matrix array real general\n1 1\n1\n'))

    def test_header_errors_are_parse_errors(self):
        with self.assertRaises(mtx4py.ParseError):
            mtx4py.loadmtx(mtx(''))
        with self.assertRaises(ValueError):
            mtx4py.loadmtx(mtx(''))

    def test_symmetry(self):
        """Only general symmetry is supported"""
        for symmetry in ['symmetric', 'skew-symmetric', 'hermitian',
                         'Symmetric']:
            for fmt in ['array', 'coordinate']:
                for field in ['real', 'double', 'integer', 'complex']:
                    text = ('%%MatrixMarket matrix {} {} {}\n'
                            '2 2\n'.format(fmt, field, symmetry))
                    with self.subTest(msg=text):
                        with self.assertRaises(
                                mtx4py.UnsupportedSymmetryError):
                            mtx4py.loadmtx(mtx(text))
                    text = text.replace('matrix', 'vector')
                    with self.subTest(msg=text):
                        with self.assertRaises(
                                mtx4py.UnsupportedSymmetryError):
                            mtx4py.loadmtx_vector(mtx(text))

    def test_number_errors(self):
        cases = [
            '%%MatrixMarket matrix array real general\n1 1\nabc\n',
            '%%MatrixMarket matrix array real general\n1 x\n1\n',
            '%%MatrixMarket matrix coordinate real general\n2 2 1\n1 b 1\n',
            '%%MatrixMarket matrix coordinate real general\n2 2 1\n1 1 1,5\n',
        ]
        for text in cases:
            with self.subTest(msg=text):
                with self.assertRaises(mtx4py.NumberParseError):
                    mtx4py.loadmtx(mtx(text))

    def test_too_few_values(self):
        with self.assertRaises(mtx4py.ParseError):
            mtx4py.loadmtx(mtx(
                '%%MatrixMarket matrix coordinate real general\n2 2 1\n1 1\n'))
        with self.assertRaises(mtx4py.ParseError):
            mtx4py.loadmtx(mtx(
                '%%MatrixMarket matrix array complex general\n1 1\n1.0\n'),
                complex)
        with self.assertRaises(mtx4py.ParseError):
            mtx4py.loadmtx(mtx(
                '%%MatrixMarket matrix array real general\n3\n1.0\n'))

    def test_missing_values(self):
        with self.assertRaises(ValueError):
            mtx4py.loadmtx(mtx(
                '%%MatrixMarket matrix array real general\n2 2\n1\n2\n3\n'))

    def test_too_many_values(self):
        """Dense bodies must hold exactly one value per element"""
        cases = [
            ('%%MatrixMarket vector array real general\n2\n1\n2\n3\n',
             mtx4py.loadmtx_vector),
            ('%%MatrixMarket matrix array real general\n1 2\n1\n2\n% c\n3\n',
             mtx4py.loadmtx),
        ]
        for text, load in cases:
            with self.subTest(msg=text):
                with self.assertRaises(mtx4py.ParseError):
                    load(mtx(text))
        v = mtx4py.loadmtx_vector(mtx(
            '%%MatrixMarket vector array real general\n2\n1\n2\n% end\n\n'))
        self.assertEqual(v.tolist(), [1.0, 2.0])

    def test_byte_order_mark(self):
        m = mtx4py.loadmtx(data_path('bom_array.mtx'))
        self.assertEqual(dense(m), [[2.5], [-1.0]])
        with open(data_path('bom_array.mtx'), 'rb') as fp:
            m = mtx4py.loadmtx(fp)
        self.assertEqual(dense(m), [[2.5], [-1.0]])
        self.assertEqual(mtx4py.mminfo(data_path('bom_array.mtx'))['shape'],
                         (2, 1))

    def test_file_closed_on_error(self):
        """Files opened by name are closed when parsing fails"""
        opened = []

        def tracked_open(*args, **kwargs):
            fd = open(*args, **kwargs)
            opened.append(fd)
            return fd

        with tempfile.TemporaryDirectory() as tempdir:
            path = os.path.join(tempdir, 'bad.mtx')
            with open(path, 'w') as fp:
                fp.write('%%MatrixMarket matrix array real general\n'
                         '2 1\n1.0\nabc\n')
            csvpath = os.path.join(tempdir, 'bad.csv')
            with open(csvpath, 'w') as fp:
                fp.write('1,2\n3,x\n')

            with mock.patch('mtx4py.textio.open', side_effect=tracked_open,
                            create=True):
                with self.assertRaises(mtx4py.NumberParseError):
                    mtx4py.loadmtx(path)
                with self.assertRaises(mtx4py.NumberParseError):
                    mtx4py.readdlm(csvpath, delimiter=',')

        self.assertEqual(len(opened), 2)
        for fd in opened:
            self.assertTrue(fd.closed)

    def test_index_out_of_range(self):
        for entry in ['3 1 1.0', '1 3 1.0', '0 1 1.0']:
            with self.subTest(msg=entry):
                with self.assertRaises(ValueError):
                    mtx4py.loadmtx(mtx(
                        '%%MatrixMarket matrix coordinate real general\n'
                        '2 2 1\n' + entry + '\n'))

    def test_unsupported_type(self):
        """The numeric type is checked before the file is opened"""
        for dtype in ['int32', np.int64, 'not a type', object]:
            with self.subTest(msg=str(dtype)):
                with self.assertRaises(mtx4py.UnsupportedTypeError):
                    mtx4py.loadmtx(data_path('missing.mtx'), dtype)
                with self.assertRaises(mtx4py.UnsupportedTypeError):
                    mtx4py.loadmtx_vector(data_path('missing.mtx'), dtype)

    def test_mminfo(self):
        info = mtx4py.mminfo(data_path('fidap007_excerpt.mtx'))
        self.assertEqual(info['object'], 'matrix')
        self.assertEqual(info['format'], 'coordinate')
        self.assertEqual(info['field'], 'real')
        self.assertEqual(info['symmetry'], 'general')
        self.assertEqual(info['shape'], (1633, 1633))
        self.assertEqual(info['nnz'], 4)
        info = mtx4py.mminfo(data_path('vector_array.mtx'))
        self.assertEqual(info['object'], 'vector')
        self.assertEqual(info['shape'], (3,))
        self.assertNotIn('nnz', info)


class TestSaveMtx(unittest.TestCase):

    def test_savemtx_array(self):
        buf = io.StringIO()
        mtx4py.savemtx(buf, np.array([[1.0, 0.0], [0.0, 2.5]]))
        self.assertEqual(buf.getvalue(),
                         '%%MatrixMarket matrix array real general\n'
                         '2 2\n1.0\n0.0\n0.0\n2.5\n')

    def test_savemtx_coordinate(self):
        buf = io.StringIO()
        mtx4py.savemtx(buf, csr_array(np.array([[0.0, 1.5], [2.0, 0.0]])))
        self.assertEqual(buf.getvalue(),
                         '%%MatrixMarket matrix coordinate real general\n'
                         '2 2 2\n1 2 1.5\n2 1 2.0\n')

    def test_savemtx_fields(self):
        cases = [
            ([[1, 2]], 'integer'),
            ([[True, False]], 'integer'),
            ([[1.5, 2]], 'real'),
            ([[1.5, 2j]], 'complex'),
        ]
        for data, field in cases:
            with self.subTest(msg=field):
                buf = io.StringIO()
                mtx4py.savemtx(buf, data)
                header = buf.getvalue().splitlines()[0]
                self.assertEqual(
                    header,
                    '%%MatrixMarket matrix array {} general'.format(field))
        buf = io.StringIO()
        mtx4py.savemtx(buf, [[1, 2]])
        self.assertEqual(buf.getvalue().splitlines()[1:], ['1 2', '1', '2'])

    def test_savemtx_comment_and_fmt(self):
        buf = io.StringIO()
        mtx4py.savemtx(buf, [[1 / 3]], fmt='.3e', comment='first\nsecond')
        self.assertEqual(buf.getvalue(),
                         '%%MatrixMarket matrix array real general\n'
                         '%first\n%second\n'
                         '1 1\n3.333e-01\n')

    def test_save_load_mtx1(self):
        """Test writing MatrixMarket files, and reading them again"""
        for filename, result in test_data['loadmtx'].items():
            with self.subTest(msg=filename):
                m = mtx4py.loadmtx(data_path(filename))
                with tempfile.TemporaryDirectory() as tempdir:
                    tempname = os.path.join(tempdir, filename)
                    mtx4py.savemtx(tempname, m)
                    data = mtx4py.loadmtx(tempname)
                self.assertEqual(type(data), type(m))
                self.assertEqual(dense(data), result)

    def test_save_load_mtx2(self):
        """Test writing MatrixMarket files, and reading them again, using
        fileobjects"""
        for filename, result in test_data['loadmtx_vector'].items():
            with self.subTest(msg=filename):
                v = mtx4py.loadmtx_vector(data_path(filename))
                fileobj = io.BytesIO()
                mtx4py.savemtx(fileobj, v)
                self.assertFalse(fileobj.closed)
                fileobj.seek(0)
                data = mtx4py.loadmtx_vector(fileobj)
                self.assertEqual(dense(data), result)

    def test_save_load_complex(self):
        m = csr_array(np.array([[0, 1 - 2.5j], [3e-8 + 1j, 0]]))
        buf = io.StringIO()
        mtx4py.savemtx(buf, m)
        self.assertIn('1 2 1.0 -2.5\n', buf.getvalue())
        buf.seek(0)
        self.assertEqual(dense(mtx4py.loadmtx(buf, complex)), dense(m))

    def test_single_precision(self):
        buf = io.StringIO()
        mtx4py.savemtx(buf, np.array([0.1, -2.3], np.float32))
        self.assertEqual(buf.getvalue().splitlines()[2:], ['0.1', '-2.3'])
        buf = io.StringIO()
        mtx4py.savemtx(buf, csr_array(np.array([[0, 0.1 - 0.7j]],
                                               np.complex64)))
        self.assertEqual(buf.getvalue().splitlines()[2], '1 2 0.1 -0.7')

    def test_invalid_format(self):
        """A format spec not applying to the data leaves the file as is"""
        with tempfile.TemporaryDirectory() as tempdir:
            tempname = os.path.join(tempdir, 'm.mtx')
            with open(tempname, 'w') as fp:
                fp.write('precious')
            for data in [np.array([[1.5]]), csr_array(np.eye(2)),
                         np.array([1j])]:
                with self.subTest(msg=repr(data)):
                    with self.assertRaises(mtx4py.InvalidArgumentError):
                        mtx4py.savemtx(tempname, data, fmt='d')
            with open(tempname) as fp:
                self.assertEqual(fp.read(), 'precious')

    def test_invalid_arguments(self):
        buf = io.StringIO()
        with self.assertRaises(mtx4py.InvalidArgumentError):
            mtx4py.savemtx(buf, None)
        with self.assertRaises(mtx4py.InvalidArgumentError):
            mtx4py.savemtx(None, [[1.0]])
        with self.assertRaises(mtx4py.InvalidArgumentError):
            mtx4py.savemtx(buf, np.zeros((2, 2, 2)))
        with self.assertRaises(mtx4py.UnsupportedTypeError):
            mtx4py.savemtx(buf, [['a', 'b']])
        self.assertEqual(buf.getvalue(), '')


class TestReadDlm(unittest.TestCase):

    def test_readdlm1(self):
        """Test reading delimited files"""
        for filename, case in test_data['readdlm'].items():
            with self.subTest(msg=filename):
                m = mtx4py.readdlm(data_path(filename), **case['options'])
                self.assertIsInstance(m, np.ndarray)
                self.assertEqual(dense(m), case['result'])

    def test_readdlm2(self):
        """Test reading delimited files using a fileobject"""
        for filename, case in test_data['readdlm'].items():
            with self.subTest(msg=filename):
                with open(data_path(filename), 'rb') as fileobj:
                    m = mtx4py.readdlm(fileobj, **case['options'])
                self.assertEqual(dense(m), case['result'])

    def test_ragged_rows(self):
        m = mtx4py.readdlm(io.StringIO('1,2\n3,4,5,6\n7'), delimiter=',')
        self.assertEqual(m.shape, (3, 4))
        self.assertEqual(dense(m), [[1, 2, 0, 0], [3, 4, 5, 6], [7, 0, 0, 0]])

    def test_whitespace_delimiter(self):
        m = mtx4py.readdlm(io.StringIO('1 2\t3\n\n   4   5  6  \n'))
        self.assertEqual(dense(m), [[1, 2, 3], [4, 5, 6]])

    def test_quoted_values(self):
        m = mtx4py.readdlm(io.StringIO('\'1.5\' "2.5" 3\n'))
        self.assertEqual(dense(m), [[1.5, 2.5, 3.0]])
        m = mtx4py.readdlm(io.StringIO('"1,5";2\n'), delimiter=';',
                           culture=mtx4py.get_culture('de-DE'))
        self.assertEqual(dense(m), [[1.5, 2.0]])

    def test_tokenizer(self):
        pattern = tokenizer(',')
        self.assertIs(pattern, tokenizer(','))
        tokens = [m.group() for m in pattern.finditer('1,"a,b",(2, 3),\'c d\'')
                  if m.group()]
        self.assertEqual(tokens, ['1', '"a,b"', '(2, 3)', "'c d'"])

    def test_complex_values(self):
        text = '(1, 2);3+4j;5i;-6\n(7);-1.5e1-2I\n'
        for dtype in [np.complex128, np.complex64]:
            with self.subTest(msg=np.dtype(dtype).name):
                m = mtx4py.readdlm(io.StringIO(text), dtype, delimiter=';')
                self.assertEqual(m.dtype, dtype)
                self.assertEqual(dense(m), [[1 + 2j, 3 + 4j, 5j, -6],
                                            [7, -15 - 2j, 0, 0]])

    def test_culture(self):
        m = mtx4py.readdlm(io.StringIO('1.234,5;-2,25e1\n'), delimiter=';',
                           culture=mtx4py.get_culture('de-DE'))
        self.assertEqual(dense(m), [[1234.5, -22.5]])
        m = mtx4py.readdlm(io.StringIO('1,234.5 -0.5\n'),
                           culture=mtx4py.get_culture('en_US'))
        self.assertEqual(dense(m), [[1234.5, -0.5]])
        m = mtx4py.readdlm(io.StringIO('(1,5; -2)\n'), complex,
                           culture=mtx4py.get_culture('de-DE'))
        self.assertEqual(dense(m), [[1.5 - 2j]])
        with self.assertRaises(mtx4py.InvalidArgumentError):
            mtx4py.get_culture('xx-XX')

    def test_single_precision(self):
        m = mtx4py.readdlm(io.StringIO('0.1 0.2\n'), 'float32')
        self.assertEqual(m.dtype, np.float32)
        self.assertEqual(m[0, 0], np.float32(0.1))

    def test_header_row(self):
        """The header row is skipped, and never parsed"""
        m = mtx4py.readdlm(io.StringIO('x;"y\n1;2\n'), delimiter=';',
                           header=True)
        self.assertEqual(dense(m), [[1, 2]])
        m = mtx4py.readdlm(io.StringIO('\n1;2\n'), delimiter=';', header=True)
        self.assertEqual(dense(m), [[1, 2]])

    def test_empty_input(self):
        for text, header in [('', False), ('\n  \n\t\n', False),
                             ('', True), ('a,b,c\n', True),
                             ('a,b,c\n\n', True)]:
            with self.subTest(msg=repr(text)):
                self.assertIsNone(mtx4py.readdlm(io.StringIO(text),
                                                 delimiter=',',
                                                 header=header))

    def test_byte_order_mark(self):
        m = mtx4py.readdlm(data_path('bom.csv'), delimiter=',')
        self.assertEqual(dense(m), [[1.0, 2.0], [3.0, 4.0]])
        with open(data_path('bom.csv'), 'rb') as fp:
            m = mtx4py.readdlm(fp, delimiter=',')
        self.assertEqual(dense(m), [[1.0, 2.0], [3.0, 4.0]])

    def test_sparse(self):
        m = mtx4py.readdlm(data_path('ragged.csv'), delimiter=',',
                           sparse=True)
        self.assertTrue(issparse(m))
        self.assertEqual(m.format, 'csr')
        self.assertEqual(m.nnz, 7)
        self.assertEqual(dense(m),
                         test_data['readdlm']['ragged.csv']['result'])

    def test_container(self):
        m = mtx4py.readdlm(data_path('ragged.csv'), complex, delimiter=',',
                           container=dok_array)
        self.assertIsInstance(m, dok_array)
        self.assertEqual(m.dtype, np.complex128)
        self.assertEqual(m[1, 3], 6)

    def test_number_error(self):
        with self.assertRaises(mtx4py.NumberParseError):
            mtx4py.readdlm(io.StringIO('1,x\n'), delimiter=',')
        with self.assertRaises(mtx4py.NumberParseError):
            mtx4py.readdlm(io.StringIO('1,2+\n'), complex, delimiter=',')

    def test_unsupported_type(self):
        with self.assertRaises(mtx4py.UnsupportedTypeError):
            mtx4py.readdlm(data_path('missing.csv'), np.int64)


class TestWriteDlm(unittest.TestCase):

    def test_writedlm(self):
        """No delimiter after the last value, no line break after the last
        row"""
        buf = io.StringIO()
        mtx4py.writedlm(buf, [[1.5, 2.0], [3.0, -4.0]])
        self.assertEqual(buf.getvalue(),
                         '1.5,2.0' + os.linesep + '3.0,-4.0')

    def test_columns(self):
        buf = io.StringIO()
        mtx4py.writedlm(buf, [[1, 2]], delimiter='\t', columns=['a', 'b'])
        self.assertEqual(buf.getvalue(), 'a\tb' + os.linesep + '1\t2')
        buf = io.StringIO()
        mtx4py.writedlm(buf, [[1, 2]], columns=[])
        self.assertEqual(buf.getvalue(), '1,2')

    def test_format_and_culture(self):
        buf = io.StringIO()
        mtx4py.writedlm(buf, [[1234.5, -0.25]], delimiter=';', fmt=',.2f',
                        culture=mtx4py.get_culture('de-DE'))
        self.assertEqual(buf.getvalue(), '1.234,50;-0,25')
        buf = io.StringIO()
        mtx4py.writedlm(buf, [[1234.5, 1e-7]], fmt='.3g')
        self.assertEqual(buf.getvalue(), '1.23e+03,1e-07')

    def test_complex(self):
        buf = io.StringIO()
        mtx4py.writedlm(buf, np.array([[1 + 2j, -1 - 0.5j]], np.complex64))
        self.assertEqual(buf.getvalue(), '1.0+2.0j,-1.0-0.5j')

    def test_sparse_matrix(self):
        buf = io.StringIO()
        mtx4py.writedlm(buf, csr_array(np.array([[0.0, 1.0], [2.0, 0.0]])))
        self.assertEqual(buf.getvalue(), '0.0,1.0' + os.linesep + '2.0,0.0')

    def test_destinations(self):
        expected = '1.0 2.0' + os.linesep + '3.0 4.0'
        m = np.array([[1.0, 2.0], [3.0, 4.0]])

        fileobj = io.BytesIO()
        mtx4py.writedlm(fileobj, m, delimiter=' ')
        self.assertFalse(fileobj.closed)
        self.assertEqual(fileobj.getvalue(), expected.encode())

        with tempfile.TemporaryDirectory() as tempdir:
            tempname = os.path.join(tempdir, 'm.txt')
            mtx4py.writedlm(tempname, m, delimiter=' ')
            with open(tempname, 'rb') as fp:
                self.assertEqual(fp.read(), expected.encode())

    def test_invalid_arguments(self):
        buf = io.StringIO()
        with self.assertRaises(mtx4py.InvalidArgumentError):
            mtx4py.writedlm(buf, None)
        with self.assertRaises(mtx4py.InvalidArgumentError):
            mtx4py.writedlm(None, [[1.0]])
        with self.assertRaises(mtx4py.InvalidArgumentError):
            mtx4py.writedlm(buf, [1.0, 2.0])
        self.assertEqual(buf.getvalue(), '')
        with tempfile.TemporaryDirectory() as tempdir:
            tempname = os.path.join(tempdir, 'm.csv')
            with self.assertRaises(mtx4py.InvalidArgumentError):
                mtx4py.writedlm(tempname, None)
            self.assertFalse(os.path.exists(tempname))

    def test_single_precision(self):
        buf = io.StringIO()
        mtx4py.writedlm(buf, np.array([[0.1, 1e-8]], np.float32))
        self.assertEqual(buf.getvalue(), '0.1,1e-08')
        buf = io.StringIO()
        mtx4py.writedlm(buf, np.array([[0.1]], np.float32), fmt='.3f')
        self.assertEqual(buf.getvalue(), '0.100')

    def test_invalid_format(self):
        """A format spec not applying to the matrix leaves the file as is"""
        with tempfile.TemporaryDirectory() as tempdir:
            tempname = os.path.join(tempdir, 'm.csv')
            with open(tempname, 'w') as fp:
                fp.write('precious')
            for fmt in ['d', 'x.y']:
                with self.subTest(msg=fmt):
                    with self.assertRaises(mtx4py.InvalidArgumentError):
                        mtx4py.writedlm(tempname, np.array([[1.5]]), fmt=fmt)
            with open(tempname) as fp:
                self.assertEqual(fp.read(), 'precious')
        buf = io.BytesIO()
        with self.assertRaises(mtx4py.InvalidArgumentError):
            mtx4py.writedlm(buf, np.array([[1 + 1j]]), fmt='d')
        self.assertEqual(buf.getvalue(), b'')

    def test_write_read(self):
        """Test writing delimited files, and reading them again"""
        m = np.array([[1.25, -3.5, 1e-3], [12345.678, 0.1, -7.0]])
        for delimiter, fmt, rtol in [(',', None, 0), (';', '.10g', 1e-9),
                                     ('\t', '.6e', 1e-6), (' ', '.17g', 0)]:
            with self.subTest(msg=repr((delimiter, fmt))):
                buf = io.StringIO()
                mtx4py.writedlm(buf, m, delimiter=delimiter, fmt=fmt)
                buf.seek(0)
                data = mtx4py.readdlm(buf, delimiter=delimiter)
                np.testing.assert_allclose(data, m, rtol=rtol)

    def test_write_read_culture(self):
        m = np.array([[1.5 - 2j, 1234.25], [0, -1e-3j]])
        culture = mtx4py.get_culture('de-DE')
        buf = io.StringIO()
        mtx4py.writedlm(buf, m, delimiter=';', culture=culture, columns=['a'])
        buf.seek(0)
        data = mtx4py.readdlm(buf, complex, delimiter=';', culture=culture,
                              header=True)
        self.assertEqual(dense(data), dense(m))


class TestCmd(unittest.TestCase):

    def run_main(self, *argv):
        with contextlib.redirect_stdout(io.StringIO()) as out:
            try:
                cmd.main(list(argv))
            except SystemExit as e:
                return e.code, out.getvalue()
        return 0, out.getvalue()

    def test_mtx_to_csv(self):
        with tempfile.TemporaryDirectory() as tempdir:
            path = os.path.join(tempdir, 'm.mtx')
            with open(data_path('coordinate_real.mtx')) as src:
                with open(path, 'w') as dest:
                    dest.write(src.read())
            self.assertEqual(self.run_main(path), (0, ''))
            with open(os.path.join(tempdir, 'm.csv'), newline='') as fp:
                self.assertEqual(fp.read().split(os.linesep), [
                    '1.5,0.0,0.0,0.5', '0.0,0.0,-22.5,0.0',
                    '0.0,0.0,0.0,7.0'])

            # existing files are only overwritten when forced
            code, out = self.run_main(path)
            self.assertEqual(code, 1)
            self.assertTrue(out.startswith('Error: '))
            self.assertEqual(self.run_main('--force', '--remove-input', path),
                             (0, ''))
            self.assertFalse(os.path.exists(path))

    def test_vector_to_tsv(self):
        with tempfile.TemporaryDirectory() as tempdir:
            path = os.path.join(tempdir, 'v.mtx')
            mtx4py.savemtx(path, coo_array(
                (np.array([2.5]), (np.array([1]),)), shape=(3,)))
            self.assertEqual(self.run_main('--tsv', path), (0, ''))
            data = mtx4py.readdlm(os.path.join(tempdir, 'v.tsv'),
                                  delimiter='\t')
            self.assertEqual(dense(data), [[0.0], [2.5], [0.0]])

    def test_csv_to_mtx(self):
        with tempfile.TemporaryDirectory() as tempdir:
            path = os.path.join(tempdir, 'ragged.csv')
            with open(path, 'w') as fp:
                fp.write('x,y\n1,2\n3,4,5,6\n7\n')
            self.assertEqual(self.run_main('--header', '--sparse', path),
                             (0, ''))
            dest = os.path.join(tempdir, 'ragged.mtx')
            self.assertEqual(mtx4py.mminfo(dest)['format'], 'coordinate')
            self.assertEqual(dense(mtx4py.loadmtx(dest)),
                             test_data['readdlm']['ragged.csv']['result'])

    def test_errors(self):
        with tempfile.TemporaryDirectory() as tempdir:
            path = os.path.join(tempdir, 'bad.txt')
            with open(path, 'w') as fp:
                fp.write('1 2\n3 four\n')
            code, out = self.run_main(path)
            self.assertEqual(code, 1)
            self.assertIn('four', out)

            code, out = self.run_main(os.path.join(tempdir, 'm.dat'))
            self.assertEqual(code, 1)
            self.assertTrue(out.startswith('Unsupported file extension'))


if __name__ == '__main__':
    unittest.main()
