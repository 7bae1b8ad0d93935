from setuptools import setup


def readme():
    with open('README.rst') as f:
        return f.read()


setup(
    name='mtx4py',
    version='0.1.0',
    author='Jacob Svensson',
    author_email='jacob@nephics.com',
    packages=['mtx4py'],
    url='https://github.com/nephics/mtx4py/',
    license='MIT License',
    description='Load and save matrices in the MatrixMarket and '
                'delimited text formats.',
    long_description=readme(),
    python_requires='>=3.9',
    install_requires=[
        'numpy',
        'scipy>=1.13'
    ],
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering'
    ]
)
