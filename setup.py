"""
rdfxml setup script.

Proudly ripped from https://github.com/pypa/sampleproject/blob/master/setup.py
"""

import re
import sys

# Always prefer setuptools over distutils
from setuptools import setup, find_packages
# To use a consistent encoding
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))


# ``pytest_runner`` is referenced in ``setup_requires``.
# See https://github.com/pytest-dev/pytest-runner#conditional-requirement
needs_pytest = {'pytest', 'test', 'ptr'}.intersection(sys.argv)
pytest_runner = ['pytest-runner'] if needs_pytest else []


# Get the long description from the README file
with open(path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

# Read the release without importing the package, which needs its
# dependencies installed.
with open(path.join(here, 'rdfxml', '__init__.py'), encoding='utf-8') as f:
    release = re.search(r"^release = '([^']+)'", f.read(), re.M).group(1)


# Great reference read about dependency management:
# https://caremad.io/posts/2013/07/setup-vs-requirement/
install_requires = [
    'PyYAML',
    'click',
    'click-log',
    'rdflib',
]


setup(
    name='rdfxml',
    version=release,

    description='RDF/XML decoder and encoder with a hand-written XML reader.',
    long_description=long_description,

    license='Apache License Version 2.0',

    zip_safe=False,

    # https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        'Development Status :: 3 - Alpha',

        'Environment :: Console',

        'Intended Audience :: Developers',
        'Intended Audience :: Information Technology',
        'Intended Audience :: Science/Research',

        'License :: OSI Approved :: Apache Software License',

        'Natural Language :: English',

        'Operating System :: MacOS',
        'Operating System :: Microsoft :: Windows',
        'Operating System :: POSIX :: Linux',

        'Programming Language :: Python :: 3',

        'Topic :: Text Processing :: Markup :: XML',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],

    keywords='rdf rdf-xml linked-data',

    python_requires='>=3.6',

    packages=find_packages(exclude=['contrib', 'docs', 'tests']),

    install_requires=install_requires,

    setup_requires=[
        'setuptools>=18.0',
    ] + pytest_runner,
    tests_require=[
        'pytest',
    ],
    extras_require={
        'test': ['pytest'],
    },

    include_package_data=True,
    package_data={
        'rdfxml': ['etc.defaults/*.yml'],
    },

    entry_points={
        'console_scripts': [
            'rdfxml-admin=rdfxml.admin:admin',
        ],
    },
)
