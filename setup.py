#!/usr/bin/env python3
"""
tokenbasic install script

(c) 2015--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import os
import json
from io import open

from setuptools import find_packages, setup


###############################################################################
# get descriptions and version number

# file location
HERE = os.path.abspath(os.path.dirname(__file__))

# obtain metadata without importing the package
with open(os.path.join(HERE, 'tokenbasic', 'data', 'meta.json'), 'r') as meta:
    _METADATA = json.load(meta)
    VERSION = _METADATA['version']
    AUTHOR = _METADATA['author']


###############################################################################
# setup parameters

SETUP_OPTIONS = dict(
    name='tokenbasic',
    version=VERSION,
    author=AUTHOR,
    description='Token-walking interpreter for a line-numbered BASIC dialect',
    license='GPLv3',
    python_requires='>=3.9',

    # contents
    # only include subpackages of tokenbasic: exclude tests
    packages=find_packages(include=['tokenbasic', 'tokenbasic.*']),
    package_data={'tokenbasic.data': ['*.json']},
    # test tooling is the standard library's unittest; pytest can run the same tests
    extras_require={
        'test': ['pytest'],
    },
    # launchers
    entry_points=dict(
        console_scripts=['tokenbasic=tokenbasic:main'],
    ),
)

###############################################################################
# run the setup

# perform the installation
setup(**SETUP_OPTIONS)
