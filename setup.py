from setuptools import setup, find_packages
from bugzlink.definitions import __version__

# To use a consistent encoding
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='bugzlink',

    # Versions should comply with PEP440.
    version=__version__,

    description='python interface to the bugzilla REST and JSONRPC APIs',
    long_description=long_description,

    license="GPL-2",

    packages=find_packages(exclude=['tests']),

    python_requires='>=3.8',

    # List run-time dependencies here. These will be installed by pip when
    # your project is installed.
    install_requires=[
        'requests',
        'pydantic>=2',
    ],

    # List additional groups of dependencies here. You can install these
    # using the following syntax, for example:
    # $ pip install -e .[test]
    extras_require={
        'test': ['pytest'],
    },

    # Entry points provide cross-platform support and allow pip to create
    # the appropriate form of executable for the target platform.
    entry_points={
        'console_scripts': [
            'bugzlink=bugzlink.cli:main'
        ]
    },
)
