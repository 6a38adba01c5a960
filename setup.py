#!/usr/bin/env python3

from pathlib import Path
from setuptools import setup, find_packages
import re

def version():
    init = Path(__file__).with_name('eqreps') / '__init__.py'
    return re.search(r"^__version__ = '([^']+)'", init.read_text(), re.MULTILINE).group(1)

setup(
    name='eqreps',
    version=version(),
    author='jaseg',
    author_email='code@jaseg.de',
    description='Turn infix equations into expression tree diagrams and postfix notation',
    long_description=Path('README.md').read_text(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests']),
    package_data={'eqreps.pages': ['*.html']},
    install_requires=['click', 'quart'],
    extras_require={
        'test': ['pytest', 'beautifulsoup4', 'lxml'],
    },
    entry_points={
        'console_scripts': [
            'eqreps = eqreps.cli:cli',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Environment :: Web Environment',
        'Intended Audience :: Education',
        'License :: OSI Approved :: Apache Software License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Education',
        'Topic :: Scientific/Engineering :: Mathematics',
        'Topic :: Text Processing',
        'Typing :: Typed',
    ],
    keywords='infix postfix rpn expression tree parser',
    python_requires='>=3.10',
)
