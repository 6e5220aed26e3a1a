#!/usr/bin/env python

import rtoken
from pathlib import Path

from setuptools import setup, find_packages

long_description = Path('README.md').read_text(encoding='utf-8', errors='ignore')

classifiers = [  # copied from https://pypi.org/classifiers/
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'Intended Audience :: Science/Research',
    'Topic :: Text Processing',
    'Topic :: Text Processing :: Filters',
    'Topic :: Text Processing :: Linguistic',
    'Programming Language :: Python :: 3 :: Only',
]

setup(
    name='rtoken',
    version=rtoken.__version__,
    description=rtoken.__description__,
    long_description=long_description,
    long_description_content_type='text/markdown',
    classifiers=classifiers,
    python_requires='>=3.8',
    platforms=['any'],
    packages=find_packages(exclude=['tests']),
    keywords=['machine translation', 'tokenization', 'NLP', 'natural language processing',
              'computational linguistics'],
    entry_points={
        'console_scripts': [
            'rtokenize=rtoken.rtokenize:main',
        ],
    },
    install_requires=[
        'regex>=2021.8.3',
    ],
    extras_require={
        'test': ['pytest'],
    },
    package_data={
        'rtoken': ['data/*.txt'],
    },
    include_package_data=True,
    zip_safe=False,
)
