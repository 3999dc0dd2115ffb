#!/usr/bin/env python

import twoken
from pathlib import Path

from setuptools import setup, find_namespace_packages

long_description = Path('README.md').read_text(encoding='utf-8', errors='ignore')

classifiers = [  # copied from https://pypi.org/classifiers/
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'Intended Audience :: Science/Research',
    'Topic :: Text Processing',
    'Topic :: Text Processing :: General',
    'Topic :: Text Processing :: Linguistic',
    'License :: OSI Approved :: Apache Software License',
    'Programming Language :: Python :: 3 :: Only',
]

setup(
    name='twoken',
    version=twoken.__version__,
    description=twoken.__description__,
    long_description=long_description,
    long_description_content_type='text/markdown',
    classifiers=classifiers,
    python_requires='>=3.8',
    platforms=['any'],
    packages=find_namespace_packages(include=['twoken', 'twoken.*']),
    keywords=['tokenization', 'twitter', 'social media', 'NLP', 'natural language processing',
              'computational linguistics'],
    entry_points={
        'console_scripts': [
            'twokenize=twoken.twokenize:main',
        ],
    },
    install_requires=[
        'regex>=2021.8.3',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    include_package_data=True,
    zip_safe=False,
)
