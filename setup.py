#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name='dojin-scraper',
    version='0.3.0',
    description='Catalog scraper for dojin music download sites - artists, genres, albums and change feed',
    author='Dojin Scraper',
    packages=find_packages(exclude=['tests', 'tests.*']),
    entry_points={
        'console_scripts': [
            'dojin-scrape=dojin.cli:main',
        ],
    },
    install_requires=[
        # Core dependencies
        'beautifulsoup4>=4.11.0',
        'lxml>=4.9.0',
        'requests>=2.28.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Internet :: WWW/HTTP :: Indexing/Search',
        'Topic :: Multimedia :: Sound/Audio',
    ],
    python_requires='>=3.9',
)
