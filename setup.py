#!/usr/bin/env python3
"""
Setup script for the OEWS Import Application

This setup script provides package installation and the CLI entry point
for loading BLS OEWS annual releases into a relational database.
"""

from setuptools import setup, find_packages
import os
import sys

# Python 3.10 or higher is required
if sys.version_info < (3, 10):
    raise RuntimeError("Python 3.10 or higher is required")

# Read version from package
def get_version():
    """Extract version from package"""
    version_file = os.path.join(os.path.dirname(__file__), 'oews_import', '__init__.py')
    if os.path.exists(version_file):
        with open(version_file) as f:
            for line in f:
                if line.startswith('__version__'):
                    return line.split('=')[1].strip().strip('"\'')
    return "1.0.0"

# Read long description from README
def get_long_description():
    """Read long description from README file"""
    readme_file = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_file):
        with open(readme_file, 'r', encoding='utf-8') as f:
            return f.read()
    return "BLS OEWS annual release importer"

# Core dependencies
INSTALL_REQUIRES = [
    "pandas>=1.5.0,<3",
    "openpyxl>=3.0.0",
    "xlrd>=2.0.1",
    "sqlalchemy>=2.0.0",
    "pymysql>=1.0.2",
    "click>=8.0.0",
    "python-dotenv>=0.19.0",
    "tqdm>=4.65.0"
]

# Development dependencies
EXTRAS_REQUIRE = {
    'dev': [
        "pytest>=7.0.0",
        "pytest-cov>=4.0.0",
        "black>=23.0.0",
        "flake8>=6.0.0",
        "mypy>=1.0.0"
    ],
    'test': [
        "pytest>=7.0.0",
        "pytest-cov>=4.0.0"
    ]
}

setup(
    name="oews-import",
    version=get_version(),
    description="Load BLS OEWS annual releases into a relational database",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",

    # Package configuration
    packages=find_packages(include=["oews_import", "oews_import.*"]),
    include_package_data=True,

    python_requires=">=3.10",

    # Dependencies
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,

    # CLI entry points
    entry_points={
        'console_scripts': [
            'oews-import=oews_import.cli.main:main',
        ],
    },

    # Package metadata
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Database",
        "Topic :: Office/Business :: Financial :: Spreadsheet",
        "Topic :: Utilities",
    ],

    keywords=[
        "excel", "sql", "database", "etl", "bls",
        "oews", "data-processing", "cli", "pandas", "sqlalchemy"
    ],

    zip_safe=False,
)
