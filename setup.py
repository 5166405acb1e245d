#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Ink & Verse Publisher - Setup Configuration
Console entry point and development dependency group.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_path.exists():
    requirements = [
        line.strip()
        for line in requirements_path.read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.startswith("#")
    ]

setup(
    name="ink-verse-publisher",
    version="1.0.0",
    description="Publication export for poem collections: EPUB 3, print book and HTML book",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Ink & Verse Team",
    python_requires=">=3.9",
    packages=find_packages(include=["config", "config.*", "inkverse", "inkverse.*"]),
    install_requires=requirements,
    extras_require={
        # Development dependencies
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "EbookLib>=0.18",
        ],
    },
    entry_points={
        "console_scripts": [
            "inkverse-export=inkverse.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Text Processing :: Markup :: XML",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="epub publishing poetry print layout",
)
