#!/usr/bin/env python3
"""
KV-Helpers Setup Script
=======================
Allows installation of the kv-helpers package.

Usage:
    pip install -e .           # Development install
    pip install -e ".[test]"   # Development install with test tools
    pip install .              # Regular install
"""

from setuptools import setup, find_packages

setup(
    name="kv-helpers",
    version="1.0.0",
    packages=find_packages(include=["kv_helpers", "kv_helpers.*"]),
    python_requires=">=3.10",
    install_requires=[
        "redis>=5.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "kv-helpers=kv_helpers.cli:main",
        ],
    },
)
