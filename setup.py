#!/usr/bin/env python
"""
henslib: heat exchanger network synthesis by pinch analysis

Greedy and heat cascade synthesis engines, minimum utility targeting and
composite curves for networks of hot and cold process streams.
"""
from setuptools import setup, find_packages

if __name__ == "__main__":
    setup(
        name="henslib",
        version="0.1.0",
        description="Heat exchanger network synthesis by pinch analysis",
        packages=find_packages(exclude=["tests", "tests.*"]),
        install_requires=[
            "Pyomo>=6.0",
            "setuptools>=39.0.1",
            "pandas>=1.0.1",
            "pint>=0.15.0",
        ],
        extras_require={
            "test": ["pytest>=6.0"],
        },
        python_requires=">=3.9",
    )
