#!/usr/bin/env python3
"""
Setup script for the sectionconf package.
"""

from setuptools import setup, find_packages

setup(
    name="sectionconf",
    version="0.1.0",
    description="Schema-driven sectioned XML configuration documents",
    author="sectionconf developers",
    packages=find_packages(include=["sectionconf", "sectionconf.*"]),
    python_requires=">=3.10",
    install_requires=[
        "python-dotenv>=1.0",
    ],
)
