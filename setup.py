#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="py2bin",
    version="0.1.0",
    description="Convert Python scripts into standalone native executables",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={
        "py2bin": ["config.json5"],
    },
    python_requires=">=3.10",
    install_requires=[
        "json5",
    ],
    extras_require={
        "dev": ["pytest", "black", "mypy"],
    },
    entry_points={
        "console_scripts": [
            "py2bin=py2bin.cli:main",
        ],
    },
)
