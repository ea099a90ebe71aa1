#!/usr/bin/env python3
"""
Setup script for Hand Sign Recognition
"""

from pathlib import Path

from setuptools import find_packages, setup

HERE = Path(__file__).parent


def read_requirements():
    """Read required packages from requirements.txt"""
    with open(HERE / "requirements.txt", "r") as f:
        return [
            line.strip() for line in f
            if line.strip() and not line.startswith("#")
        ]


setup(
    name="handsign",
    version="0.1.0",
    description="Hand sign recognition from hand landmarks with temporal smoothing",
    packages=find_packages(include=["handsign", "handsign.*"]),
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "handsign=handsign.main:run",
        ],
    },
)
