#!/usr/bin/env python3
"""
Setup script for the fingerspelling recognition system
"""

from setuptools import find_packages, setup

setup(
    name="fingerspell",
    version="0.1.0",
    description="ASL fingerspelling handshape classifier over 2D hand landmarks",
    python_requires=">=3.8",
    packages=find_packages(include=["fingerspell", "fingerspell.*"]),
    package_data={"fingerspell": ["config.default.yaml"]},
    install_requires=[
        "PyYAML",
    ],
    extras_require={
        "camera": [
            "opencv-python",
            "mediapipe",
            "numpy",
        ],
        "test": [
            "numpy",
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "fingerspell=fingerspell.main:main",
        ],
    },
)
