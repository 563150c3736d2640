#!/usr/bin/env python3

from setuptools import setup

setup(
    author="Elias Zamaria",
    description="This package implements the MT19937 RNG and clones it from its output.",
    entry_points={"console_scripts": ["mt19937-challenges = challenges:main"]},
    extras_require={"test": ["pytest"]},
    install_requires="pycryptodomex >= 3.4.2",
    license="MIT",
    name="mt19937-cloning",
    py_modules=["challenges", "mersenne_twister", "mt_stream_cipher", "seed_recovery", "util"],
    python_requires=">=3.5",
    version="0.1.0",
)
