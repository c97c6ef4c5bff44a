#!/usr/bin/env python3

from setuptools import find_namespace_packages, setup


setup(
    name="fibaro-homekit-bridge",
    version="1.0.0",
    description="Fibaro Home Center to HomeKit value conversions",
    license="MIT",
    python_requires=">=3.9",
    packages=find_namespace_packages(include=["fibaro", "fibaro.*"]),
    install_requires=[
        "httpx>=0.24",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "fibaro-homekit-values = fibaro.homekit_bridge.cli.main:main",
        ],
    },
)
