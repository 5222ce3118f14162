#!/usr/bin/env python3
"""
Setup script for wirestream, a typed realtime WebSocket client
"""

from setuptools import setup, find_namespace_packages

setup(
    name="wirestream",
    version="0.1.0",
    description="Typed real-time WebSocket messaging client",
    packages=find_namespace_packages(include=["client", "shared", "models"]),
    install_requires=[
        "websockets>=15.0",
        "pydantic>=2.9",
        "typer>=0.15",
        "rich>=13.9.2",
        "PyYAML>=6.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.4",
            "pytest-asyncio>=1.2.0",
        ],
    },
    python_requires=">=3.10",
    entry_points={
        'console_scripts': [
            'wirestream=client.cli:main',
        ],
    },
)
