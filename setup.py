# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Setup configuration for the DAG workflow execution engine
"""

from setuptools import setup, find_packages

setup(
    name="dagengine",
    version="1.0.0",
    description="DAG workflow validation, planning and execution engine",
    author="Jason Cafarelli",
    packages=find_packages(include=["dagengine", "dagengine.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ]
    },
)
