#!/usr/bin/env python
from setuptools import find_packages, setup

setup(
    name="sentinel-listener",
    description="Python listener for Redis Sentinel pub/sub event notifications",
    long_description=open("README.md").read().strip(),
    long_description_content_type="text/markdown",
    keywords=["Redis", "Sentinel", "pub/sub", "failover"],
    license="MIT",
    version="0.1.0",
    packages=find_packages(
        include=[
            "sentinel_listener",
        ]
    ),
    package_data={"sentinel_listener": ["py.typed"]},
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "redis>=5.0.0,<8",
    ],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
    ],
    extras_require={
        "hiredis": ["redis[hiredis]>=5.0.0,<8"],
        "test": ["pytest>=7.0", "pytest-cov"],
    },
)
