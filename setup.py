"""Package setup for honeycombio-client."""

from setuptools import setup

setup(
    name="honeycombio-client",
    version="0.1.0",
    description="Typed client for the Honeycomb v2 management API",
    packages=["honeycombio", "honeycombio.v2"],
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.24.0",
        "http-sfv>=0.9.0",
        "pydantic>=2.0.0",
        "click>=8.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0", "fastapi>=0.100.0", "starlette>=0.27.0"],
    },
    entry_points={
        "console_scripts": [
            "honeycombio=honeycombio.cli:main",
        ],
    },
)
