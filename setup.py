"""Python client for the MetaTrader JSON-over-ZeroMQ bridge.

Speaks both ticket dialects of the bridge: 32-bit tickets (MT4Client) and
64-bit tickets (MT5Client).
"""

from pathlib import Path

from setuptools import find_packages, setup

setup(
    name="mt4client",
    packages=find_packages(include=["mt4client"]),
    version="0.1.0",
    description="MetaTrader terminal client over a JSON/ZeroMQ bridge",
    long_description=Path("README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.12",
    install_requires=[
        "numpy>=1.26.4",
        "orjson>=3.9.0",
        "pydantic>=2.10.0",
        "pydantic-settings>=2.0.0",
        "pyzmq>=25.0.0",
        "structlog>=25.5.0",
    ],
    extras_require={
        "test": ["pytest>=8.0.0"],
    },
    entry_points={
        "console_scripts": ["mt4client=mt4client.__main__:main"],
    },
)
