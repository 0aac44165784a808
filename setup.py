# setup.py
from setuptools import setup, find_packages

setup(
    name="uptimed",
    version="0.1.0",
    description="Периодическая проверка доступности URL с оповещениями",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "multidict>=6.0",
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "uptimed=uptimed.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
