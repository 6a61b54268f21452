"""Package setup for diaspora_api."""

from setuptools import setup, find_packages

setup(
    name="diaspora-api",
    version="1.0.0",
    description="Session client for the web interface of a diaspora* pod",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "urllib3>=2.0.0",
    ],
    extras_require={
        "ui": [
            "colorlog>=6.8.0",
        ],
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "diaspora-api=diaspora_api.cli:main",
        ],
    },
)
