"""Setup script for pacdb."""

from pathlib import Path

from setuptools import find_packages, setup


def read_long_description():
    """Use the README as the long description when present."""
    readme = Path(__file__).parent / "README.md"
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return "Read-only access to a package manager's local database."


setup(
    name="pacdb",
    version="0.1.0",
    description="Read-only access to a package manager's local database",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    packages=find_packages(include=["pacdb", "pacdb.*"]),
    install_requires=[
        "click>=8.1",
        "dependency-injector>=4.41",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "tomli>=2.0; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "pacdb=pacdb.__main__:main",
        ],
    },
)
