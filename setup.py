from setuptools import find_packages, setup

from adb_client import __version__

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

INSTALL_REQUIRES = [
    # to use Databricks APIs
    "requests>=2.24.0, <3.0.0",
    "databricks-cli>=0.17,<0.19",
    # CLI interface
    "click>=8.1.0,<8.2.0",
    "rich>=12.6.0",
    "typer>=0.9.0,<0.13.0",
    # file formats and models
    "pyyaml>=6.0",
    "pydantic>=2.0.0,<3.0.0",
    "typing_extensions>=4.6.0",
]

DEV_REQUIREMENTS = [
    # pre-commit and linting utilities
    "pre-commit>=2.20.0,<4.0.0",
    "pylint>=2.15.6",
    "black>=22.3.0",
    # testing framework
    "pytest>=7.1.3",
    "pytest-mock>=3.8.2",
    "pytest-xdist[psutil]>=2.5.0",
    "pytest-cov>=4.0.0",
    "pytest-timeout>=2.1.0",
]

setup(
    name="adb-client",
    python_requires=">=3.8",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=INSTALL_REQUIRES,
    extras_require={"dev": DEV_REQUIREMENTS},
    entry_points={"console_scripts": ["adb=adb_client.cli:entrypoint"]},
    long_description=long_description,
    long_description_content_type="text/markdown",
    include_package_data=True,
    version=__version__,
    description="Client for the Databricks management REST API with typed library descriptors",
    classifiers=[
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
    ],
)
