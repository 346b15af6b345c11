import os
import sys

from setuptools import find_packages, setup

from version import get_version


def get_long_description():
    with open(
        os.path.join(os.path.dirname(os.path.abspath(__file__)), "README.md"),
        encoding="utf8",
    ) as fp:
        return fp.read()


# Only install black on Python 3.6 or higher
maybe_black = []
if sys.version_info > (3, 6):
    maybe_black = ["black"]

setup(
    name="digital-register",
    version=get_version(),
    description="Build registers incrementally from repeated ingestion passes",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["version"],
    install_requires=[
        "canonicaljson",
        "click",
        "validators",
    ],
    entry_points={"console_scripts": ["digital-register=digital_register.cli:cli"]},
    extras_require={
        "test": [
            "coverage",
            "flake8",
            "pytest",
            "pytest-mock",
        ]
        + maybe_black
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Database",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
