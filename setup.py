#!/usr/bin/python
import os

from setuptools import find_packages
from setuptools import setup

__version__ = "0.1.0"


def read(f):
    return open(os.path.join(os.path.dirname(__file__), f)).read().strip()


setup(
    name="zipkin_codec",
    version=__version__,
    provides=["zipkin_codec"],
    description="Decoder for Zipkin v1 span batches.",
    long_description="\n\n".join((read("README.md"), read("CHANGELOG.rst"))),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests*", "testing*", "tools*")),
    package_data={
        "zipkin_codec": ["py.typed"],
    },
    python_requires=">=3.7",
    install_requires=[
        "typing-extensions>=3.10.0.0",
    ],
    extras_require={
        "tests": ["pytest"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
    ],
)
