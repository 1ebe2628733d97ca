import os
import re

from setuptools import setup, find_packages


def readme():
    with open("README.md") as f:
        return f.read()


def version():
    with open(os.path.join("qubase", "_version.py")) as f:
        mo = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]", f.read(), re.M)
    if mo is None:
        raise RuntimeError("Unable to find version string in _version.py.")
    return mo.group(1)


setup(
    name="qubase",
    version=version(),
    description="Basic linear algebra building blocks for quantum "
                "information.",
    long_description=readme(),
    long_description_content_type="text/markdown",
    license="Apache",
    packages=find_packages(exclude=["deps", "tests*"]),
    install_requires=[
        "cytoolz>=0.8.0",
        "numba>=0.39",
        "numexpr>=2.6",
        "numpy>=1.17",
    ],
    extras_require={
        "tests": [
            "coverage",
            "pytest",
            "pytest-cov",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    keywords="quantum information linear algebra tensor subsystems",
)
