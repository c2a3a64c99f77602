#!/usr/bin/env python
from setuptools import (
    find_packages,
    setup,
)

description = "poolfactory: bounded, reusable resource pools built from creator callbacks"

extras_require = {
    "dev": [
        "build>=0.9.0",
        "ipython",
        "mypy==1.10.0",
        "twine",
        "wheel",
    ],
    "test": [
        "pytest>=7.0.0",
        "pytest-xdist>=2.4.0",
        "pytest-trio>=0.5.2",
    ],
}

extras_require["dev"] = extras_require["dev"] + extras_require["test"]

try:
    with open("./README.md", encoding="utf-8") as readme:
        long_description = readme.read()
except FileNotFoundError:
    long_description = description

install_requires = [
    "trio>=0.26.0",
]

setup(
    name="poolfactory",
    # *IMPORTANT*: Don't manually change the version here. See Contributing docs for the release process.
    version="0.1.0",
    description=description,
    long_description=long_description,
    long_description_content_type="text/markdown",
    include_package_data=True,
    install_requires=install_requires,
    python_requires=">=3.9, <4",
    extras_require=extras_require,
    license="MIT",
    zip_safe=False,
    keywords="pool resource-pool connection-pool trio",
    packages=find_packages(exclude=["scripts", "scripts.*", "tests", "tests.*"]),
    package_data={"poolfactory": ["py.typed"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    platforms=["unix", "linux", "osx", "win32"],
)
