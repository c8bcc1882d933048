""" slip10 build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import slip10

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=slip10.name,
    version=slip10.__version__,
    license=slip10.__license__,
    author=slip10.__author__,
    author_email=slip10.__author_email__,
    description="SLIP10 hierarchical deterministic key derivation",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=["btclib<2024", "dataclasses_json"],
    extras_require={"test": ["pytest"]},
    keywords=(
        "slip10 slip-0010 bip32 hierarchical-deterministic "
        "key-derivation elliptic-curves secp256k1 nist256p1"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
