""" hdkey build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import hdkey

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=hdkey.name,
    version=hdkey.__version__,
    license=hdkey.__license__,
    author=hdkey.__author__,
    author_email=hdkey.__author_email__,
    description="BIP32 hierarchical deterministic keys over a pluggable secp256k1 backend",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"hdkey": ["_data/*.json"]},
    install_requires=[
        "base58",
        "coincurve>=18",
        "dataclasses_json",
        "loguru",
        "pycryptodome",
    ],
    extras_require={"tests": ["pytest"]},
    keywords=(
        "bitcoin bip32 hd-wallet extended-keys secp256k1 ecdsa schnorr "
        "bip340 bip341 taproot base58 wif"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
