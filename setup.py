""" hdkeys build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import hdkeys

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=hdkeys.name,
    version=hdkeys.__version__,
    license=hdkeys.__license__,
    author=hdkeys.__author__,
    author_email=hdkeys.__author_email__,
    description="secp256k1 arithmetic and BIP32 hierarchical deterministic keys",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    # install_requires=[],
    extras_require={"tests": ["pytest", "base58"]},
    keywords=(
        "bitcoin cryptography elliptic-curves secp256k1 "
        "bip32 hierarchical-deterministic-wallet"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
