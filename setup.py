# setup.py - Prime set signatures
from setuptools import setup, find_packages

setup(
    name="prime_signature",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.8",
)
