# setup.py - Package the hypercomplex library
from setuptools import setup, find_packages

setup(
    name="hypercomplex",
    version="0.1.0",
    packages=find_packages(include=["hypercomplex", "hypercomplex.*"]),
    python_requires=">=3.8",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
)
