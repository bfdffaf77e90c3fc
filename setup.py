# setup.py
from setuptools import setup, find_packages

setup(
    name="cmdlisp",
    version="0.3.0",
    description="Embeddable S-expression command interpreter",
    packages=find_packages(include=["cmdlisp", "cmdlisp.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["cmdlisp = cmdlisp.cli:main"],
    },
    zip_safe=False,
)
