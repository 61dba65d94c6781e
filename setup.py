# setup.py
from setuptools import setup, find_packages

setup(
    name="glenisp",
    version="0.1.0",
    description="A small Lisp-like expression language with quoted lists and lambdas",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"glenisp": ["prelude/std/*.gl"]},
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": [
            "glenisp=glenisp.repl:main",
            "glenisp-ls=glenisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
