from setuptools import setup, find_packages

setup(
    name="xo-lang",
    version="0.1.0",
    description="XO — a small language that compiles to JavaScript",
    packages=find_packages(include=["xo", "xo.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "xo=xo.cli:main",
        ],
    },
)
