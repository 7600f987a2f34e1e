"""
Setup script for fraction-trainer.

Fraction Trainer is the fraction arithmetic and adaptive-mastery engine
behind a fraction-training exercise set. It provides:

1. Exact arithmetic - normalization, the four operations and comparison,
   each with step-by-step derivations
2. Answer validation - correctness plus mistake classification
3. Mastery tracking - per-skill progress driving adaptive difficulty

The 'fraction-trainer' command is the terminal front end.
"""

from setuptools import find_namespace_packages, setup

setup(
    name="fraction-trainer",
    version="1.0.0",
    description="Fraction arithmetic and adaptive-mastery engine with a practice CLI",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["src", "src.*"]),
    py_modules=["config"],
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fraction-trainer=src.cli.fraction_cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="fractions arithmetic learning mastery cli education",
)
