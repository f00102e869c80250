"""
Setup script for gentle-study.

gentle-study is an adaptive study scheduling and spaced-repetition engine.
It turns a learner's cognitive profile and live performance signals into:

1. Session and break durations, start times and daily caps
2. Next-review dates with evolving ease/mastery state (SM-2 or LECTOR)
3. Fatigue-triggered interventions
4. Multi-topic interleaving order

The 'gentle-study' command exposes the engine for inspection from a terminal.
"""

from setuptools import find_packages, setup

setup(
    name="gentle-study",
    version="1.0.0",
    description="Adaptive study scheduling and spaced-repetition engine",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.12.0",
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
            "gentle-study=gentle_study.cli.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning spaced-repetition sm2 interleaving scheduling education cognitive",
)
