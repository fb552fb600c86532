"""
Setup script for assignsim.

assignsim predicts how a classroom of synthetic learner personas will
experience an assignment before it is handed out:

1. Per-problem signals - success, time on task, confusion, engagement, fatigue
2. Per-student outcomes - estimated grade, trajectories, risk factors
3. Classroom analytics - averages, completion, Bloom coverage, confusion hot spots

The 'assignsim' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="assignsim",
    version="0.1.0",
    description="Classroom simulation of learner personas working through an assignment",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["assignsim", "assignsim.*"]),
    py_modules=["config"],
    python_requires=">=3.11",
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
            "assignsim=assignsim.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
    ],
    keywords="education simulation assessment bloom learner-personas cli",
)
