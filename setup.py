"""
Setup script for the live-question-engine package.

Installs the ``live_engine`` library from src/ together with its bundled
SQLite schema and the ``live-engine`` operator console.
"""

from setuptools import setup, find_packages

setup(
    name="live-question-engine",
    version="1.0.0",
    description="Live Question Engine - timed in-game questions, answers and scoring",
    author="Fan Engagement Team",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    package_data={
        "live_engine": ["_shared/schema.sql"],
    },
    entry_points={
        "console_scripts": [
            "live-engine=live_engine.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
