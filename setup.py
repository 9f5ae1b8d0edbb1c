"""
Setup script for the rps-wager package.

Installs the rps_wager package from src/ together with the SQLite
schema used by the games repository.
"""

from setuptools import setup, find_packages

setup(
    name="rps-wager",
    version="1.0.0",
    description="Wagered two-player Rock-Paper-Scissors game records and lifecycle service",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.6.0",
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
        "rps_wager._storage": ["schema.sql"],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
