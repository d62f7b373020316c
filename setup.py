"""
Setup script for knotCAT.
"""

from setuptools import setup, find_packages

setup(
    name="knotCAT",
    version="1.0.0",
    description="Knot Canonicalization And Tabulation: validate, simplify and catalog knots",
    author="knotCAT Project",
    packages=find_packages(exclude=["knotCAT.tests"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.19.0",
        "networkx>=2.5",
    ],
    extras_require={
        "test": [
            "pytest>=6.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
