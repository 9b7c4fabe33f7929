#!/usr/bin/env python3
"""
Setup configuration for the Saab quickstart track fixture
"""

from setuptools import setup, find_packages
import os

# Read README for long description
def read_readme():
    if os.path.exists("README.md"):
        with open("README.md", "r", encoding="utf-8") as f:
            return f.read()
    return "Saab track data fixture for exercising a geospatial data store"

# Read requirements
def read_requirements():
    requirements = []
    if os.path.exists("requirements.txt"):
        with open("requirements.txt", "r", encoding="utf-8") as f:
            requirements = [
                line.strip() 
                for line in f 
                if line.strip() and not line.startswith("#")
            ]
    return requirements

setup(
    name="saab-quickstart",
    version="0.1.0",
    description="Saab track data fixture for exercising a geospatial data store",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    
    # Package discovery
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    
    # Dependencies
    install_requires=read_requirements(),
    
    # Optional dependencies
    extras_require={
        "dev": [
            "pytest>=7.3.0",
            "pytest-cov>=4.1.0",
        ],
    },
    
    # Classifiers
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering :: GIS",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    
    # Python version requirement
    python_requires=">=3.9",
    
    # Include additional files
    include_package_data=True,
    package_data={
        "saab_quickstart": [
            "data/*.csv",
        ],
    },
    
    keywords=["gis", "geomesa", "ecql", "tracks", "fixtures"],
)
