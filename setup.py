
from setuptools import setup, find_packages

setup(
    name="fastaseek",
    version="1.0.0",
    description="Random access to line-wrapped FASTA files through a faidx-style index",
    long_description="Builds, persists and loads a per-record FASTA index and uses it to "
                     "translate (record, position) coordinates into byte offsets, with a "
                     "sequential-scan fallback when no index is available",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
    'biopython>=1.83',
    'pandas>=2.0.3',
    'click>=8.1',
    'pyyaml>=6.0',
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fastaseek=fastaseek.cli.main:cli",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Operating System :: OS Independent",
    ],
    )
