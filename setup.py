from setuptools import setup, find_packages
from pathlib import Path

# Read README.md if available, otherwise use a fallback description
readme_path = Path(__file__).parent / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "MikroValid is a lightweight validator for nested JSON-shaped data, with exhaustive error reporting and schema inference."

setup(
    name="mikrovalid",
    version="1.0.0",
    description="Lightweight validator for nested JSON-shaped data with schema inference",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "pyyaml>=6.0",
        "jsonschema>=4.20.0",
        "fsspec>=2023.1.0",
        "typer>=0.9.0",
    ],
    entry_points={
        "console_scripts": [
            "mikrovalid=mikrovalid.cli:main",
        ],
    },
    extras_require={
        "dev": [
            "pytest",
            "coverage",
            "hypothesis",
            "parameterized==0.9.0",
        ],
        "storage-s3": ["s3fs"],
        "storage-gcs": ["gcsfs"],
        "storage-azure": ["adlfs"],
        "storage-all": ["s3fs", "gcsfs", "adlfs"],
    },
)
