"""Setup script for wallet statement extractor."""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="wallet-statement-extractor",
    version="0.1.0",
    description="Extract transaction records from UPI wallet statements",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business :: Financial",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "pdfplumber>=0.10.0",
        "pdfminer.six>=20221105",
        "openpyxl>=3.1.0",
        "python-dateutil>=2.8.2",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0",
        "rich>=13.0.0",
        "click>=8.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "flake8>=6.1.0",
            "mypy>=1.5.0",
            "ipython>=8.15.0",
            "ipdb>=0.13.13",
            "pip-audit>=2.6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "wallet-extract=wallet_extractor.cli:main",
        ],
    },
)
