# setup.py
from setuptools import setup, find_packages

setup(
    name="docs_to_pdf",
    version="0.1.0",
    description="Crawl a documentation site and bind its pages into one PDF",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "playwright>=1.40",
        "pydantic>=2.5",
        "pypdf>=4.0",
        "PyYAML>=6.0",
        "reportlab>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "docs-to-pdf=docs_to_pdf.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
