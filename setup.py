"""
Packaging for compressapi.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="compressapi",
    version="0.1.0",
    author="Iyke David",
    author_email="davidiyke04@gmail.com",
    description="Negotiated br/gzip/deflate response compression middleware for FastAPI",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["compressapi", "compressapi.*"]),
    classifiers=[
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Framework :: FastAPI",
    ],
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.100.0",
        "starlette>=0.27.0",
        "uvicorn[standard]>=0.15.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "brotli>=1.0.9",
        "typer>=0.9.0",
        "rich>=10.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=2.0.0",
            "httpx>=0.24.0",
            "black>=21.0",
            "isort>=5.0.0",
            "mypy>=0.910",
        ],
    },
    entry_points={
        "console_scripts": [
            "compressapi=compressapi.cli:app",
        ],
    },
)
