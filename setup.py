"""Setup script for ml-expr package following Cosmic Python pattern."""

from setuptools import setup, find_namespace_packages

setup(
    name="ml-expr",
    version="1.0.0",
    description="ML Expression Service - Outlier detection queries over configured data sources",
    author="ML Expression Team",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["shared*", "datasources*", "ml_expr*"]),
    py_modules=["config"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "uvicorn[standard]",
        "pydantic>=2",
        "sqlalchemy>=2,<2.1",
        "psycopg2-binary",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-cov",
            "httpx",
        ],
        "dev": [
            "black",
            "flake8",
            "mypy",
            "pre-commit",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.11",
        "Topic :: System :: Monitoring",
    ],
)
