"""Setup configuration for FinanceiroLB package."""

from setuptools import setup, find_namespace_packages

setup(
    name="financeiro-lb",
    version="1.0.0",
    description="Accounts payable and counterparties back office",
    author="",
    author_email="",
    packages=find_namespace_packages(include=["config*", "src*", "app*"]),
    python_requires=">=3.11",
    install_requires=[
        "duckdb>=1.0.0",
        "pandas>=2.1.0",
        "streamlit>=1.37.0",
        "requests>=2.31.0",
        "python-dotenv>=1.0.0",
        "tenacity>=8.2.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "black>=24.1.0",
            "ruff>=0.2.0",
        ],
    },
)
