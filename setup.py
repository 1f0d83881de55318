# This is for legacy installation
from setuptools import setup, find_packages

setup(
    name="partls",
    version="0.1.0",
    description="Partitioned least squares regression by alternating optimization",
    author="Your Name",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.24",
        "pandas>=2.0",
        "scipy>=1.10",
        "pyarrow",
        "cvxpy",
        "joblib",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
)
