"""
Setup script for the job-tracker project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="job-tracker",
    version="0.3.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["version"],
    include_package_data=True,
    package_data={"frontend": ["templates/*.html"]},
    python_requires=">=3.11",
    install_requires=[
        "flask>=3.0",
        "pymongo>=4.6",
        "pydantic>=2.5",
        "python-dotenv>=1.0",
        "requests>=2.31",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-mock>=3.12",
        ],
    },
)
