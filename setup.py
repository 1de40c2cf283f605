from setuptools import setup, find_packages

setup(
    name="lotto-engine",
    version="1.0.0",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "PyYAML",
        "marshmallow>=3.13.0"
    ],
    extras_require={
        "test": ["pytest"]
    },
    python_requires=">=3.8",
)
