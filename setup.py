from setuptools import setup, find_packages

setup(
    name="circuit_graph",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2",
        "networkx",
        "numpy"
    ],
    extras_require={
        "test": ["pytest"]
    },
    python_requires=">=3.9",
)
