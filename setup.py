from setuptools import setup, find_packages

setup(
    name="poisson-scheduler",
    version="0.1.0",
    description="Poisson-process arrival timestamps for load generation and simulation",
    author="adamfilli",
    packages=find_packages(include=["poissonscheduler", "poissonscheduler.*"]),
    install_requires=[
        "numpy",
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.10",
)
