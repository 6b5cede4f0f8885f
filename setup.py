from setuptools import find_packages, setup

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="perfidioms",
    version="1.0.0a1",
    author="Robert Brewer, Slobodan Ilić",
    author_email="dev@crunch.io",
    description="Runnable benchmarks of performance idioms for data analysis.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=["numpy>=1.22", "pandas>=1.4", "numba>=0.56"],
    extras_require={
        "charts": ["seaborn>=0.12", "matplotlib"],
        "test": ["pytest"],
    },
    tests_require=["pytest"],
    entry_points={"console_scripts": ["perfidioms = perfidioms.cli:main"]},
)
