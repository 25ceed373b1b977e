from setuptools import find_packages, setup

NAME = "billease"

setup(
    name=NAME,
    version="0.3.0",
    description="Invoice model, GST totals, amount in words and local invoice storage.",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.11",
    install_requires=["openpyxl>=3.1"],
    extras_require={"test": ["pytest>=7,<9"]},
    entry_points={"console_scripts": ["billease=billease.cli:main"]},
)
