from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="divelim",
    version="0.1.0",
    description="Elimination analysis for round-robin divisions via max-flow/min-cut.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*", "examples")),
    python_requires=">=3.9",
    install_requires=["networkx", "pyyaml"],
    extras_require={"dev": ["pytest"]},
    entry_points={"console_scripts": ["divelim=divelim.cli:main"]},
)
