from pathlib import Path

from setuptools import find_packages, setup

cwd = Path(__file__).parent
description_file = cwd / "doc" / "pypi-description.md"
if description_file.is_file():
    long_description = description_file.read_text()
else:
    long_description = ""

setup(
    name="ddebif",
    version="0.1.0",
    description="Equilibria, linearization and characteristic matrices of constant-delay systems",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=["numpy", "jax", "matplotlib"],
    extras_require={"dev": ["pytest", "scipy", "ruff", "mypy"]},
)
