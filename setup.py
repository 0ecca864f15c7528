"""Set-up file for RelatePy for installations using ``pip install .``"""
from setuptools import find_packages, setup


with open("requirements.txt") as f:
    required = f.read().splitlines()


setup(
    name="relatepy",
    version="0.1.0",
    license="GPL",
    keywords=["de-9im relate linestring topology computational geometry"],
    install_requires=required,
    extras_require={"testing": ["pytest"]},
    description="DE-9IM relate operation for linear geometries",
    platforms=["Linux", "Windows", "Mac OS-X"],
    package_data={
        "relatepy": [
            "py.typed",
        ],
    },
    packages=find_packages("src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    zip_safe=False,
)
