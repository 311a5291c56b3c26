from setuptools import find_packages, setup

PACKAGE_NAME = "gridroute"
PACKAGE_VERSION = "1.0.0"
PACKAGE_AUTHORS = "gridroute contributors"
PACKAGE_DESCRIPTION = """Shortest path between two points that avoids polygon obstacles,
computed by rasterizing the obstacles onto a grid and searching it with A*
"""
INSTALL_REQUIREMENTS = [
    "numpy",
    "numba",
    "shapely>=2.0",
    "loguru",
    "pyyaml",
    "matplotlib",
    "python-motion-planning>=2.0,<2.1",
]
TEST_REQUIREMENTS = [
    "pytest",
]


setup(
    name=PACKAGE_NAME,
    version=PACKAGE_VERSION,
    description=PACKAGE_DESCRIPTION,
    author=PACKAGE_AUTHORS,
    license="GPLv3",
    packages=find_packages(include=["gridroute", "gridroute.*"]),
    install_requires=INSTALL_REQUIREMENTS,
    extras_require={"test": TEST_REQUIREMENTS},
    entry_points={"console_scripts": ["gridroute = gridroute.cli:main"]},
    zip_safe=False,
    python_requires=">=3.10",
)
