"""
setup.py for propgrid.

propgrid is the non-visual core of an object-inspection property grid: it
introspects an object's properties, classifies them into editor kinds and
keeps editor state synchronized with the object.

The only runtime dependency is PyQt6 (QtCore signals for change
notification); no display or widget toolkit is required.
"""

from setuptools import find_packages, setup


if __name__ == "__main__":
    setup(
        name="propgrid",
        version="0.1.0",
        description="Object-inspection property grid core: introspection, editor classification and two-way binding",
        packages=find_packages(include=["propgrid", "propgrid.*"]),
        python_requires=">=3.10",
        install_requires=[
            "PyQt6>=6.4",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
            ],
        },
    )
