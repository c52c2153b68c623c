"""Packaging for QuizTick.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import find_packages, setup

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "QuizTick",
        "CFBundleDisplayName": "QuizTick",
        "CFBundleIdentifier": "com.quiztick.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

# py2app only exists on macOS; don't demand it for a plain install.
py2app_kwargs = {}
if "py2app" in sys.argv:
    py2app_kwargs = {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="QuizTick",
    version="0.1.0",
    packages=find_packages(include=["quiztick", "quiztick.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["quiztick=quiztick.__main__:main"],
    },
    **py2app_kwargs,
)
