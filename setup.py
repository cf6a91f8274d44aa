"""
Simple setup script to be able to call the install from the command line.
"""
from pathlib import Path

from setuptools import setup

about = {}
root = Path(__file__).resolve(strict=True).parent
with open(root / 'fs_comparator' / '__version__.py', 'r', encoding='utf8') as f:
    exec(f.read(), about)

with open(root / 'README.md', 'r', encoding='utf8') as f:
    readme = f.read()

setup(
    name=about["__title__"],
    version=about["__version__"],
    description=about["__description__"],
    long_description=readme,
    long_description_content_type="text/markdown",
    author=about["__author__"],
    author_email=about["__author_email__"],
    packages=["fs_comparator"],
    package_dir={"fs_comparator": "fs_comparator"},
    include_package_data=True,
    python_requires=">=3.7, <4",
    license=about["__license__"],
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: System :: Filesystems",
        "Topic :: Utilities",
    ],
    entry_points={
        'console_scripts': [
            'fs-comparator = fs_comparator.__main__:main'
        ]
    }
)
