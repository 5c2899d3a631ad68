# setup.py
from setuptools import setup, find_packages

setup(
    name="drivemap",
    version="1.0.0",
    description="Decode, assemble and validate the content hierarchy of Drive snapshots",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Only the 'drivemap' package under src/
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'drivemap=drivemap.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
