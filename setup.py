# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="dms-location-picker",
    version="0.1.0",
    description="Hierarchical cabinet, vault and folder selection for DMS connector sync scopes",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dmspicker*"]),
    package_data={
        "dmspicker.interface": ["locales/*.json"],
    },
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'dmspicker=dmspicker.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
