from setuptools import setup, find_packages

setup(
    name="specmeta",
    version="0.1.0",
    packages=find_packages(include=["specmeta", "specmeta.*"]),
    include_package_data=True,
    install_requires=[
        "python-dotenv>=0.19.0",
        "click>=8.0.0",
        "pyyaml>=6.0.0",
        "rich>=12.0.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'specmeta=specmeta.__main__:main',
        ],
    },
    description="Metadata model for behavior-driven test groups and examples",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
