from setuptools import find_packages, setup  # type: ignore

# Do not forget to update and sync the fields in composition/__init__.py!
setup(
    name="composition-over-inheritance",
    version="0.1.0",  # Update this in composition/__init__.py too
    author="LightDance",
    package_data={"composition": ["py.typed"]},
    packages=find_packages(include=["composition", "composition.*"]),
    scripts=[],
    entry_points={
        "console_scripts": [
            "composition=composition.main:main",
        ],
    },
    license="MIT",
    description="Counting sets and property tables: composition versus inheritance.",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    install_requires=[
        "typing-inspect>=0.7.1",
        "typing_extensions>=3.10.0",
        "importlib_metadata>=4.0.0",
    ],
    extras_require={
        "dev": [
            "black==25.9.0",
            "isort==5.11.5",
            "mypy==1.18.1",
            "pytest",
            "pytest-xdist",
            "setuptools",
        ]
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Education",
        "Topic :: Software Development :: Libraries",
    ],
    python_requires=">=3.8",
)
