import setuptools  # type: ignore

PACKAGE_NAME = "pyversion"


def read_version() -> str:
    with open(f"src/{PACKAGE_NAME}/_version.py", "rt") as f:
        for line in f:
            line = line.strip()
            if line.startswith("__version__ = "):
                version = line.split("=", 1)[-1].strip()
                version = version[1:-1]  # Remove quotation characters
                return version

    raise RuntimeError("Unable to find __version__ string")


setuptools.setup(
    name=PACKAGE_NAME,
    version=read_version(),
    description="Increment, decrement, set and show the version in pyproject.toml",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    install_requires=[
        "pydantic>=2",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [f"{PACKAGE_NAME}={PACKAGE_NAME}.cli:main"],
    },
)
