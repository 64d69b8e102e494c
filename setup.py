from setuptools import setup, find_packages
from pathlib    import Path

base_dir     = Path(__file__).parent.resolve()
version_file = base_dir / "lib/requestgate/__version__.py"
readme_file  = base_dir / "README.md"

# Eval the version file to get __version__; avoids importing our own package
with version_file.open() as f:
    exec(f.read())

# Get the long description from the README file
with readme_file.open(encoding = "utf-8") as f:
    long_description = f.read()

setup(
    name = "request-gate",
    version = __version__,

    packages = find_packages("lib"),
    package_dir = {"": "lib"},
    package_data = {"": ["data/*"]},

    description = "Validation and sample filtering gate for incoming sample request documents",
    long_description = long_description,
    long_description_content_type = "text/markdown",

    classifiers = [
        "Development Status :: 5 - Production/Stable",

        # This is a CLI and a library
        "Environment :: Console",

        # This is for bioinformatic software devs and researchers
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",

        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
    ],

    # Install a requestgate program which calls requestgate.cli.cli()
    entry_points = {
        "console_scripts": [
            "requestgate = requestgate.cli:cli",
        ],
    },

    python_requires = ">=3.9",

    install_requires = [
        "click >=8.0",
        "jsonschema",
        "pyyaml",
        "typing_extensions >=3.7.4",
    ],

    extras_require = {
        "dev": [
            "mypy",
            "pylint",
            "pytest >=6.2.5,!=7.0.0,<9",
            "types-PyYAML",
        ],
    },
)
