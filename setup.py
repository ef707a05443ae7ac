"""
Setuptools build script for the contractual package.

Package metadata is kept here, the version is read from the package
``__init__.py`` without importing the package (its runtime dependencies are
not available in an isolated build environment), and the pytest plugin is
registered through the ``pytest11`` entry point.
"""

# External imports with version comments for dependency management and compatibility tracking
import pathlib  # >=3.11 - Path manipulation for reading README and package sources
import re  # >=3.11 - Version string extraction from the package initializer

import setuptools  # >=61.0.0 - setup() function and package discovery

# Global path constants for consistent file location management across build operations
HERE = pathlib.Path(__file__).parent
PACKAGE_DIR = HERE / 'contractual'
README_PATH = HERE / 'README.md'
REQUIREMENTS_PATH = HERE / 'requirements.txt'
DEV_REQUIREMENTS_PATH = HERE / 'requirements-dev.txt'

# Package metadata constants
PACKAGE_NAME = 'contractual'
AUTHOR = 'contractual Development Team'
AUTHOR_EMAIL = 'contractual@example.com'
DESCRIPTION = 'Reusable pytest contract suites for equality, ordering, instantiability and static utility classes'
LICENSE = 'Apache-2.0'
URL = 'https://github.com/contractual/contractual'

KEYWORDS = [
    'pytest', 'testing', 'contracts', 'equality', 'hash', 'ordering', 'test mixins'
]

CLASSIFIERS = [
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'Topic :: Software Development :: Testing',
    'License :: OSI Approved :: Apache Software License',
    'Operating System :: OS Independent',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3.11',
    'Programming Language :: Python :: 3.12',
    'Programming Language :: Python :: 3.13',
    'Framework :: Pytest',
]


def read_requirements(requirements_file: pathlib.Path) -> list:
    """
    Reads and parses requirements from a requirements file, returning an empty list if the
    file is missing so that the built-in defaults are used instead.

    Args:
        requirements_file (pathlib.Path): Path to requirements file for dependency parsing

    Returns:
        list: List of requirement strings suitable for setuptools install_requires
    """
    if not requirements_file.exists():
        return []

    requirements = []
    for line in requirements_file.read_text(encoding='utf-8').splitlines():
        # Remove inline comments while preserving package specifications
        line = line.split('#', 1)[0].strip()
        if line:
            requirements.append(line)
    return requirements


def read_long_description() -> str:
    """
    Reads README.md content for long_description, falling back to the short description.

    Returns:
        str: README content or fallback description
    """
    if README_PATH.exists():
        return README_PATH.read_text(encoding='utf-8')
    return DESCRIPTION


def get_version_from_package() -> str:
    """
    Extracts the version from the package __init__.py without importing the package.

    Returns:
        str: Package version string

    Raises:
        RuntimeError: If no PACKAGE_VERSION assignment is found
    """
    source = (PACKAGE_DIR / '__init__.py').read_text(encoding='utf-8')
    match = re.search(r"^PACKAGE_VERSION\s*=\s*['\"]([^'\"]+)['\"]", source, re.MULTILINE)
    if not match:
        raise RuntimeError('Unable to find PACKAGE_VERSION in contractual/__init__.py')
    return match.group(1)


def setup_package():
    """
    Main setup function that configures and executes setuptools.setup() with package
    metadata, dependencies, and the pytest plugin entry point.
    """
    version = get_version_from_package()

    install_requires = read_requirements(REQUIREMENTS_PATH)
    if not install_requires:
        # Contract suites run inside pytest, so pytest is a runtime dependency
        install_requires = [
            'pytest>=8.0.0',
            'pydantic>=2.5.0',
            'loguru>=0.7.0',
            'typing_extensions>=4.9.0',
        ]

    test_requirements = [
        'pytest>=8.0.0',
        'pytest-cov>=4.0.0',
        'hypothesis>=6.90.0',
    ]

    dev_requirements = read_requirements(DEV_REQUIREMENTS_PATH)
    if not dev_requirements:
        dev_requirements = test_requirements + [
            'black>=24.0.0',
            'flake8>=7.0.0',
        ]

    setup_config = {
        'name': PACKAGE_NAME,
        'version': version,
        'description': DESCRIPTION,
        'long_description': read_long_description(),
        'long_description_content_type': 'text/markdown',
        'author': AUTHOR,
        'author_email': AUTHOR_EMAIL,
        'url': URL,
        'license': LICENSE,
        'keywords': KEYWORDS,
        'classifiers': CLASSIFIERS,

        'packages': setuptools.find_packages(exclude=['tests', 'tests.*']),

        'install_requires': install_requires,

        'extras_require': {
            'dev': dev_requirements,
            'test': test_requirements,
        },

        # pytest discovers the plugin through this entry point on install
        'entry_points': {
            'pytest11': [
                'contractual = contractual.plugin',
            ]
        },

        'python_requires': '>=3.11',
        'zip_safe': False,
    }

    setuptools.setup(**setup_config)


# Execute setup_package() when script is run directly for legacy setuptools compatibility
if __name__ == '__main__':
    setup_package()
