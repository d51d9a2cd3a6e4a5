"""A setuptools based setup module.
See:
https://packaging.python.org/guides/distributing-packages-using-setuptools/
https://github.com/pypa/sampleproject
"""

# Always prefer setuptools over distutils
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as readme:
    ld = readme.read()

setup(
    name="awsome",
    version="0.1.0",
    description="Terminal browser for AWS resources",
    long_description=ld,
    long_description_content_type="text/markdown",
    classifiers=[  # Optional
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Environment :: Console :: Curses",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3 :: Only",
    ],
    package_dir={"": "src"},  # Optional
    packages=find_packages(where="src"),  # Required
    python_requires=">=3.8, <4",
    install_requires=[
        "blessed>=1.17.12",
        "pyyaml>=5.3.1",
        "boto3>=1.17.59",
        "jq>=1.3.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={  # Optional
        "console_scripts": [
            "awsome=awsome:main",
        ],
    },
)
