from setuptools import setup, find_packages

setup(
    name="public-prs",
    version="1.0.0",
    description="List open GitHub pull requests from authors outside a set of organizations",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "public-prs=public_prs.cli:main",
        ],
    },
)
