from setuptools import setup, find_packages

setup(
    name="exportplist",
    version="0.2.0",
    packages=find_packages(include=["exportplist", "exportplist.*"]),
    include_package_data=True,
    install_requires=[
        "rich",
        "rich-argparse",
        "python-dotenv",
        "toml",
        "asn1crypto",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "exportplist=exportplist.cli:main",
            "generate-export-options=exportplist.cli:generate_main",
            "detect-export-options=exportplist.cli:detect_main",
        ],
    },
)
