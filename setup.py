# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="tree2json",
    version="1.0.0",
    description="Convert the text output of the 'tree' command into nested JSON",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["tree2json*"]),
    package_data={"tree2json": ["interface/locales/*.json"]},
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.31",
        "fastapi>=0.110",
        "uvicorn>=0.29",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "httpx>=0.27",
        ],
    },
    entry_points={
        "console_scripts": [
            "tree2json=tree2json.main:main",
            "tree2json-serve=tree2json.interface.http.app:serve",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
