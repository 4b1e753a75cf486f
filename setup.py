# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="nodecat",
    version="1.0.0",
    description="Concatenate files and standard input to standard output, reporting every error",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["nodecat", "nodecat.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'nodecat=nodecat.main:main',  # POSIX cat-like command
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
