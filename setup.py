from setuptools import setup, find_packages
from pathlib import Path

# Read the requirements from requirements.txt
reqs_path = Path(__file__).parent / "requirements.txt"
requirements = [
    line.strip()
    for line in reqs_path.read_text().splitlines()
    if line.strip() and not line.startswith("#")
]

setup(
    name="shsniff",
    version="0.1.0",
    description="Identify POSIX and alternative shell scripts from cheap local signals",
    packages=find_packages(),
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.2.1"],
    },
    entry_points={
        "console_scripts": [
            "shsniff=shsniff.cli:main",
        ],
    },
    python_requires=">=3.11",
)
