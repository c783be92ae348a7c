"""
Setup configuration for the camera-notifier package.
"""

from setuptools import setup, find_packages

# Read README for long description
try:
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "Camera usage monitoring with extensible handlers"


def get_extras():
    """Get optional dependency groups."""
    return {
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "pytest-mock>=3.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.900",
            "ruff>=0.1.0",
        ],
        "test": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "pytest-mock>=3.0",
            "pytest-xdist>=2.0",
        ],
    }


# Core dependencies required on all platforms
install_requires = [
    "click>=8.0.0",  # CLI framework
    "httpx>=0.24.0",  # SwitchBot API client
]

setup(
    name="camera-notifier",
    version="1.0.0",
    author="Camera Notifier Development Team",
    description="Camera usage monitoring with extensible handlers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Home Automation",
        "Topic :: Multimedia :: Video :: Capture",
    ],
    keywords="camera webcam monitoring switchbot home-automation",
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require=get_extras(),
    entry_points={
        "console_scripts": [
            "camera-notifier=camnotify.cli:main",
        ],
    },
    zip_safe=False,
)
