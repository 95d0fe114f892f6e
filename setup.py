from setuptools import setup, find_packages

setup(
    name="option-price-curve",
    version="0.1.0",
    description="European option price curves under Black-Scholes, Monte Carlo, binomial and Heston models",
    author="Leo",
    author_email="tabbakhianhatef@gmail.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.25",
        "pandas>=2.0",
        "matplotlib>=3.7",
        "plotly>=5.15",
    ],
    extras_require={
        "dev": ["pytest>=7.0", "scipy>=1.11", "black", "flake8"],
    },
    entry_points={
        "console_scripts": [
            "option-curve=main:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Topic :: Office/Business :: Financial",
        "Topic :: Scientific/Engineering",
    ],
)
