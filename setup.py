from setuptools import setup, find_packages

setup(
    name="trading_rules",
    version="0.1",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        'pandas',
        'numpy',
        'matplotlib',
        'pydantic>=2'
    ],
    extras_require={
        'test': ['pytest']
    }
)
