from setuptools import setup, find_packages

setup(
    name="wrakit",
    version="0.1.0",
    description="Wind resource assessment and energy capture estimation for single turbine sites",
    packages=find_packages(include=["wrakit", "wrakit.*"]),
    package_data={
        "wrakit": ["default_config.yaml"],
        "wrakit._test": ["data/*"],
    },
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "pyyaml",
        "requests",
    ],
    extras_require={
        "plot": ["matplotlib"],
        "test": ["pytest", "matplotlib"],
    },
)
