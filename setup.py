import setuptools

from pythermostat import __version__

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="pythermostat",
    version=__version__,
    author="pythermostat contributors",
    description="REST API server and client for the thermostats of a home",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(),
    install_requires=[
        'fastapi',
        'uvicorn',
        'pydantic>=2',
        'pydantic-settings',
        'python-dotenv',
        'requests',
    ],
    extras_require={
        'test': [
            'pytest',
            'httpx',
        ],
    },
    entry_points={
        'console_scripts': [
            'pythermostat=pythermostat.__main__:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
