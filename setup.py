import os

from setuptools import setup, find_packages

with open(os.path.join(os.path.dirname(__file__), "readme.md"), "r") as fh:
    long_description = fh.read()

setup(
    name='cyclebook',
    version='1.0.0',
    license='MIT',
    description='A booking backend for campus cycle rentals.',
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires='>=3.10',
    install_requires=[
        'aiohttp',
        'aiohttp-cors',
        'aiohttp-apispec',
        'apispec',
        'marshmallow>=3.13,<4',
        'marshmallow-jsonschema',
        'tortoise-orm<1',
        'python-jose',
        'PyNaCl',
        'sentry-sdk',
        'uvloop',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-aiohttp',
            'pytest-asyncio',
            'Faker',
        ],
    },
    entry_points={
        'console_scripts': ['cyclebook=cyclebook.cli:run'],
    },
)
