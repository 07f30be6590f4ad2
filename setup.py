from setuptools import setup, find_packages
import re

# Read version from tarifcalc/__init__.py
with open('tarifcalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='tarif-calc',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'tarifcalc': ['data/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'tarif-calc=tarifcalc.cli.__main__:main',
            'tarif-calc-mcp=tarifcalc.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Tariff-versioned monthly pay calculation for hospital physicians.',
    python_requires='>=3.10',
)
