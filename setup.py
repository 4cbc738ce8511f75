#!/usr/bin/env python3

from setuptools import setup
import hotel

setup(
    name='hotel-console',
    description='Console to browse, book and manage hotel rooms over a SQL database',
    version=hotel.__version__,
    platforms='ALL',
    keywords='hotel booking console SQL DATABASE',
    license=hotel.__license__,
    packages=['hotel'],
    python_requires='>=3.8',
    install_requires=[
        'Werkzeug>=2.3',
    ],
    extras_require={
        'mysql': ['PyMySQL'],
        'postgresql': ['psycopg2-binary'],
    },
    entry_points={
        'console_scripts': [
            'hotel = hotel.__main__:main',
        ]
    }
)
