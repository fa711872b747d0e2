"""Install the passwordless authentication gate."""

from setuptools import setup, find_packages

setup(
    name='flask-passwordless-gate',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    python_requires='>=3.8',
    install_requires=[
        "flask>=2.2",
        "werkzeug>=2.2",
        "pytz",
    ],
    extras_require={
        'test': [
            "pytest",
            "pytest-mock",
        ],
    },
    zip_safe=False
)
