#! /usr/bin/env python

from setuptools import setup

from piseries import __version__ as version


with open("README.rst") as f1, open("INSTALL.rst") as f2:
    long_description = f1.read() + "\n\n" + f2.read()


setup(
    name="piseries",
    version=version.rstrip("+"),
    description="Approximate pi with a truncated Leibniz series",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    keywords="pi leibniz series approximation",
    license="GPL3+",
    packages=["piseries", "piseries.reports"],
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Console",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    install_requires=[
        "matplotlib",  # for error plots
        "simplejson",  # for reading and writing properties files
        "txt2tags>=3.6",  # for HTML and Latex reports
    ],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "piseries=piseries.program:main",
            "piseries-sweep=piseries.sweep:main",
        ]
    },
    python_requires=">=3.7",
)
