__author__ = 'EUROCONTROL (SWIM)'

import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="xmljsonize",
    version="0.1.0",
    author="EUROCONTROL (SWIM)",
    author_email="francisco-javier.crabiffosse.ext@eurocontrol.int",
    description="A configurable, bidirectional converter between XML documents and JSON",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.7',
    install_requires=[
        'jsonschema>=3.2.0',
        'pyparsing>=3.0.0',
        'lxml>=4.5.0'
    ],
    extras_require={
        'test': ['pytest']
    }
)
