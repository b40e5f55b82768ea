from setuptools import setup, find_packages


install_requires = [
    'PyYAML>=3.0',
    'pyproj>=2',
    'jsonschema>=4',
    'werkzeug>=2.2',
]


def long_description():
    return open('README.md').read()


setup(
    name='WMSLayer',
    version="1.0.0",
    description='Tile layer client for WMS 1.1.1 services',
    long_description=long_description(),
    long_description_content_type='text/markdown',
    author='The WMSLayer Authors',
    license='Apache Software License 2.0',
    packages=find_packages(),
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'wmslayer-util = wmslayer.script.util:main',
        ],
    },
    package_data={'': ['*.xml', '*.yaml', '*.json']},
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    zip_safe=False
)
