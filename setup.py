from setuptools import setup, find_packages

setup(
    name='k0sconfig',
    version='0.1.0',
    packages=find_packages(exclude=['k0sconfig.tests', 'k0sconfig.tests.*']),
    include_package_data=True,
    install_requires=[
        'typer',
        'rich',
        'pydantic>=2.11',
        'PyYAML',
        'python-dotenv',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'k0sconfig=k0sconfig.cli:app'
        ]
    },
    description='Parse, default and validate k0s ClusterConfig documents',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
