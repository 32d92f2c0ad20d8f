from setuptools import setup, find_packages

setup(
    name='pathstore',
    version='0.1.0',
    author='Thomas Hansen',
    author_email='thomas.hansen@queensu.ca',
    description='Delimiter-path access and typed lookups for nested JSON/YAML documents.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    install_requires=[
        'click',
        'platformdirs',
        'pydantic>=2',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        "console_scripts": [
            # 'pathstore' command will call the main() group in pathstore/cli.py
            "pathstore = pathstore.cli:main",
        ],
    },
    classifiers=[
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.10',
)
