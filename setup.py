from setuptools import find_packages, setup


extras_require = {}

extras_require["tests"] = [
    'pytest>=7.4,<9.0'
]

extras_require["all"] = [
    *extras_require["tests"],
]


setup(
    name='teamhub',
    version='1.0.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    license='MIT',
    description='An in-memory manager for organizations, their teams and team members',
    entry_points={
        'console_scripts': [
            'teamhub = teamhub.cli:main',
        ],
    },
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    install_requires=[
        'boto3>=1.28.55',
        'python-dotenv>=1.0.0,<2.0',
        'python-dateutil>=2.8.2,<3.0'
    ],
    extras_require=extras_require,
    python_requires=">=3.10"
)
