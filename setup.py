from setuptools import setup, find_packages

setup(
    name='convention_loader',
    version='0.1.0',
    description='Naming-convention based class loading for plugin trees',
    packages=find_packages(include=['convention_loader', 'convention_loader.*']),
    python_requires='>=3.9',
    install_requires=[],
    extras_require={
        'dev': ['pytest>=7.0', 'mcp[cli]>=1.2.0,<2'],
        'mcp': ['mcp[cli]>=1.2.0,<2'],
    },
    entry_points={
        'console_scripts': [
            'convention-loader-mcp=convention_loader.mcp_server:main',
        ],
    },
)
