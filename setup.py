from setuptools import setup, find_packages

setup(
    name='mocopi_sdk_python',
    version='0.1.0',
    description='Decoder for mocopi motion capture UDP datagrams',
    packages=find_packages(include=['mocopi_sdk_python', 'mocopi_sdk_python.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'scipy',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
