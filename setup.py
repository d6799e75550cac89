from setuptools import setup, find_packages

setup(
    name='projectile_sim',
    version='0.1.0',
    description='Constraint-propagation solver for two-axis uniformly-accelerated projectile motion',
    author='Projectile Simulation Team',
    packages=find_packages(exclude=['tests', 'tests.*', 'examples']),
    install_requires=[
        'numpy>=1.24.0',
    ],
    extras_require={
        'dev': [
            'pytest>=7.0.0',
            'pytest-cov>=4.0.0',
        ]
    },
    python_requires='>=3.9',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Education',
        'Topic :: Scientific/Engineering :: Physics',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
)
