from setuptools import setup

version = {}
with open('distexplorer/version.py', 'r') as f:
    exec(f.read(), version)

with open('README.md', 'r') as f:
    long_description = f.read()

setup(
    name='distexplorer',
    version=version['__version__'],
    description='Probability Distribution Explorer',
    long_description=long_description,
    long_description_content_type='text/markdown',
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.19',
        'matplotlib>=3.5',
        'scipy>=1.5',
        'markdown>=3.3',
        'pyyaml>=5.4',
        ],
    extras_require={'test': ['pytest']},
    packages=['distexplorer',
              'distexplorer.common',
              'distexplorer.common.style',
              'distexplorer.distexplore',
              'distexplorer.distexplore.report',
              'distexplorer.project'],
    entry_points={
        'console_scripts': ['distexplore = distexplorer.__main__:main_explore',
                            'distexploref = distexplorer.__main__:main_setup',
                            ],
        },
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
        'Operating System :: OS Independent',
        ]
    )
