import os
from setuptools import setup, find_packages

setup(
    name='wagmatrix',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    package_data={'wagmatrix': [os.path.join('..', 'README.md')]},
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3 :: Only',
    ],
    version='0.1.0',
    description='WAG amino-acid substitution model: stationary frequencies, normalised generator '
                'and its eigendecomposition for transition probability calculations.',
    keywords=['WAG', 'phylogeny', 'amino acid', 'substitution model', 'rate matrix'],
    python_requires='>=3.10',
    install_requires=['numpy>=1.22', 'pandas>=1.0.0'],
    extras_require={'test': ['scipy>=1.8', 'pytest']},
)
