import os
import re

from setuptools import find_packages, setup


def parse_version():
    with open(os.path.join(os.path.dirname(__file__), 'topodombar', '__init__.py'), 'r') as fh:
        return re.search(r"__version__ = '([^']+)'", fh.read()).group(1)


VERSION = parse_version()


def parse_md_readme():
    try:
        with open('README.md', 'r') as fh:
            return fh.read()
    except OSError:
        return ''


TEST_REQS = [
    'coverage>=4.2',
    'pycodestyle>=2.3.1',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'networkx>=2.5',
    'pandas>=1.1',
    'snakemake>=6.1.1',
]

DEPLOY_REQS = ['twine', 'wheel']


setup(
    name='topodombar',
    version='{}'.format(VERSION),
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={'topodombar.schemas': ['*.json']},
    description='Classification of CNVs by pathogenic mechanism using topological domains, enhancers and phenotype similarity',
    long_description=parse_md_readme(),
    long_description_content_type='text/markdown',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS + DEPLOY_REQS,
        'deploy': DEPLOY_REQS,
    },
    tests_require=TEST_REQS,
    setup_requires=['pip>=9.0.0', 'setuptools>=36.0.0'],
    python_requires='>=3.7',
    test_suite='tests',
    entry_points={'console_scripts': ['topodombar = topodombar.main:main']},
)
