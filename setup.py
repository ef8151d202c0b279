import re

from setuptools import find_packages, setup


def get_version():
    with open('permgroup/version.py') as f:
        return re.search(r"__version__\s*=\s*'([^']+)'", f.read()).group(1)


setup(name='permgroup',
      version=get_version(),
      description='Base and strong generating sets of permutation groups',
      packages=find_packages(exclude=['tests', 'tests.*']),
      python_requires='>=3.9',
      install_requires=['numpy'],
      extras_require={'test': ['pytest']})
