"""A declarative command-line argument parser with flags, keyed
options, positionals, and nested subcommands.
"""

from setuptools import setup


__author__ = 'The argtree developers'
__version__ = '0.1.0'
__license__ = 'BSD'


setup(name='argtree',
      version=__version__,
      description="A declarative command-line argument parser with nested subcommands.",
      long_description=__doc__,
      author=__author__,
      packages=['argtree', 'argtree.test'],
      include_package_data=True,
      zip_safe=False,
      license=__license__,
      platforms='any',
      install_requires=['boltons>=20.0.0'],
      extras_require={'test': ['pytest']},
      classifiers=[
          'Topic :: Utilities',
          'Intended Audience :: Developers',
          'Topic :: Software Development :: Libraries',
          'Programming Language :: Python :: 3.8',
          'Programming Language :: Python :: 3.9',
          'Programming Language :: Python :: 3.10',
          'Programming Language :: Python :: 3.11',
          'Programming Language :: Python :: 3.12',
          'Programming Language :: Python :: 3 :: Only',
          'Programming Language :: Python :: Implementation :: CPython',
          'Programming Language :: Python :: Implementation :: PyPy', ]
      )

"""
A brief checklist for release:

* tox
* git commit (if applicable)
* Bump setup.py version off of -dev
* git commit -a -m "bump version for vx.y.z release"
* rm -rf dist/*
* python setup.py sdist bdist_wheel
* twine upload dist/*
* git tag -a vx.y.z -m "brief summary"
* write CHANGELOG
* bump setup.py version onto n+1 dev
* git commit
* git push

"""
