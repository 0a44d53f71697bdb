#!/usr/bin/env python
# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.
from setuptools import setup, find_packages
import pathlib
import re

HERE = pathlib.Path(__file__).parent.absolute()

SLIDEDIFF_PATH = HERE / "slidediff"


def get_version(path):
    with open(path) as f:
        return re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.M).group(1)


VERSION = get_version(SLIDEDIFF_PATH / '_version.py')

LONG_DESCRIPTION = """\
slidediff compares two snapshots of a slide deck document (a nested
tree of objects, arrays and scalars) and reports what changed, as a
structured change set, a unified text diff or a per slide summary.
"""


if __name__ == '__main__':
    setup(
      name='slidediff',
      version=VERSION,
      description='Structural diff of slide deck documents',
      long_description=LONG_DESCRIPTION,
      license='BSD',
      python_requires='>=3.6',
      packages=find_packages(include=['slidediff', 'slidediff.*']),
      package_data={
          'slidediff': ['*.json'],
          'slidediff.tests': ['files/*.json'],
      },
      install_requires=[
          'colorama',
          'pygments',
          'traitlets>=5',
      ],
      extras_require={
          'test': [
              'pytest>=6.0',
              'jsonschema',
          ],
      },
      entry_points={
          'console_scripts': [
              'slidediff = slidediff.slidediffapp:main',
          ],
      },
      classifiers=[
          'Intended Audience :: Developers',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
      ],
    )
