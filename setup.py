import os
import setuptools

def read(fname):
  with open(os.path.join(os.path.dirname(__file__), fname), 'rt') as f:
    return f.read()

def requirements():
  with open(os.path.join(os.path.dirname(__file__), 'requirements.txt'), 'rt') as f:
    return f.readlines()

setuptools.setup(
  name="dvid-tiles",
  version="1.0.0",
  python_requires=">=3.8",
  install_requires=requirements(),
  extras_require={
    "test": [ "pytest", "pytest-cov" ],
  },
  entry_points={
    "console_scripts": [
      "dvidtiles=dvidtiles.cli:main",
    ],
  },
  packages=setuptools.find_packages(exclude=[ "test", "test.*" ]),
  description="Bulk import of tiled microscopy volumes into a DVID server via its command line.",
  long_description=read('README.md'),
  long_description_content_type="text/markdown",
  license = "License :: OSI Approved :: BSD License",
  keywords = "dvid volumetric-data connectomics microscopy tiles import",
  classifiers=[
    "Intended Audience :: Developers",
    "Development Status :: 4 - Beta",
    "License :: OSI Approved :: BSD License",
    "Programming Language :: Python",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.8",
    "Programming Language :: Python :: 3.9",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Topic :: Scientific/Engineering",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX",
    "Operating System :: MacOS",
    "Topic :: Utilities",
  ],
)
