import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

with open("unum/version.py", "r") as fh:
    version = fh.read().strip().strip('"')

setuptools.setup(
    name="unum",
    version=version,
    description="Universal numbers backed by IEEE-754 doubles. Exact values and open intervals, one ubit apart.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(),
    platforms=['any'],
    python_requires='>=3.9',
    # NOTE:  3.9 for math.nextafter()
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: CC0 1.0 Universal (CC0 1.0) Public Domain Dedication",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Mathematics",
            # interval arithmetic
            # unum, ubit
            # IEEE-754
    ],
)
