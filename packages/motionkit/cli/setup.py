from setuptools import find_packages, setup

packages = find_packages(where="../..", include=["motionkit.cli", "motionkit.cli.*"])

setup(
    packages=packages,
    package_dir={"": "../.."},
)
