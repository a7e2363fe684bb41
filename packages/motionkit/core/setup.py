from setuptools import find_packages, setup

packages = find_packages(where="../..", include=["motionkit.core", "motionkit.core.*"])

setup(
    packages=packages,
    package_dir={"": "../.."},
)
