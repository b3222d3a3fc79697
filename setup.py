"""Setup secure_route."""

from setuptools import find_packages, setup

with open("README.md") as f:
    readme = f.read()


extra_reqs = {"test": ["pytest", "pytest-cov", "mock"]}


setup(
    name="secure-route",
    version="1.0.0",
    description="URL router with typed bracket placeholders and reverse routing",
    long_description=readme,
    long_description_content_type="text/markdown",
    python_requires=">=3.11",
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP :: WSGI",
    ],
    keywords="URL router routing WSGI reverse-routing",
    packages=find_packages(exclude=["ez_setup", "examples", "example", "tests"]),
    include_package_data=True,
    zip_safe=False,
    extras_require=extra_reqs,
)
