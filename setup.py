import os

import setuptools

root_dir = os.path.abspath(os.path.dirname(__file__))

about = {}
with open(os.path.join(root_dir, "src", "rtcsdp", "__init__.py")) as fp:
    for line in fp:
        if line.startswith("__version__"):
            about["version"] = line.split("=")[1].strip().strip('"')

with open(os.path.join(root_dir, "README.rst"), encoding="utf-8") as fp:
    long_description = fp.read()

setuptools.setup(
    name="rtcsdp",
    version=about["version"],
    description="Restrict and rewrite WebRTC session descriptions",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    license="BSD-3-Clause",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Web Environment",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=["rtcsdp"],
    extras_require={
        "dev": ["coverage>=7.2.2"],
    },
)
