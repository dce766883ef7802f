from setuptools import setup
from switchkit.const import VERSION_STR, DESCRIPTION

setup(
    name="switchkit",
    version=VERSION_STR,
    python_requires='>=3.10',
    description=DESCRIPTION,
    author="Switchkit Contributors",
    packages=["switchkit"],
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "sk = switchkit:main",
            "switchkit = switchkit:main",
        ],
    },
    license="MIT",
    platforms="any",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)
