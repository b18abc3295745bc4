import setuptools

setuptools.setup(
    name="controller_db",
    version="0.2",
    author="yochi",
    author_email="pedrogush@gmail.com",
    description="JSON file stores and a per-quality item count database",
    packages=["services", "utils"],
    classifiers=["Programming Language :: Python :: 3", "Operating System :: OS Independent"],
    python_requires=">=3.11",
    install_requires=[
        "loguru",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
