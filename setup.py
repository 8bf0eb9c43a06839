from setuptools import setup

setup(
    name="Huaci",
    version="0.1",
    packages=["huaci", "huaci.dictionary"],
    package_data={"huaci": ["resources/*.toml", "resources/*.db"]},
    license="",
    description="Backend of the Huaci word lookup and flashcard assistant",
    python_requires=">=3.12",
    entry_points={
        "console_scripts": ["huaci=huaci.__main__:main"],
    },
    install_requires=[
        "coloredlogs",
        "pathvalidate~=3.2",
        "platformdirs~=4.2",
        "pydantic~=2.7",
        "rich~=13.7",
        "tomlkit~=0.12",
        "watchdog~=4.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
