from setuptools import setup, find_packages  # type: ignore


with open("README.md", "r", encoding="utf-8") as f:
    readme = f.read()


setup(
    name="draft",
    version="0.1.0",
    description="Extract code from literate markdown documents",
    long_description=readme,
    long_description_content_type="text/markdown",
    author="Wolf",
    author_email="Wolf@zv.cx",
    url="",
    license="",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.8",
    install_requires=["click"],
    extras_require={"test": ["pytest"]},
    entry_points="""
        [console_scripts]
        draft=draft.draft:main
    """
)
