from setuptools import setup, find_packages

setup(
    name="css-linter",
    version="1.0.0",
    packages=find_packages(include=['css_linter', 'css_linter.*']),
    install_requires=[
        'tinycss2',
        'cssutils',
        'colorama',
        'chardet',
        'orjson',
        'tqdm',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
        ],
    },
    entry_points={
        'console_scripts': [
            'css-lint=css_linter.cli:main',
        ],
    },
    python_requires='>=3.8',
    author="Kenneth Hanks",
    author_email="fourfigs@gmail.com",
    description="A rule-based linter for CSS stylesheets",
    long_description=open('README.md').read(),
    long_description_content_type="text/markdown",
    url="https://github.com/fourfigs/css-linter",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
