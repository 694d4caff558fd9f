from setuptools import setup, find_packages

setup(
    name="claris-auth",                      # PyPI-safe package name
    version="0.1.0",                         # Semantic version
    author="",
    author_email="",
    description="Cognito USER_SRP_AUTH client and token cache for the Claris ID / FileMaker Data API",
    long_description=open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    url="",
    packages=find_packages(where=".", exclude=["tests", "tests.*"]),
    package_dir={"": "."},                   # root is package root
    include_package_data=True,
    install_requires=[                       # runtime dependencies
        "cryptography>=42.0",
        "fastapi>=0.115",
        "httpx>=0.27",
        "pydantic>=2.11.4",
        "pydantic_settings>=2.9.1",
        "redis>=5.2.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.24",
        ],
    },
    python_requires=">=3.10",
)
