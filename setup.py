from setuptools import setup, find_packages

setup(
    name="cns-sdk",
    version="0.1.0",
    description="Python SDK for the IU Central Notification Service",
    author="CNS SDK Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "httpx>=0.25.1",
        "pydantic>=2.0",
        "pydantic-settings>=2.1.0",
        "structlog>=23.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.21",
        ],
    },
    python_requires=">=3.10",
)
