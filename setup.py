from setuptools import setup, find_packages

setup(
    name="cosmos-chain-sdk",
    version="0.3.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.31.0",
        "pynacl>=1.5.0",
        "typing-extensions>=4.0.0",
        "httpx>=0.25.0",
        "grpcio>=1.51.0",
        "protobuf>=4.21.0",
        "cosmpy>=0.9.2",
        "ecdsa>=0.18.0",
        "bech32>=1.2.0",
        "tomli>=2.0.0",
        "tomli-w>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
)
