from setuptools import setup, find_packages

setup(
    name="upgrade-params",
    version="0.1.0",
    description="Compute proxy upgrade parameters with ABI-encoded initializer calldata",
    packages=find_packages(),
    install_requires=[
        "web3>=6.0.0",
        "eth-abi>=4.0.0",
        "eth-utils>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "upgrade-params=upgrade_params.main:main",
        ],
    },
)
