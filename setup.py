from setuptools import setup, find_packages

setup(
    name="rebalance-dashboard-engine",
    version="1.0.0",
    author="Rebalance Dashboard Team",
    description="Advisor dashboard rebalancing engine: portfolio models, config and trade sizing",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={
        "portfolio_models": ["py.typed"],
        "rebalancer_config": ["py.typed"],
        "rebalance_engine": ["py.typed"],
    },
    install_requires=[
        "pydantic==2.11.7",
        "PyYAML==6.0.2",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "rebalance-dashboard=rebalance_engine.cli:main",
        ],
    },
    python_requires=">=3.11",
)
