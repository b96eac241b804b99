from setuptools import setup, find_packages

setup(
    name="service-adapter",
    version="0.1.0",
    description="Deployment plan model, JSON/YAML codec and structural validator",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "jsonschema>=4",
        "PyYAML>=6",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
)
