from setuptools import setup, find_packages

package_name = "field_pathfinder"

setup(
    name="field-pathfinder",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={
        # ALL yaml configs
        package_name: ["config/*.yaml"],
    },
    install_requires=[
        "setuptools",
        "pyyaml",
        "numpy",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    zip_safe=True,
    description="Fruit-avoiding A* path finder for wide implements inside field polygons",
    entry_points={
        "console_scripts": [
            "plan_path = field_pathfinder.plan_path:main",
        ],
    },
)
