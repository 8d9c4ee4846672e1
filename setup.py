"""
Setup script for roitensor package
Rotated region-of-interest extraction into model-ready float tensors
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="roitensor",
    version="0.1.0",
    description="Crop, rotate, resample and range-map image regions into float tensors for model input",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Image Processing",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        # Core numeric stack
        "numpy>=1.22",
        "numba>=0.57",
        # Geometry
        "affine>=2.4,<3.0",
        # Image interop
        "pillow>=10.0",
    ],
    extras_require={
        "dev": [
            "black>=22.0",
            "isort>=5.0",
            "pytest>=7.0",
            "pytest-cov>=3.0",
            # independent bilinear reference in tests
            "scipy>=1.7,<2.0",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
