[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sensefuse"
version = "0.1.0"
description = "Sensor messages, ZeroMQ transport, fixed-point geometry, TSDF entries, configuration and runtime tooling for lidar/IMU SLAM pipelines"
requires-python = ">=3.10"
keywords = ["slam", "tsdf", "lidar", "imu", "zeromq", "point-cloud", "pcd"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pyzmq",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sensefuse"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
