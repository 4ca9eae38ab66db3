"""Sensor messages, ZeroMQ transport, fixed-point geometry, TSDF entries and runtime utilities for SLAM pipelines."""

__version__ = "0.1.0"