"""Logging and benchmarking helpers."""

from .benchmark import Benchmark
from .logging import configure_logging

__all__ = ['Benchmark', 'configure_logging']
