"""Dining philosophers simulation with a lock-based and a semaphore-based table."""

__version__ = "0.1.0"