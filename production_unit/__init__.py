"""
Production Event Register

In-memory register of production steps with Prometheus metrics.
"""

__version__ = "1.0.0"
