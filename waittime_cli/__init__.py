"""
Waittime CLI package.

Analyzes a log of job submit/start/stop times and reports the total
perceived wait time, run time and busy time of the machine.
"""

__version__ = "1.0.0"

__all__ = ["cli"]
