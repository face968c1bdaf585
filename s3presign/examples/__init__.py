"""
Examples module: runnable benchmarks.
"""
