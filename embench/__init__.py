"""Building blocks of embedded benchmark kernels: random numbers, a bump heap, block merge sort primitives and a window-lift statechart."""

__version__ = "0.1.0"