"""HIDBench: latency and report-rate statistics for mice and keyboards.

The :mod:`hidbench.analysis` package holds the pure statistics engine,
:mod:`hidbench.config` the tunable test parameters and filter profiles, and
:mod:`hidbench.dataio` helpers for loading captured runs from disk.
"""

__version__ = "0.1.0"
