"""Data input helpers for captured test runs.

:mod:`log_loader` parses CSV exports of latency trials and report-rate
events so they can be re-analysed offline with :mod:`hidbench.analysis`.
"""
