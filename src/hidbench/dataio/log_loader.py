"""Utilities for loading captured latency trials and input events from CSV."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import List

import numpy as np

from ..analysis.latency import TimedSample
from ..analysis.rate import TimedEvent

logger = logging.getLogger(__name__)

SAMPLE_COLUMNS = ("occurred_at", "response_time_ms", "device_class")
EVENT_COLUMNS = ("captured_at", "x", "y")
DEVICE_CLASSES = ("mouse", "keyboard")


def _is_header(line: str) -> bool:
    """True when any field of the first CSV row is not a number."""
    for token in filter(None, (t.strip() for t in line.split(","))):
        try:
            float(token)
        except ValueError:
            return True
    return False


def load_events(path: Path) -> List[TimedEvent]:
    """
    Load report-rate events from a CSV file.

    Columns are ``captured_at[,x,y]``; a single header row is optional and
    skipped automatically. Timestamps are in milliseconds.
    """
    path = Path(path)
    lines = path.read_text(encoding="utf-8").splitlines()
    if lines and _is_header(lines[0]):
        lines = lines[1:]
    rows = [line for line in lines if line.strip()]
    if not rows:
        return []

    try:
        data = np.loadtxt(rows, delimiter=",", ndmin=2)
    except ValueError as exc:
        raise ValueError(f"{path}: event log must be numeric ({exc})") from exc
    if data.size == 0:
        return []

    n_cols = data.shape[1]
    if n_cols not in (1, 3):
        raise ValueError(f"{path}: expected 1 or 3 columns {EVENT_COLUMNS}, got {n_cols}")
    if n_cols == 1:
        return [TimedEvent(captured_at=float(t)) for t in data[:, 0]]
    return [
        TimedEvent(captured_at=float(t), x=float(x), y=float(y))
        for t, x, y in data
    ]


def load_samples(path: Path) -> List[TimedSample]:
    """
    Load latency trials from a CSV file with header
    ``occurred_at,response_time_ms,device_class``.

    Rows whose ``device_class`` is neither ``mouse`` nor ``keyboard`` are
    skipped; missing columns or non-numeric times raise ``ValueError``.
    """
    path = Path(path)
    samples: List[TimedSample] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        missing = [c for c in SAMPLE_COLUMNS if c not in (reader.fieldnames or ())]
        if missing:
            raise ValueError(f"{path}: missing columns {missing}")
        skipped = 0
        for line_no, row in enumerate(reader, start=2):
            device = str(row["device_class"]).strip().lower()
            if device not in DEVICE_CLASSES:
                skipped += 1
                continue
            try:
                occurred_at = float(row["occurred_at"])
                response_time = float(row["response_time_ms"])
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{path}:{line_no}: non-numeric value ({exc})") from exc
            samples.append(
                TimedSample(
                    occurred_at=occurred_at,
                    response_time_ms=response_time,
                    device_class=device,  # type: ignore[arg-type]
                )
            )
    if skipped:
        logger.debug("%s: skipped %d rows with unknown device class", path, skipped)
    return samples
