"""Load sonar frames from .npy or CSV files."""
import csv
import logging
import os

import numpy as np

logger = logging.getLogger(__name__)


def _load_csv(filepath: str) -> np.ndarray:
    rows = []
    with open(filepath, 'r') as f:
        reader = csv.reader(f)
        for line_no, row in enumerate(reader, start=1):
            if not row:
                continue
            try:
                rows.append([int(float(v)) for v in row])
            except ValueError:
                raise ValueError(f"{filepath}:{line_no}: non-numeric sample")

    if not rows:
        raise ValueError(f"Empty frame file: {filepath}")
    width = len(rows[0])
    if any(len(r) != width for r in rows):
        raise ValueError(f"Ragged rows in frame file: {filepath}")
    return np.array(rows, dtype=np.int64)


def load_frame(filepath: str) -> np.ndarray:
    """Load a 2-D frame of unsigned 16-bit intensities.

    Args:
        filepath: ``.npy`` array or CSV with one image row per line.

    Returns:
        uint16 array of shape (rows, cols).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: Unknown extension, non 2-D data, or samples outside
            the 0-65535 range.
    """
    if not os.path.isfile(filepath):
        raise FileNotFoundError(filepath)

    ext = os.path.splitext(filepath)[1].lower()
    if ext == '.npy':
        data = np.load(filepath, allow_pickle=False)
    elif ext in ('.csv', '.txt'):
        data = _load_csv(filepath)
    else:
        raise ValueError(f"Unsupported frame format: {ext or filepath}")

    if data.ndim != 2:
        raise ValueError(f"Frame must be 2-D, got shape {data.shape}")
    if data.size and (data.min() < 0 or data.max() > 65535):
        raise ValueError("Frame samples must fit in 16 unsigned bits")

    logger.debug("Loaded %dx%d frame from %s", data.shape[0], data.shape[1], filepath)
    return data.astype(np.uint16)
