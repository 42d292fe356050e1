"""Available parallelism detection and worker count computation."""

from __future__ import annotations

import logging
import os

import psutil

LOG = logging.getLogger(__name__)


def get_available_parallelism(configured_max: int | None = None) -> int:
    """
    Get the number of logical CPUs usable for concurrent transcodes.

    Args:
        configured_max: Optional cap from configuration; ignored unless positive

    Returns:
        At least 1

    """
    try:
        logical_cores = psutil.cpu_count(logical=True) or os.cpu_count() or 1
    except (OSError, AttributeError, ValueError) as e:
        LOG.warning("Failed to detect CPU count with psutil: %s. Falling back to os.cpu_count().", e)
        logical_cores = os.cpu_count() or 1

    if configured_max is not None and configured_max > 0 and configured_max < logical_cores:
        LOG.info("Capping parallelism from %d logical cores to configured %d", logical_cores, configured_max)
        return configured_max

    return logical_cores


def compute_worker_count(parallelism: int, file_count: int) -> int:
    """Workers for a run: one per bucket, never more than there are files."""
    return max(0, min(parallelism, file_count))
