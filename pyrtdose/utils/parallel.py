"""
Thread-pool sizing for the scattering study.

:func:`optimal_worker_count` picks how many threads sample slab
thicknesses at once. One core is left free unless the machine only has one,
and a pool is never larger than the number of tasks.
"""

import os
import warnings
from typing import Iterable, Optional, Union


def _task_count(workload: Union[int, Iterable]) -> int:
    if hasattr(workload, "__len__"):
        return len(workload)
    return int(workload)


def optimal_worker_count(workload: Union[int, Iterable], user_requested: Optional[int] = None) -> int:
    """
    Number of worker threads for a workload.

    :param workload: Tasks to run, or their count.
    :type workload: iterable or int
    :param user_requested: Requested pool size. Values above the available
        cores minus one are capped with a warning.
    :type user_requested: int, optional

    :returns: Pool size, at least 1.
    :rtype: int
    """
    available = max(1, (os.cpu_count() or 1) - 1)
    n_tasks = _task_count(workload)
    if n_tasks <= 0:
        return 1

    if user_requested is None:
        return min(n_tasks, available)

    if user_requested > available:
        warnings.warn(
            f"Requested {user_requested} workers, but only {available} allowed based on CPU count. "
            f"Using {available} workers instead."
        )
        return available
    return max(1, user_requested)
