"""Logging context management for store operations."""

import time
from contextlib import contextmanager
from typing import Optional

from .structured_logger import store_context, operation_context, get_logger


@contextmanager
def operation_scope(name: str, store: Optional[str] = None, **metadata):
    """Context for a single index or query operation.

    Sets the operation (and optionally store) context variables for every
    log record emitted inside the block, logs failures with context and
    reports the duration on exit.

    Args:
        name: Operation name
        store: Store name, if the operation belongs to one
        **metadata: Additional metadata for the performance record

    Example:
        with operation_scope('bounding_box_query', store='places') as metrics:
            metrics['candidate_cells'] = len(cells)
    """
    logger = get_logger('geomodel.operations')
    operation_token = operation_context.set(name)
    store_token = store_context.set(store) if store is not None else None

    metrics = dict(metadata)
    start_time = time.perf_counter()
    status = 'success'
    try:
        yield metrics
    except Exception as e:
        status = 'failed'
        logger.log_error_with_context(e, operation=name, **metadata)
        raise
    finally:
        logger.log_performance(name, time.perf_counter() - start_time,
                               status=status, **metrics)
        if store_token is not None:
            store_context.reset(store_token)
        operation_context.reset(operation_token)
