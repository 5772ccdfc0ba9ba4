"""JSON-lines formatter for log files."""

import json
import logging
import traceback
from datetime import datetime, timezone


class JsonFormatter(logging.Formatter):
    """Format each record as a single-line JSON object.

    The store and operation a record belongs to are lifted to top-level
    keys so a log file can be filtered per store or per query type. Query
    metrics from ``log_performance`` go under ``metrics``; any other
    context fields stay under ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        context = dict(getattr(record, 'context', None) or {})
        # Already carried by 'logger' and 'time'
        context.pop('logger_name', None)
        context.pop('timestamp', None)

        entry = {
            'time': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'store': context.pop('store', None),
            'operation': context.pop('operation', None),
            'message': record.getMessage(),
            'source': f"{record.module}:{record.lineno}",
            'context': context or None,
            'metrics': getattr(record, 'performance', None) or None,
            'traceback': self._traceback(record),
        }
        return json.dumps({key: value for key, value in entry.items() if value is not None},
                          separators=(',', ':'), default=str)

    @staticmethod
    def _traceback(record: logging.LogRecord):
        tb = getattr(record, 'traceback', None)
        if tb:
            return tb
        if record.exc_info:
            return ''.join(traceback.format_exception(*record.exc_info))
        return None
