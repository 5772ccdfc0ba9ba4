"""Console formatter for geocell store logs."""

import logging
from typing import Any, Dict, Optional


class HumanFormatter(logging.Formatter):
    """Render records as one readable line plus an optional query summary.

    Records emitted inside an operation scope are tagged with the store and
    operation they belong to, e.g. ``[places/bounding_box_query]``. Records
    carrying performance data get a second line with the query plan:
    resolution, covering cells, candidates and culled results.
    """

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[1;31m',
    }
    FAINT = '\033[2m'
    PLAIN = '\033[0m'

    # Performance keys shown in query summaries, in display order
    SUMMARY_FIELDS = (
        ('resolution', 'res'),
        ('candidate_cells', 'cells'),
        ('items_processed', 'candidates'),
        ('results', 'results'),
    )

    def __init__(self, use_colors: bool = True, show_context: bool = True):
        super().__init__(datefmt='%Y-%m-%d %H:%M:%S')
        self.use_colors = use_colors
        self.show_context = show_context

    def format(self, record: logging.LogRecord) -> str:
        head = [self.formatTime(record, self.datefmt), f"{record.levelname:<8}", record.name]
        scope = self.scope_label(getattr(record, 'context', None)) if self.show_context else ''
        if scope:
            head.append(scope)
        head.append(record.getMessage())
        lines = [self._paint(' '.join(head), self.LEVEL_COLORS.get(record.levelno))]

        summary = self.query_summary(getattr(record, 'performance', None))
        if summary:
            lines.append(self._paint(f"  {summary}", self.FAINT))

        tb = getattr(record, 'traceback', None)
        if tb:
            lines.extend(f"  {line}" for line in tb.rstrip().splitlines())
        return '\n'.join(lines)

    @staticmethod
    def scope_label(context: Optional[Dict[str, Any]]) -> str:
        """Get ``[store/operation]`` for a record's context, or ''."""
        if not context:
            return ''
        names = [name for name in (context.get('store'), context.get('operation')) if name]
        return f"[{'/'.join(names)}]" if names else ''

    @classmethod
    def query_summary(cls, perf: Optional[Dict[str, Any]]) -> str:
        """Get e.g. ``1.52 ms, res=4, cells=9, candidates=12, results=3``."""
        if not perf:
            return ''
        parts = []
        if 'duration_seconds' in perf:
            parts.append(f"{perf['duration_seconds'] * 1000:.2f} ms")
        parts.extend(f"{label}={perf[key]}" for key, label in cls.SUMMARY_FIELDS if key in perf)
        if perf.get('status', 'success') != 'success':
            parts.append(str(perf['status']))
        return ', '.join(parts)

    def _paint(self, text: str, color: Optional[str]) -> str:
        if not (self.use_colors and color):
            return text
        return f"{color}{text}{self.PLAIN}"
