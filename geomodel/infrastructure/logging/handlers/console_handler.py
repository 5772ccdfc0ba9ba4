"""Console output for interactive use."""

import logging
import os
import sys
from typing import Optional

from ..formatters import HumanFormatter


def colors_enabled(stream) -> bool:
    """ANSI colours only on a terminal, honouring NO_COLOR and TERM=dumb."""
    isatty = getattr(stream, 'isatty', None)
    if isatty is None or not isatty():
        return False
    return not os.environ.get('NO_COLOR') and os.environ.get('TERM') != 'dumb'


class ConsoleHandler(logging.StreamHandler):
    """Stream handler writing HumanFormatter lines, to stderr by default."""

    def __init__(self,
                 stream=None,
                 use_colors: Optional[bool] = None,
                 show_context: bool = True,
                 level: int = logging.INFO):
        super().__init__(sys.stderr if stream is None else stream)
        if use_colors is None:
            use_colors = colors_enabled(self.stream)
        self.setFormatter(HumanFormatter(use_colors=use_colors, show_context=show_context))
        self.setLevel(level)
