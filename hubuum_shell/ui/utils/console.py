#!/usr/bin/env python3
# hubuum_shell/ui/utils/console.py
from __future__ import annotations

import sys
import threading

_WRITE_LOCK = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Write one whole line; concurrent writers never interleave."""
    stream = sys.stdout if file is None else file
    with _WRITE_LOCK:
        stream.write(text + "\n")
        if flush:
            stream.flush()
