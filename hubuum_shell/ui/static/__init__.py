#!/usr/bin/env python3
# hubuum_shell/ui/static/__init__.py
from __future__ import annotations
from .logging import PlainFormatter, init_logger, log_timing
from .table import format_key_value, format_table

__all__ = ["PlainFormatter", "init_logger", "log_timing", "format_key_value", "format_table"]
