# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core - Structured logging with context
# PURPOSE: Component-tagged, table-scoped logging on stderr
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

Every export log line can say which layer wrote it (component) and which
table it was working on (context). Both end up in the JSON output and in
the human-readable line.

Usage:
    from core.logging import ComponentType, get_logger, log_context

    logger = get_logger(__name__, ComponentType.SERVICE)

    with log_context(schema="public", table="users", operation="snapshot"):
        logger.debug("Table snapshot read", extra={"columns": 5})

Record layout (JSON):
    {"timestamp", "level", "logger", "message",
     "context": {"schema", "table", "operation", ...},
     "data": {"component", <caller extra>...},
     "source": {"file", "line", "function"}}
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from enum import Enum


class ComponentType(str, Enum):
    """Layer that emitted a log record."""
    REPOSITORY = "repository"
    SERVICE = "service"
    INFRASTRUCTURE = "infrastructure"
    SCRIPT = "script"


# ============================================================================
# CONTEXT
# ============================================================================

@dataclass
class LogContext:
    """Table currently being exported, plus free-form fields."""
    schema: Optional[str] = None
    table: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only; extra is flattened in."""
        result = {
            key: value
            for key, value in (
                ("schema", self.schema),
                ("table", self.table),
                ("operation", self.operation),
            )
            if value is not None
        }
        result.update(self.extra)
        return result

    @property
    def qualified_table(self) -> Optional[str]:
        if self.table is None:
            return None
        return f"{self.schema}.{self.table}" if self.schema else self.table


_context_stack = threading.local()


def _get_context_stack() -> list:
    if not hasattr(_context_stack, "stack"):
        _context_stack.stack = []
    return _context_stack.stack


def get_current_context() -> LogContext:
    """Innermost active context, or an empty one."""
    stack = _get_context_stack()
    return stack[-1] if stack else LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Push a logging context for the duration of the block.

    Fields not given are inherited from the enclosing context.

    Example:
        with log_context(schema="public", table="users"):
            with log_context(operation="indexes"):
                logger.debug("Reading")   # table=public.users, op=indexes
    """
    parent = get_current_context()
    new_context = LogContext(
        schema=kwargs.get("schema", parent.schema),
        table=kwargs.get("table", parent.table),
        operation=kwargs.get("operation", parent.operation),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    stack = _get_context_stack()
    stack.append(new_context)
    try:
        yield new_context
    finally:
        stack.pop()


# ============================================================================
# FORMATTERS
# ============================================================================

def _record_data(record: logging.LogRecord) -> Dict[str, Any]:
    """Fields attached by ContextLogger (component plus caller extra)."""
    return getattr(record, "data", None) or {}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for LOG_FORMAT=json."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context_dict = get_current_context().to_dict()
        if context_dict:
            log_data["context"] = context_dict

        data = _record_data(record)
        if data:
            log_data["data"] = data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }
        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Single-line format for terminals:

        2026-10-19 10:00:00 DEBUG    services.schema_export_service (service) [table=public.users, op=snapshot]: Table snapshot read {'columns': 2}
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        data = dict(_record_data(record))
        component = data.pop("component", None)
        source = f"{record.name} ({component})" if component else record.name

        context = get_current_context()
        context_parts = []
        if context.qualified_table:
            context_parts.append(f"table={context.qualified_table}")
        elif context.schema:
            context_parts.append(f"schema={context.schema}")
        if context.operation:
            context_parts.append(f"op={context.operation}")
        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        extra_str = f" {data}" if data else ""
        result = f"{timestamp} {level} {source}{context_str}: {record.getMessage()}{extra_str}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"
        return result


# ============================================================================
# LOGGERS
# ============================================================================

class ContextLogger(logging.LoggerAdapter):
    """
    Adapter that tags every record with its component.

    The caller's extra= mapping and the component are stored together on the
    record as `data`; the active log_context is read by the formatters.
    """

    def process(self, msg, kwargs):
        data = dict(kwargs.get("extra") or {})
        component = self.extra.get("component")
        if component is not None:
            data["component"] = component.value if isinstance(component, ComponentType) else component
        kwargs["extra"] = {"data": data}
        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[ComponentType] = None,
) -> ContextLogger:
    """
    Get a component-tagged logger.

    Args:
        name: Logger name, usually __name__
        component: Layer the logger belongs to
    """
    return ContextLogger(logging.getLogger(name), {"component": component})


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Install one stderr handler on the root logger.

    Logs go to stderr so that exported DDL on stdout stays clean.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (also enabled by LOG_FORMAT=json)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
]
