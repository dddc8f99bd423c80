"""Logging utilities."""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


_document_var: contextvars.ContextVar[str] = contextvars.ContextVar("bibnotes_document", default="-")


class _ContextFilter(logging.Filter):
    """Inject document context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.document = _document_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def document_context(document: str) -> Any:
    """Temporarily bind the name of the document being processed.

    Args:
        document: Document name, usually the input path.
    """

    token = _document_var.set(document)
    try:
        yield
    finally:
        _document_var.reset(token)


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Logging level name.
    """

    # stdout may carry the serialized tree
    handler = RichHandler(
        console=Console(stderr=True), rich_tracebacks=True, show_time=True, show_level=True
    )
    handler.addFilter(_ContextFilter())

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s doc=%(document)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    # Avoid duplicate handlers if configure_logging is called multiple times
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(handler)
    else:
        for h in root.handlers:
            if isinstance(h, RichHandler):
                h.addFilter(_ContextFilter())
                h.setFormatter(formatter)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)



def log_exception(logger: logging.Logger, msg: str, **context: Any) -> None:
    """Log an exception with optional structured context."""

    if context:
        logger.exception("%s | context=%s", msg, context)
    else:
        logger.exception("%s", msg)
