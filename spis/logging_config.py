"""
Structured logging configuration using structlog wrapping stdlib.

Console output by default, JSON lines when SPIS_LOG_FORMAT=json. Every
record emitted while a transcript is being routed carries that transcript
(see transcript_context) so one utterance can be followed through the
parser stages.

Usage:
    from spis.logging_config import setup_logging
    setup_logging()
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import IO, Iterator

import structlog

LEVEL_ENV = "SPIS_LOG_LEVEL"
FORMAT_ENV = "SPIS_LOG_FORMAT"


def setup_logging(
    level: str | None = None,
    json_output: bool | None = None,
    stream: IO[str] | None = None,
) -> None:
    if level is None:
        level = os.environ.get(LEVEL_ENV, "INFO")

    if json_output is None:
        json_output = os.environ.get(FORMAT_ENV, "").lower() == "json"

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Parser modules log through plain stdlib loggers; run them through the
    # same chain so their records get the transcript context too.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def transcript_context(transcript: str, force_code_mode: bool = False) -> Iterator[None]:
    """Bind the transcript being routed to every log record in the block."""
    with structlog.contextvars.bound_contextvars(
        transcript=transcript,
        force_code_mode=force_code_mode,
    ):
        yield


__all__ = ["get_logger", "setup_logging", "transcript_context"]
