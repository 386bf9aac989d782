"""Constants used throughout wirebox.

This module defines the package logger and the set of annotations the
resolver treats as primitives (never auto-wired).
"""

import logging
from typing import Any, FrozenSet

LOGGER_NAME: str = "wirebox"
"""Default logger name for the wirebox package."""

LOGGER: logging.Logger = logging.getLogger(LOGGER_NAME)
"""Package logger used for registration and resolution diagnostics."""

CONFIG_FILE_KEY: str = "file"
"""Config key that receives a scalar passed to :meth:`Container.create`."""

PRIMITIVE_ANNOTATIONS: FrozenSet[Any] = frozenset({Any, object})
"""Annotations that carry no wiring information, in addition to builtins."""
