"""Runtime: conversion engine, registry, flow-local current engine.

Python 3.13+.
"""

from .context import get_current_engine, reset_current_engine, set_current_engine, use_engine
from .engine import ConversionEngine, RelativityParser
from .registry import INVARIANT, INVARIANT_CONFIGURATION, INVARIANT_UTC, ParserRegistry

__all__ = [
    "INVARIANT",
    "INVARIANT_CONFIGURATION",
    "INVARIANT_UTC",
    "ConversionEngine",
    "ParserRegistry",
    "RelativityParser",
    "get_current_engine",
    "reset_current_engine",
    "set_current_engine",
    "use_engine",
]
