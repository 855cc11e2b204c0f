"""
Execution Engine Boundary
=========================

Client for the external process that executes assembled scripts and
returns execution traces.
"""

from btcscript_sdk.engine.client import EngineClient

__all__ = ["EngineClient"]
