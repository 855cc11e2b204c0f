"""
Bitcoin Script SDK - Engine Configuration
=========================================

Settings for reaching the external script execution engine. Values can
come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

The engine is a separate process that accepts a POST with the assembled
program and answers with an execution trace; see
btcscript_sdk.debugger.trace for the body formats.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass, field
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_ENGINE_URL = "http://localhost:3000/run-job"
DEFAULT_TIMEOUT = 30.0

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class EngineConfig:
    """
    Configuration for engine requests.

    Attributes:
        url: Endpoint receiving run requests
        timeout: Request timeout in seconds
        send_breakpoints: Include breakpoint byte offsets in run requests
        headers: Extra HTTP headers sent with every request
    """

    url: str = DEFAULT_ENGINE_URL
    timeout: float = DEFAULT_TIMEOUT
    send_breakpoints: bool = True
    headers: dict[str, str] = field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """
        Create EngineConfig from environment variables.

        Environment variables (all optional):
            BTCSCRIPT_ENGINE_URL: Engine endpoint
            BTCSCRIPT_ENGINE_TIMEOUT: Timeout in seconds (positive number)
            BTCSCRIPT_SEND_BREAKPOINTS: 1/0, true/false, yes/no, on/off

        Invalid values are logged and the default is kept.
        """
        config = cls()

        if url := os.environ.get("BTCSCRIPT_ENGINE_URL"):
            config.url = url

        if timeout := os.environ.get("BTCSCRIPT_ENGINE_TIMEOUT"):
            try:
                value = float(timeout)
            except ValueError:
                value = 0.0
            if value > 0:
                config.timeout = value
            else:
                logger.warning(f"Ignoring invalid BTCSCRIPT_ENGINE_TIMEOUT: {timeout!r}")

        if flag := os.environ.get("BTCSCRIPT_SEND_BREAKPOINTS"):
            if flag.lower() in _TRUE_VALUES:
                config.send_breakpoints = True
            elif flag.lower() in _FALSE_VALUES:
                config.send_breakpoints = False
            else:
                logger.warning(f"Ignoring invalid BTCSCRIPT_SEND_BREAKPOINTS: {flag!r}")

        return config
