"""
Execution Engine Client
=======================

HTTP transport for run requests. The client posts the assembled program
to the engine endpoint and returns a validated RunResponse.

Failure modes are kept apart so callers can report them distinctly from
script errors:

- EngineConnectionError: the engine could not be reached, timed out, or
  answered with an HTTP error and no usable body
- EngineProtocolError: the engine answered, but the body is not a valid
  run response

An HTTP error status whose JSON body is a well-formed ``status: "error"``
payload is returned as an ordinary error response, since the engine
reports failed executions that way.

Usage:
    with EngineClient(EngineConfig.from_env()) as client:
        response = client.run(RunRequest("76a988ac"))
"""

from dataclasses import replace
from typing import Optional
import logging

import requests

from btcscript_sdk.config import EngineConfig
from btcscript_sdk.debugger.trace import RunRequest, RunResponse
from btcscript_sdk.errors import EngineConnectionError, EngineProtocolError

logger = logging.getLogger(__name__)


class EngineClient:
    """
    Client for the external script execution engine.

    Attributes:
        config: Endpoint, timeout and header settings
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or EngineConfig()
        self._session = session or requests.Session()

    def __enter__(self) -> "EngineClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def run(self, request: RunRequest) -> RunResponse:
        """
        Execute one program on the engine.

        Raises:
            EngineConnectionError: On transport failure or HTTP error
            EngineProtocolError: If the response body breaks the contract
        """
        if not self.config.send_breakpoints:
            request = replace(request, breakpoints=None)

        logger.info(f"Running {len(request.input) // 2} byte program on {self.config.url}")

        try:
            response = self._session.post(
                self.config.url,
                json=request.to_json(),
                headers=self.config.headers,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Engine request failed: {e}")
            raise EngineConnectionError(f"cannot reach engine at {self.config.url}: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            if not response.ok:
                raise EngineConnectionError(
                    f"engine returned HTTP {response.status_code}"
                ) from None
            raise EngineProtocolError("engine response is not valid JSON") from None

        if not response.ok:
            if isinstance(payload, dict) and payload.get("status") == "error":
                logger.debug(f"Engine reported error with HTTP {response.status_code}")
                return RunResponse.from_json(payload)
            raise EngineConnectionError(f"engine returned HTTP {response.status_code}")

        result = RunResponse.from_json(payload)
        logger.info(f"Engine finished: {result.status.value}, {len(result.trace)} steps")
        return result
