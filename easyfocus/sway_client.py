"""Thin swaymsg wrapper used as the single compositor handle."""
from __future__ import annotations

import json
import subprocess
from typing import Any, Dict, List, Optional, Sequence

from easyfocus.logging_utils import get_logger

_LOGGER = get_logger()


class SwayIpcError(RuntimeError):
    """Raised when a compositor query or command cannot be completed."""


class SwayClient:
    """Issue queries and commands against the running sway session via swaymsg.

    Every call is attempted exactly once; failures surface as SwayIpcError.
    """

    def __init__(self, binary: str = "swaymsg", *, timeout: float = 2.0, socket_path: Optional[str] = None) -> None:
        self._binary = binary
        self._timeout = timeout
        self._socket_path = socket_path

    def get_tree(self) -> Dict[str, Any]:
        tree = self._query("get_tree")
        if not isinstance(tree, dict):
            raise SwayIpcError(f"get_tree returned {type(tree).__name__}, expected an object")
        return tree

    def run_command(self, command: str) -> List[Dict[str, Any]]:
        replies = self._invoke(["--", command], label=command)
        if not isinstance(replies, list):
            raise SwayIpcError(f"Unexpected reply to {command!r}: {replies!r}")
        for reply in replies:
            if not isinstance(reply, dict) or not reply.get("success", False):
                error = reply.get("error") if isinstance(reply, dict) else reply
                raise SwayIpcError(f"Command {command!r} failed: {error}")
        return replies

    def focus(self, con_id: int) -> None:
        self.run_command(f"[con_id={int(con_id)}] focus")

    def _query(self, message_type: str) -> Any:
        return self._invoke(["-t", message_type], label=message_type)

    def _invoke(self, arguments: Sequence[str], *, label: str) -> Any:
        command = [self._binary, "-r"]
        if self._socket_path:
            command.extend(["-s", self._socket_path])
        command.extend(arguments)
        _LOGGER.debug("swaymsg request: %s", label)
        try:
            result = subprocess.run(
                command,
                check=False,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise SwayIpcError(f"{self._binary} not found; is sway installed?") from exc
        except subprocess.TimeoutExpired as exc:
            raise SwayIpcError(f"{self._binary} timed out after {self._timeout}s ({label})") from exc
        except subprocess.SubprocessError as exc:
            raise SwayIpcError(f"{self._binary} invocation failed: {exc}") from exc

        if not result.stdout:
            stderr = (result.stderr or "").strip()
            raise SwayIpcError(f"{self._binary} returned status {result.returncode} with no output: {stderr}")
        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as exc:
            raise SwayIpcError(f"Failed to parse {self._binary} reply for {label}: {exc}") from exc
        # swaymsg exits non-zero for failed commands but still prints the JSON reply.
        if result.returncode != 0 and not isinstance(payload, list):
            raise SwayIpcError(f"{self._binary} returned status {result.returncode} for {label}")
        return payload
