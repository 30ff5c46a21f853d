"""Error explanation boundary.

The terminal host may hand failed commands to an explanation provider (an
AI text generator in practice). This module decides which outputs count as
errors, builds the prompt, and ships an HTTP provider configured from the
environment. Everything here is optional; the command engine never imports it.
"""

import logging
import os
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

# Output fragments that mark a command result as an error
ERROR_MARKERS = ("command not found", "No such file or directory", "Permission denied")

EXPLANATION_PREFIX = "AI Assistant: "


def is_error_output(text: str) -> bool:
    """Whether a command output should be treated as an error."""
    return any(marker in text for marker in ERROR_MARKERS)


def build_explanation_prompt(command: str, error: str) -> str:
    """Build the text-generation prompt asking why a command failed."""
    return (
        f'The user ran this Linux command: "{command}"\n'
        f'And got this error: "{error}"\n'
        "\n"
        "Provide a brief, helpful explanation of:\n"
        "1. Why this error occurred\n"
        "2. How to fix it\n"
        "3. Alternative commands that might work\n"
        "\n"
        "Keep it concise and practical. Format as plain text, no markdown."
    )


class ErrorExplainer(Protocol):
    """Anything that can explain a failed command."""

    def explain(self, command: str, error: str) -> Optional[str]:
        """Return an explanation, or None when there is nothing to add."""
        ...


class HTTPErrorExplainer:
    """Explanation provider backed by a text-generation HTTP endpoint.

    The endpoint receives a JSON body {"prompt": ..., "max_tokens": ...}
    and must answer with a JSON object containing a "text" field.

    Args:
        url: Endpoint URL. Defaults to the VTS_ASSISTANT_URL environment variable.
        api_key: Bearer token. Defaults to VTS_ASSISTANT_API_KEY.
        timeout: Request timeout in seconds.
        max_tokens: Length limit passed to the endpoint.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        max_tokens: int = 200,
    ):
        self.url = url or os.environ.get("VTS_ASSISTANT_URL")
        self.api_key = api_key or os.environ.get("VTS_ASSISTANT_API_KEY")
        self.timeout = timeout
        self.max_tokens = max_tokens

    @classmethod
    def from_environment(cls) -> Optional["HTTPErrorExplainer"]:
        """Create an explainer if VTS_ASSISTANT_URL is set, else return None."""
        if not os.environ.get("VTS_ASSISTANT_URL"):
            return None
        return cls()

    def explain(self, command: str, error: str) -> Optional[str]:
        """Ask the endpoint to explain a failed command.

        Args:
            command: The command line that failed.
            error: Its output.

        Returns:
            The explanation text, or None if the endpoint returned none.

        Raises:
            ValueError: If no endpoint URL is configured.
            RuntimeError: If the endpoint answers with a non-200 status.
        """
        import requests

        if not self.url:
            raise ValueError(
                "Assistant endpoint not configured. Set VTS_ASSISTANT_URL environment variable."
            )

        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        response = requests.post(
            self.url,
            json={
                "prompt": build_explanation_prompt(command, error),
                "max_tokens": self.max_tokens,
            },
            headers=headers,
            timeout=self.timeout,
        )

        if response.status_code != 200:
            raise RuntimeError(
                f"Assistant request failed: {response.status_code} {response.text}"
            )

        text = response.json().get("text")
        if not text:
            logger.debug(f"Assistant returned no explanation for '{command}'")
            return None
        return text.strip()
