"""Unit tests for the error explanation boundary.

The HTTP explainer is exercised with requests.post patched out; no network
traffic is generated.
"""

from unittest.mock import MagicMock, patch

import pytest

from assistant.explainer import (
    HTTPErrorExplainer,
    build_explanation_prompt,
    is_error_output,
)


def mock_response(status_code: int = 200, payload: dict | None = None, text: str = "") -> MagicMock:
    """Build a stand-in for a requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = text
    return response


# =============================================================================
# Error classification and prompt
# =============================================================================


class TestIsErrorOutput:
    """Tests for is_error_output()."""

    @pytest.mark.parametrize(
        "text",
        [
            "bash: frobnicate: command not found",
            "cat: x: No such file or directory",
            "touch: cannot touch 'x': Permission denied",
        ],
    )
    def test_error_markers(self, text) -> None:
        assert is_error_output(text)

    @pytest.mark.parametrize(
        "text",
        ["", "/home/user", "rm: cannot remove 'Documents': Is a directory"],
    )
    def test_non_errors(self, text) -> None:
        assert not is_error_output(text)


class TestBuildExplanationPrompt:
    """Tests for build_explanation_prompt()."""

    def test_includes_command_and_error(self) -> None:
        prompt = build_explanation_prompt("sl", "bash: sl: command not found")
        assert 'The user ran this Linux command: "sl"' in prompt
        assert 'And got this error: "bash: sl: command not found"' in prompt
        assert prompt.endswith("Keep it concise and practical. Format as plain text, no markdown.")


# =============================================================================
# HTTPErrorExplainer
# =============================================================================


class TestHTTPErrorExplainerConfiguration:
    """Tests for HTTPErrorExplainer construction."""

    def test_from_environment_without_url(self, monkeypatch) -> None:
        monkeypatch.delenv("VTS_ASSISTANT_URL", raising=False)
        assert HTTPErrorExplainer.from_environment() is None

    def test_from_environment_with_url(self, monkeypatch) -> None:
        monkeypatch.setenv("VTS_ASSISTANT_URL", "http://assistant.local/generate")
        monkeypatch.setenv("VTS_ASSISTANT_API_KEY", "secret")

        explainer = HTTPErrorExplainer.from_environment()

        assert explainer.url == "http://assistant.local/generate"
        assert explainer.api_key == "secret"

    def test_explicit_arguments_win(self, monkeypatch) -> None:
        monkeypatch.setenv("VTS_ASSISTANT_URL", "http://env")
        explainer = HTTPErrorExplainer(url="http://explicit", timeout=2.0, max_tokens=50)
        assert explainer.url == "http://explicit"
        assert (explainer.timeout, explainer.max_tokens) == (2.0, 50)

    def test_explain_without_url_raises(self, monkeypatch) -> None:
        monkeypatch.delenv("VTS_ASSISTANT_URL", raising=False)
        with pytest.raises(ValueError, match="VTS_ASSISTANT_URL"):
            HTTPErrorExplainer().explain("sl", "bash: sl: command not found")


class TestHTTPErrorExplainerRequests:
    """Tests for HTTPErrorExplainer.explain()."""

    def test_posts_prompt_and_returns_text(self) -> None:
        explainer = HTTPErrorExplainer(url="http://assistant.local", api_key="k", max_tokens=120)

        with patch("requests.post", return_value=mock_response(payload={"text": "  Typo.  "})) as post:
            answer = explainer.explain("sl", "bash: sl: command not found")

        assert answer == "Typo."
        post.assert_called_once()
        args, kwargs = post.call_args
        assert args == ("http://assistant.local",)
        assert kwargs["json"] == {
            "prompt": build_explanation_prompt("sl", "bash: sl: command not found"),
            "max_tokens": 120,
        }
        assert kwargs["headers"] == {"Authorization": "Bearer k"}
        assert kwargs["timeout"] == 10.0

    def test_no_auth_header_without_key(self, monkeypatch) -> None:
        monkeypatch.delenv("VTS_ASSISTANT_API_KEY", raising=False)
        explainer = HTTPErrorExplainer(url="http://assistant.local")

        with patch("requests.post", return_value=mock_response(payload={"text": "x"})) as post:
            explainer.explain("a", "b")

        assert post.call_args.kwargs["headers"] == {}

    def test_empty_text_returns_none(self) -> None:
        explainer = HTTPErrorExplainer(url="http://assistant.local")
        with patch("requests.post", return_value=mock_response(payload={"text": ""})):
            assert explainer.explain("a", "b") is None

    def test_non_200_raises(self) -> None:
        explainer = HTTPErrorExplainer(url="http://assistant.local")
        with patch("requests.post", return_value=mock_response(503, text="busy")):
            with pytest.raises(RuntimeError, match="503 busy"):
                explainer.explain("a", "b")
