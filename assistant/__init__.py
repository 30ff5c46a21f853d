"""Assistant boundary: error explanations and local command suggestions."""

from assistant.explainer import (
    EXPLANATION_PREFIX,
    ErrorExplainer,
    HTTPErrorExplainer,
    build_explanation_prompt,
    is_error_output,
)
from assistant.suggestions import Suggestion, get_local_suggestions

__all__ = [
    "EXPLANATION_PREFIX",
    "ErrorExplainer",
    "HTTPErrorExplainer",
    "Suggestion",
    "build_explanation_prompt",
    "get_local_suggestions",
    "is_error_output",
]
