"""
Schémas de réponses OpenAPI pour RFC 9457 Problem Details.

Construits à partir du modèle `Problem` de fastapi-problem-details.
"""

from http import HTTPStatus
from typing import Any

from fastapi_problem_details import Problem

PROBLEM_CONTENT: dict[str, Any] = {
    "application/problem+json": {"schema": Problem.model_json_schema()}
}

# Réponse par défaut des routers (non ajoutée automatiquement aux sous-routers)
COMMON_RESPONSES: dict[int | str, dict[str, Any]] = {
    "default": {"description": "Problem", "content": PROBLEM_CONTENT},
}


def problem_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    """
    Documente des réponses Problem Details pour des codes HTTP donnés.

    Example:
        ```python
        @router.get("/{country_id}", responses=problem_responses(404))
        ```
    """
    return {
        code: {"description": HTTPStatus(code).phrase, "content": PROBLEM_CONTENT}
        for code in status_codes
    }


__all__ = [
    "COMMON_RESPONSES",
    "PROBLEM_CONTENT",
    "problem_responses",
]
