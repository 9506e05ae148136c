"""Form builder service.

Forms are built from typed questions with optional conditional visibility,
published, filled by respondents and aggregated into results. The
validation and visibility rules live in `formbuilder.logic`; route handlers
in `formbuilder.routes` only orchestrate them over the repositories.
"""

from __future__ import annotations

from formbuilder.main import create_app

__all__ = ["create_app"]
