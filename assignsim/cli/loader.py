"""
Assignment file loading.

An assignment file is JSON in one of two shapes:

    [ {problem}, {problem}, ... ]

    {
        "assignmentId": "...",      # optional
        "problems": [ ... ],
        "personas": [ ... ]         # optional roster
    }

Keys may be camelCase or snake_case.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from assignsim.core.models import LearnerPersona, Problem


class AssignmentFile(BaseModel):
    """Parsed contents of an assignment JSON file."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    assignment_id: str | None = None
    problems: list[Problem] = Field(default_factory=list)
    personas: list[LearnerPersona] = Field(default_factory=list)


def parse_assignment(data: Any) -> AssignmentFile:
    """Validate already-decoded JSON into an AssignmentFile."""
    if isinstance(data, list):
        data = {"problems": data}
    return AssignmentFile.model_validate(data)


def load_assignment(path: Path) -> AssignmentFile:
    """
    Read and validate an assignment file.

    Raises:
        FileNotFoundError: If the path does not exist
        json.JSONDecodeError: If the file is not JSON
        pydantic.ValidationError: If a record is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Assignment file not found: {path}")
    return parse_assignment(json.loads(path.read_text(encoding="utf-8")))
