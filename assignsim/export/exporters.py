"""
Result export: JSON documents and flattened CSV row sets.

- result_to_dict / write_result_json: the full classroom result set
- problems_to_rows / write_problems_csv: one row per problem (metadata table)
- students_to_rows / write_students_csv: one row per simulated student

The formats are a display/export convenience with no compatibility
guarantee beyond carrying every result field.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from loguru import logger

from assignsim.core.models import Problem
from assignsim.simulation.models import ClassroomSimulationResult

PROBLEM_COLUMNS = [
    "Problem #",
    "Text",
    "Bloom Level",
    "Complexity",
    "Novelty",
    "Similarity",
    "Length (words)",
    "Multi-Part",
]

STUDENT_COLUMNS = [
    "Student",
    "Name",
    "Score %",
    "Grade",
    "Time (min)",
    "Engagement Trend",
    "Peak Fatigue",
    "Confusion Points",
    "At Risk",
    "Risk Factors",
]

TEXT_EXCERPT_CHARS = 100


def _percent(value: float) -> str:
    return f"{value * 100:.0f}"


def result_to_dict(
    result: ClassroomSimulationResult,
    problems: Sequence[Problem] | None = None,
) -> dict[str, Any]:
    """Full result set as a JSON-ready dictionary (problems included when given)."""
    data = result.to_dict()
    if problems is not None:
        data["problems"] = [p.model_dump(mode="json") for p in problems]
    return data


def write_result_json(
    result: ClassroomSimulationResult,
    output: Path,
    problems: Sequence[Problem] | None = None,
) -> Path:
    """Write the full result set to a JSON file."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(result_to_dict(result, problems), indent=2, default=str), encoding="utf-8")
    logger.info(f"Wrote simulation result to {output}")
    return output


def problems_to_rows(problems: Sequence[Problem]) -> list[list[str]]:
    """
    Flatten problems into table rows (header first).

    Columns: sequence number, text excerpt, cognitive level, complexity %,
    novelty %, similarity %, word length, multi-part flag.
    """
    rows = [list(PROBLEM_COLUMNS)]
    for problem in sorted(problems, key=lambda p: p.sequence_index):
        rows.append([
            str(problem.sequence_index),
            problem.excerpt(TEXT_EXCERPT_CHARS),
            problem.cognitive_level.value,
            _percent(problem.linguistic_complexity),
            _percent(problem.novelty_score),
            _percent(problem.similarity),
            str(problem.length_words),
            "Yes" if problem.is_multi_part else "No",
        ])
    return rows


def students_to_rows(result: ClassroomSimulationResult) -> list[list[str]]:
    """Flatten per-student simulations into table rows (header first)."""
    rows = [list(STUDENT_COLUMNS)]
    for student in result.student_results:
        rows.append([
            student.student_id,
            student.display_name,
            f"{student.estimated_score_percent:.1f}",
            student.estimated_grade.value,
            str(student.total_time_minutes),
            student.engagement_trajectory.trend.value,
            f"{student.fatigue_trajectory.peak:.2f}",
            ";".join(student.confusion_points),
            "Yes" if student.at_risk else "No",
            "; ".join(student.risk_factors),
        ])
    return rows


def rows_to_csv(rows: list[list[str]]) -> str:
    """Render rows as CSV text with every cell quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def write_problems_csv(problems: Sequence[Problem], output: Path) -> Path:
    """Write the per-problem metadata table to a CSV file."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rows_to_csv(problems_to_rows(problems)), encoding="utf-8")
    logger.info(f"Wrote {len(problems)} problem rows to {output}")
    return output


def write_students_csv(result: ClassroomSimulationResult, output: Path) -> Path:
    """Write the per-student summary table to a CSV file."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rows_to_csv(students_to_rows(result)), encoding="utf-8")
    logger.info(f"Wrote {result.student_count} student rows to {output}")
    return output
