"""
Unit tests for JSON and CSV export.
"""

import csv
import json

import pytest

from assignsim.export import (
    PROBLEM_COLUMNS,
    STUDENT_COLUMNS,
    problems_to_rows,
    result_to_dict,
    students_to_rows,
    write_problems_csv,
    write_result_json,
    write_students_csv,
)
from assignsim.simulation import run_classroom_simulation


@pytest.fixture
def result(five_problems, six_personas):
    return run_classroom_simulation(five_problems, six_personas, seed=17, assignment_id="export-test")


class TestProblemRows:
    def test_header_and_row(self, problem_factory):
        problem = problem_factory(
            1,
            "Evaluate",
            complexity=0.456,
            novelty=0.8,
            words=12,
            multi_part=True,
            text="y" * 140,
            similarity_to_previous=0.3,
        )
        header, row = problems_to_rows([problem])
        assert header == PROBLEM_COLUMNS
        assert row == ["1", "y" * 100, "Evaluate", "46", "80", "30", "12", "Yes"]

    def test_rows_in_sequence_order(self, five_problems):
        rows = problems_to_rows(list(reversed(five_problems)))
        assert [r[0] for r in rows[1:]] == ["1", "2", "3", "4", "5"]

    def test_write_csv(self, five_problems, tmp_path):
        path = write_problems_csv(five_problems, tmp_path / "out" / "problems.csv")
        with path.open(newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == PROBLEM_COLUMNS
        assert len(rows) == 6
        assert rows[1][-1] == "No"


class TestStudentRows:
    def test_one_row_per_student(self, result):
        rows = students_to_rows(result)
        assert rows[0] == STUDENT_COLUMNS
        assert [r[0] for r in rows[1:]] == [s.student_id for s in result.student_results]

    def test_write_csv(self, result, tmp_path):
        path = write_students_csv(result, tmp_path / "students.csv")
        with path.open(newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert len(rows) == result.student_count + 1


class TestJsonExport:
    def test_dict_shape(self, result, five_problems):
        data = result_to_dict(result, five_problems)
        assert data["assignment_id"] == "export-test"
        assert data["aggregated_analytics"]["bloom_coverage"]["Analyze"] == 40
        assert len(data["student_results"]) == 6
        assert len(data["student_results"][0]["problem_outcomes"]) == 5
        assert data["problems"][0]["cognitive_level"] == "Analyze"

    def test_problems_optional(self, result):
        assert "problems" not in result_to_dict(result)

    def test_write_json(self, result, five_problems, tmp_path):
        path = write_result_json(result, tmp_path / "result.json", five_problems)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["student_count"] == 6
        assert data["generated_at"]
