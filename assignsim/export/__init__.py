"""Export of simulation results to JSON and CSV."""

from assignsim.export.exporters import (
    PROBLEM_COLUMNS,
    STUDENT_COLUMNS,
    problems_to_rows,
    result_to_dict,
    rows_to_csv,
    students_to_rows,
    write_problems_csv,
    write_result_json,
    write_students_csv,
)

__all__ = [
    "PROBLEM_COLUMNS",
    "STUDENT_COLUMNS",
    "problems_to_rows",
    "result_to_dict",
    "rows_to_csv",
    "students_to_rows",
    "write_problems_csv",
    "write_result_json",
    "write_students_csv",
]
