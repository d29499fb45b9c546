"""
Tests for report assembly: the merged, immutable report object.
"""

import json

import pytest
from pydantic import ValidationError

from schemas.reports import AnalysisReport, NarrativeResult
from services.grade_aggregator import aggregate
from services.report_assembler import assemble_report, snapshot_subject


@pytest.fixture
def report(cruz, reyes, cc101, cc101_grades):
    aggregation = aggregate([cruz, reyes], cc101_grades)
    narrative = NarrativeResult(analysis="Class is split.", recommendations="Tutor Ben.")
    return assemble_report(snapshot_subject(cc101), aggregation.summary, narrative, aggregation.students)


class TestAssembleReport:
    def test_subject_snapshot(self, report):
        assert report.subject.code == "CC101"
        assert report.subject.name == "Introduction to Computing"
        assert report.subject.description == "Fundamentals of computing"

    def test_pass_fail_lists(self, report):
        assert report.passed_students == ("Ana Cruz",)
        assert report.failed_students == ("Ben Reyes",)

    def test_narrative_and_summary_copied(self, report):
        assert report.analysis == "Class is split."
        assert report.recommendations == "Tutor Ben."
        assert report.summary.average_grade == "2.88"

    def test_ungraded_student_kept_in_breakdown_only(self, cruz, reyes, cc101):
        aggregation = aggregate([cruz, reyes], [])
        narrative = NarrativeResult(analysis="x", recommendations="y")

        report = assemble_report(snapshot_subject(cc101), aggregation.summary, narrative, aggregation.students)

        assert report.passed_students == ()
        assert report.failed_students == ()
        assert [s.name for s in report.students_data] == ["Ana Cruz", "Ben Reyes"]

    def test_report_is_immutable(self, report):
        with pytest.raises(ValidationError):
            report.analysis = "changed"


class TestReportSerialization:
    def test_camel_case_keys(self, report):
        data = report.model_dump(by_alias=True, mode="json")

        assert data["summary"] == {"totalStudents": 2, "passed": 1, "failed": 1, "averageGrade": "2.88"}
        assert data["passedStudents"] == ["Ana Cruz"]
        assert data["studentsData"][1]["studentNumber"] == "2024-0002"
        assert data["studentsData"][1]["grades"]["final"] is None

    def test_json_round_trip_is_self_contained(self, report):
        restored = AnalysisReport.model_validate(json.loads(report.model_dump_json(by_alias=True)))
        assert restored == report
