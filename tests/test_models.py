from __future__ import annotations

import unittest

from pydantic import ValidationError

from mediguide.models import (
    AnalysisRecord,
    ChatMessage,
    Parameter,
    ParameterStatus,
    quick_stats,
)
from tests.fixtures import sample_analysis


def _param(status: str) -> Parameter:
    return Parameter(
        name="X",
        value="1",
        status=status,
        explanation="e",
        implication="i",
    )


class AnalysisRecordTests(unittest.TestCase):
    def test_decodes_camel_case_fields(self) -> None:
        record = AnalysisRecord.model_validate(sample_analysis())
        self.assertEqual(record.report_type, "CBC Blood Test")
        self.assertEqual(len(record.parameters), 4)
        self.assertEqual(record.parameters[0].reference_range, "12.0-16.0")
        self.assertEqual(record.parameters[0].status, ParameterStatus.ABNORMAL)
        self.assertEqual(record.red_flags, ["Platelet count is well above the reference range"])
        self.assertEqual(len(record.lifestyle_recommendations), 2)

    def test_optional_parameter_fields_default_to_empty(self) -> None:
        record = AnalysisRecord.model_validate(sample_analysis())
        rbc = record.parameters[3]
        self.assertEqual(rbc.unit, "")
        self.assertEqual(rbc.reference_range, "")

    def test_serializes_with_wire_names(self) -> None:
        record = AnalysisRecord.model_validate(sample_analysis())
        dumped = record.model_dump(mode="json", by_alias=True)
        self.assertEqual(dumped["reportType"], "CBC Blood Test")
        self.assertEqual(dumped["parameters"][2]["status"], "Critical")
        self.assertIn("lifestyleRecommendations", dumped)

    def test_missing_required_field_is_rejected(self) -> None:
        data = sample_analysis()
        del data["disclaimer"]
        with self.assertRaises(ValidationError):
            AnalysisRecord.model_validate(data)

    def test_unknown_status_is_rejected(self) -> None:
        data = sample_analysis()
        data["parameters"][0]["status"] = "Borderline"
        with self.assertRaises(ValidationError):
            AnalysisRecord.model_validate(data)

    def test_record_is_immutable(self) -> None:
        record = AnalysisRecord.model_validate(sample_analysis())
        with self.assertRaises(ValidationError):
            record.summary = "changed"


class QuickStatsTests(unittest.TestCase):
    def test_empty_list(self) -> None:
        stats = quick_stats([])
        self.assertEqual((stats.total, stats.normal, stats.abnormal, stats.critical), (0, 0, 0, 0))

    def test_counts_match_statuses(self) -> None:
        params = [_param(s) for s in ("Normal", "Normal", "Abnormal", "Critical", "Unknown", "Critical")]
        stats = quick_stats(params)
        self.assertEqual(stats.total, 6)
        self.assertEqual(stats.normal, 2)
        self.assertEqual(stats.abnormal, 1)
        self.assertEqual(stats.critical, 2)

    def test_unknown_only_counts_toward_total(self) -> None:
        stats = quick_stats([_param("Unknown"), _param("Unknown")])
        self.assertEqual(stats.total, 2)
        self.assertEqual(stats.normal + stats.abnormal + stats.critical, 0)

    def test_sample_record(self) -> None:
        record = AnalysisRecord.model_validate(sample_analysis())
        stats = quick_stats(record.parameters)
        self.assertEqual((stats.normal, stats.abnormal, stats.critical), (2, 1, 1))


class ChatMessageTests(unittest.TestCase):
    def test_ids_are_unique(self) -> None:
        a = ChatMessage(role="user", text="hi")
        b = ChatMessage(role="user", text="hi")
        self.assertNotEqual(a.id, b.id)
        self.assertIsNotNone(a.timestamp.tzinfo)

    def test_role_is_restricted(self) -> None:
        with self.assertRaises(ValidationError):
            ChatMessage(role="assistant", text="hi")


if __name__ == "__main__":
    unittest.main()
