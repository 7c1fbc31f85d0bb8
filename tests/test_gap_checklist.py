import copy
import unittest

from tailoring_fixtures import BENCHMARK_PAYLOAD, SCORE_PAYLOAD

from career_tailor.schemas import BenchmarkCandidate, MatchScoreBreakdown
from career_tailor.services.gap_checklist import (
    classify_format_action,
    format_accomplishment_type,
    generate_gap_checklist,
    is_accomplishment_keyword,
)


class GapChecklistTests(unittest.TestCase):
    def setUp(self):
        self.benchmark = BenchmarkCandidate.model_validate(BENCHMARK_PAYLOAD)
        self.score = MatchScoreBreakdown.model_validate(SCORE_PAYLOAD)

    def test_gaps_are_sorted_by_severity_then_order(self):
        checklist = generate_gap_checklist(self.score, self.benchmark).checklist

        issues = [gap.issue for gap in checklist.items]
        self.assertEqual(
            issues,
            [
                'Missing "Kubernetes" (required for this role)',
                "Your accomplishments lack quantified results. Add metrics to show impact.",
                'Missing "Mentorship" accomplishment',
                "Your experience level is below benchmark median. Emphasize impact and breadth.",
                "Remove graphics from header",
                'Missing "Terraform" (nice-to-have skill)',
                "Missing section: Summary",
                "No on-call ownership mentioned",
                "Consider adding metric: Uptime",
                "Dates use inconsistent formats",
            ],
        )
        self.assertEqual([gap.ui_order for gap in checklist.items], list(range(10)))
        self.assertEqual(checklist.total_gaps, 10)
        self.assertEqual(checklist.high_priority_count, 2)
        self.assertEqual(len({gap.id for gap in checklist.items}), 10)

    def test_keyword_gap_carries_benchmark_context(self):
        gap = generate_gap_checklist(self.score, self.benchmark).checklist.items[0]

        self.assertEqual(gap.action, "add")
        self.assertEqual(gap.section, "skills")
        self.assertEqual(gap.suggested_keyword, "Kubernetes")
        self.assertIn("Operated workloads on Kubernetes in production.", gap.action_description)
        self.assertEqual(gap.alternatives[0].description, "All services deploy to Kubernetes.")

    def test_accomplishment_gaps_use_benchmark_examples(self):
        items = generate_gap_checklist(self.score, self.benchmark).checklist.items
        strengthen = items[1]
        bullet = items[2]

        self.assertEqual(strengthen.severity, "high")
        self.assertEqual(
            [alt.description for alt in strengthen.alternatives],
            ["latency reduction", "uptime", "cost savings"],
        )
        self.assertEqual(bullet.action, "add-new-bullet")
        self.assertEqual(bullet.suggested_bullet, "Mentored 4 engineers through promotion to senior level.")

    def test_experience_gap_quotes_years(self):
        reorganize = generate_gap_checklist(self.score, self.benchmark).checklist.items[3]

        self.assertEqual(reorganize.action, "reorganize")
        self.assertTrue(reorganize.action_description.startswith("You have 4 years vs. the expected 7."))

    def test_checklist_is_truncated_but_counts_everything(self):
        payload = copy.deepcopy(SCORE_PAYLOAD)
        payload["categories"]["keywords"]["missingByPriority"] = [
            {"keyword": f"Skill {index}", "criticality": "must-have"} for index in range(6)
        ]
        payload["categories"]["atsCompliance"]["issues"] = ["Missing contact email", "Move dates", "Tables"]
        score = MatchScoreBreakdown.model_validate(payload)

        checklist = generate_gap_checklist(score, self.benchmark).checklist

        self.assertEqual(len(checklist.items), 10)
        self.assertGreater(checklist.total_gaps, 10)
        self.assertEqual(sum(1 for gap in checklist.items if gap.gap_type == "keyword" and gap.severity == "high"), 4)

    def test_strong_resume_yields_few_gaps(self):
        payload = copy.deepcopy(SCORE_PAYLOAD)
        categories = payload["categories"]
        categories["keywords"]["missingByPriority"] = []
        categories["accomplishments"]["score"] = 90
        categories["accomplishments"]["missingMetrics"] = []
        categories["experience"]["levelMatch"] = "aligned"
        categories["atsCompliance"].update({"issues": [], "warnings": [], "sectionsMissing": []})

        checklist = generate_gap_checklist(MatchScoreBreakdown.model_validate(payload), self.benchmark).checklist

        self.assertEqual(checklist.items, [])
        self.assertEqual(checklist.high_priority_count, 0)

    def test_helpers(self):
        self.assertTrue(is_accomplishment_keyword("Led cross-team migrations"))
        self.assertFalse(is_accomplishment_keyword("Kubernetes"))
        self.assertEqual(format_accomplishment_type("led_team"), "Team Leadership")
        self.assertEqual(format_accomplishment_type("open_source_work"), "Open Source Work")
        self.assertEqual(classify_format_action("Delete the photo"), "remove")
        self.assertEqual(classify_format_action("Restructure the header"), "reorganize")
        self.assertEqual(classify_format_action("Include a phone number"), "add")
        self.assertEqual(classify_format_action("Font is too small"), "reorganize")


if __name__ == "__main__":
    unittest.main()
