import os
import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

_TEST_DATA_DIR = Path(tempfile.gettempdir()) / "resume-analyzer-tests"
os.environ.setdefault("AUTH_MODE", "tokens")
os.environ.setdefault("AUTH_TOKENS", "token-alice:user-alice,token-bob:user-bob")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("SIMILARITY_PROVIDER", "hashing")
os.environ.setdefault("RESUME_DB_PATH", str(_TEST_DATA_DIR / "resumes.db"))
os.environ.setdefault("ANALYTICS_DB_PATH", str(_TEST_DATA_DIR / "analytics.db"))

from app.scoring.features import build_feature_flags  # noqa: E402
from app.scoring.suggestions import (  # noqa: E402
    generate_general_suggestions,
    generate_project_suggestions,
    generate_suggestions,
)


class GeneralSuggestionTests(unittest.TestCase):
    def test_plain_text_gets_metric_verb_stack_and_teamwork_advice(self):
        suggestions = generate_general_suggestions(build_feature_flags("Retail cashier handling the till"))
        self.assertEqual(len(suggestions), 4)
        self.assertTrue(suggestions[0].startswith("Add quantified achievements"))
        self.assertIn("engineered", suggestions[1])
        self.assertTrue(suggestions[2].startswith("Clearly list the technologies"))
        self.assertTrue(suggestions[3].startswith("Highlight collaboration"))

    def test_generic_phrase_triggers_replacement_advice(self):
        flags = build_feature_flags("I worked on the billing flow and helped in releases")
        self.assertTrue(
            any(item.startswith("Replace generic phrases") for item in generate_general_suggestions(flags))
        )

    def test_project_without_deployment_mentions_hosting(self):
        undeployed = generate_general_suggestions(build_feature_flags("Built a budgeting app with React"))
        deployed = generate_general_suggestions(
            build_feature_flags("Built a budgeting app with React, deployed to production")
        )
        self.assertTrue(any(item.startswith("Mention deployment details") for item in undeployed))
        self.assertFalse(any(item.startswith("Mention deployment details") for item in deployed))

    def test_improved_counts_as_a_strong_verb_for_suggestions(self):
        flags = build_feature_flags("Improved checkout conversion for the team by 12%")
        self.assertFalse(flags.has_action_verb)
        self.assertTrue(flags.mentions_suggestion_verb)
        self.assertFalse(any("strong action verbs" in item for item in generate_general_suggestions(flags)))


class ProjectSuggestionTests(unittest.TestCase):
    def test_no_project_indicator_yields_nothing(self):
        flags = build_feature_flags("Accountant with ten years of ledger reconciliation")
        self.assertEqual(generate_project_suggestions(flags), [])

    def test_dashboard_counts_as_project_indicator(self):
        flags = build_feature_flags("Made a dashboard for sales figures")
        suggestions = generate_project_suggestions(flags)
        self.assertEqual(len(suggestions), 4)
        self.assertTrue(suggestions[0].startswith("For each project, add measurable impact"))
        self.assertTrue(suggestions[1].startswith("Mention where your projects are deployed"))
        self.assertTrue(suggestions[2].startswith("Clearly specify the technology stack"))
        self.assertTrue(suggestions[3].startswith("Start project bullet points"))

    def test_complete_project_description_needs_no_advice(self):
        flags = build_feature_flags(
            "Engineered a Django platform on Heroku serving 300 users for a 4-person team"
        )
        self.assertEqual(generate_project_suggestions(flags), [])

    def test_general_suggestions_come_first(self):
        flags = build_feature_flags("Made a dashboard for sales figures")
        combined = generate_suggestions(flags)
        general = generate_general_suggestions(flags)
        self.assertEqual(combined[: len(general)], general)
        self.assertEqual(combined[len(general):], generate_project_suggestions(flags))


if __name__ == "__main__":
    unittest.main()
