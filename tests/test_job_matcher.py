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

from app.scoring.jobs import match_jobs  # noqa: E402


class JobMatcherTests(unittest.TestCase):
    def test_fallback_when_no_keyword_matches(self):
        jobs = match_jobs("Barista and shift supervisor")
        self.assertEqual(len(jobs), 1)
        self.assertEqual(jobs[0].title, "General Associate")
        self.assertEqual(jobs[0].match_percentage, "70%")

    def test_profiles_keep_their_declared_order(self):
        jobs = match_jobs("Agile team lead who writes SQL reports and JavaScript widgets")
        self.assertEqual(
            [job.title for job in jobs],
            ["Frontend Developer", "Data Analyst", "Project Manager"],
        )
        self.assertEqual([job.match_percentage for job in jobs], ["92%", "88%", "85%"])

    def test_keyword_matching_is_case_insensitive(self):
        jobs = match_jobs("PYTHON")
        self.assertEqual([job.title for job in jobs], ["Data Analyst"])

    def test_serialized_with_camel_case_percentage(self):
        payload = match_jobs("React frontend")[0].model_dump(by_alias=True)
        self.assertEqual(
            payload,
            {
                "title": "Frontend Developer",
                "matchPercentage": "92%",
                "reason": "Strong match for modern web technologies found in your profile.",
            },
        )


if __name__ == "__main__":
    unittest.main()
