import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.normalize.utils import contains_any, normalize_resume_text  # noqa: E402


class NormalizationTests(unittest.TestCase):
    def test_whitespace_runs_collapse_to_single_spaces(self):
        raw = "  Jane Roe\n\n\tSoftware   Engineer\r\n- Built APIs  "
        self.assertEqual(normalize_resume_text(raw), "Jane Roe Software Engineer - Built APIs")

    def test_empty_input_stays_empty(self):
        self.assertEqual(normalize_resume_text(""), "")
        self.assertEqual(normalize_resume_text(" \n\t "), "")

    def test_contains_any_is_case_insensitive_substring_match(self):
        self.assertTrue(contains_any("Enrolled in EXPERIENCE track", ("experience",)))
        # Substring semantics: "led" fires inside "enrolled".
        self.assertTrue(contains_any("Enrolled in courses", ("led",)))
        self.assertFalse(contains_any("Skills", ("projects", "education")))


if __name__ == "__main__":
    unittest.main()
