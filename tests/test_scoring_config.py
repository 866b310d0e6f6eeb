import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config.scoring import get_scoring_config, get_scoring_value, scoring_config_source


class ScoringConfigTests(unittest.TestCase):
    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("structure.points.experience"), 18)
        self.assertEqual(get_scoring_value("normalization.similarity_weight"), 0.35)
        self.assertEqual(get_scoring_value("jobs.max_matches"), 3)

    def test_missing_paths_fall_back_to_default(self):
        self.assertEqual(get_scoring_value("structure.points.hobbies", 0), 0)
        self.assertIsNone(get_scoring_value("structure.points.experience.extra"))
        self.assertEqual(get_scoring_value("", "fallback"), "fallback")


class ScoringConfigSourceTests(unittest.TestCase):
    def setUp(self):
        get_scoring_config.cache_clear()
        self.addCleanup(get_scoring_config.cache_clear)

    def test_default_config_ships_inside_the_package(self):
        package_dir = PROJECT_ROOT / "app" / "core" / "config"
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("SCORING_CONFIG_PATH", None)
            source = scoring_config_source()
            self.assertEqual(source.name, "scoring.yaml")
            self.assertEqual(Path(str(source)).resolve().parent, package_dir.resolve())
            self.assertEqual(get_scoring_value("normalization.ceiling"), 85)

    def test_override_path_is_loaded(self):
        with tempfile.TemporaryDirectory() as tmp:
            custom = Path(tmp) / "custom.yaml"
            custom.write_text(
                "structure: {points: {experience: 25}}\n"
                "quality: {}\n"
                "length: {}\n"
                "composite: {}\n"
                "normalization: {}\n",
                encoding="utf-8",
            )
            with patch.dict(os.environ, {"SCORING_CONFIG_PATH": str(custom)}):
                self.assertEqual(scoring_config_source(), custom)
                self.assertEqual(get_scoring_value("structure.points.experience"), 25)

    def test_config_missing_sections_is_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            partial = Path(tmp) / "partial.yaml"
            partial.write_text("structure: {}\nquality: {}\n", encoding="utf-8")
            with patch.dict(os.environ, {"SCORING_CONFIG_PATH": str(partial)}):
                with self.assertRaises(RuntimeError) as ctx:
                    get_scoring_config()
        self.assertIn("length, composite, normalization", str(ctx.exception))

    def test_absent_override_file_is_reported(self):
        missing = Path(tempfile.gettempdir()) / "resume-analyzer-tests" / "no-such-scoring.yaml"
        with patch.dict(os.environ, {"SCORING_CONFIG_PATH": str(missing)}):
            with self.assertRaises(RuntimeError) as ctx:
                get_scoring_config()
        self.assertIn("Scoring config not found", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
