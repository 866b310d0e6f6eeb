from __future__ import annotations

import argparse
import json
import mimetypes
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.errors import ResumeAnalyzerError  # noqa: E402
from app.normalize.utils import normalize_resume_text  # noqa: E402
from app.parsing.parse import extract_resume_text  # noqa: E402
from app.scoring.engine import get_scoring_policy  # noqa: E402
from app.semantic.similarity import HashingSimilarityClient, score_against_ideal_profile  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Score a PDF/DOCX resume locally without persisting it.")
    parser.add_argument("path", help="Path to a .pdf or .docx resume")
    parser.add_argument("--policy", choices=["hybrid", "local"], default="hybrid")
    parser.add_argument(
        "--similarity",
        type=float,
        default=None,
        help="Similarity score (0-100) to use instead of calling a provider",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use the hashing similarity provider instead of the configured one",
    )
    args = parser.parse_args()

    path = Path(args.path)
    if not path.exists():
        print(f"File not found: {path}", file=sys.stderr)
        return 2

    content_type, _ = mimetypes.guess_type(path.name)
    policy = get_scoring_policy(args.policy)
    try:
        parsed = extract_resume_text(path.name, content_type, path.read_bytes())
        text = normalize_resume_text(parsed.text)
        similarity = args.similarity
        if policy.requires_similarity and similarity is None:
            client = HashingSimilarityClient() if args.offline else None
            similarity = score_against_ideal_profile(text, client=client)
        assessment = policy.assess(text, similarity)
    except ResumeAnalyzerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(assessment.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
