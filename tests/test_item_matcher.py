"""Unit tests for the item matcher and prompt construction."""

from unittest.mock import patch

import pytest

from jobmatch.classification.exceptions import (
    ClassifierQuotaError,
    ClassifierTimeoutError,
    ClassifierTransportError,
)
from jobmatch.classification.prompts import build_match_prompt, truncate_description
from jobmatch.domain.models import FALLBACK_REASONING, MatchResult, Posting, Profile
from jobmatch.matching.engine import ItemMatcher
from tests.helpers import StubClassifier, match_response


class TestPromptConstruction:
    """Test suite for build_match_prompt."""

    def test_prompt_contains_posting_and_profile(self, sample_profile):
        posting = Posting(id="1", title="Backend Engineer", company="Acme", description="APIs")

        prompt = build_match_prompt(posting, sample_profile)

        assert "Title: Backend Engineer" in prompt
        assert "Company: Acme" in prompt
        assert "Description: APIs" in prompt
        assert "Skills: Python, FastAPI, PostgreSQL" in prompt
        assert "Desired Roles: Backend Engineer" in prompt
        assert "Years of Experience: 6" in prompt
        assert "Seniority Level: Senior" in prompt
        assert "Current Role: Software Engineer" in prompt

    def test_recent_experience_limited_to_two_entries(self, sample_profile):
        posting = Posting(id="1", title="T", company="C", description="D")

        prompt = build_match_prompt(posting, sample_profile)

        assert "Recent Experience: Software Engineer at Acme, Junior Developer at Initech" in prompt
        assert "Globex" not in prompt

    def test_empty_profile_uses_not_specified(self):
        posting = Posting(id="1", title="T", company="C", description="D")

        prompt = build_match_prompt(posting, Profile())

        assert "Skills: Not specified" in prompt
        assert "Desired Roles: Not specified" in prompt
        assert "Years of Experience: Not specified" in prompt
        assert "Seniority Level: Not specified" in prompt
        assert "Current Role: Not specified" in prompt
        assert "Recent Experience: Not specified" in prompt

    def test_description_truncated(self, sample_profile):
        posting = Posting(id="1", title="T", company="C", description="x" * 3000 + "TAIL")

        prompt = build_match_prompt(posting, sample_profile, description_limit=1500)

        assert "x" * 1500 in prompt
        assert "x" * 1501 not in prompt
        assert "TAIL" not in prompt

    def test_prompt_carries_weighted_rubric(self, sample_profile):
        prompt = build_match_prompt(Posting(id="1", title="T"), sample_profile)

        assert "Skills overlap (40% weight)" in prompt
        assert "Role title match (30% weight)" in prompt
        assert "Experience level fit (20% weight)" in prompt
        assert "Job description alignment (10% weight)" in prompt
        assert "If candidate has 50%+ of required skills: score >= 60" in prompt
        assert "If job title matches desired roles: add 20 points" in prompt
        assert "If seniority matches: add 15 points" in prompt

    def test_missing_description_placeholder(self):
        assert truncate_description("") == "No description available"

    def test_short_description_untouched(self):
        assert truncate_description("short", 1500) == "short"


class TestItemMatcher:
    """Test suite for ItemMatcher.match."""

    @pytest.fixture
    def posting(self):
        return Posting(id="p1", title="Backend Engineer", company="Acme", description="Python")

    def test_valid_response_returns_result(self, posting, sample_profile):
        classifier = StubClassifier([match_response(88, matched=["Python"], reasoning="Good")])
        matcher = ItemMatcher(classifier)

        result = matcher.match(posting, sample_profile)

        assert result.match_score == 88
        assert result.matched_skills == ["Python"]
        assert result.reasoning == "Good"
        assert not result.is_fallback

    def test_exactly_one_classifier_call(self, posting, sample_profile):
        classifier = StubClassifier([match_response(50)])
        ItemMatcher(classifier).match(posting, sample_profile)
        assert classifier.call_count == 1

    def test_fenced_response_parsed(self, posting, sample_profile):
        classifier = StubClassifier(["```json\n" + match_response(64) + "\n```"])
        assert ItemMatcher(classifier).match(posting, sample_profile).match_score == 64

    @pytest.mark.parametrize(
        "error",
        [
            ClassifierTimeoutError("timed out"),
            ClassifierTransportError("connection reset"),
            ClassifierQuotaError("rate limited", status_code=429),
            RuntimeError("unexpected"),
        ],
    )
    def test_classifier_failure_returns_fallback(self, posting, sample_profile, error):
        matcher = ItemMatcher(StubClassifier([error]))

        result = matcher.match(posting, sample_profile)

        assert result == MatchResult.fallback()
        assert result.match_score == 0
        assert result.matched_skills == []
        assert result.missing_skills == []
        assert result.reasoning == FALLBACK_REASONING

    @pytest.mark.parametrize(
        "response",
        ["not json at all", match_response(150), '{"reasoning": "no score"}', ""],
    )
    def test_unusable_response_returns_fallback(self, posting, sample_profile, response):
        result = ItemMatcher(StubClassifier([response])).match(posting, sample_profile)
        assert result.is_fallback

    def test_fallback_logs_warning(self, posting, sample_profile, caplog):
        matcher = ItemMatcher(StubClassifier([ClassifierTimeoutError("timed out")]))

        with caplog.at_level("WARNING"):
            matcher.match(posting, sample_profile)

        records = [r for r in caplog.records if getattr(r, "event", None) == "match.classification.failed"]
        assert len(records) == 1
        assert records[0].error_type == "ClassifierTimeoutError"
        assert records[0].posting_id == "p1"

    def test_description_limit_applied(self, sample_profile):
        posting = Posting(id="p", title="T", company="C", description="y" * 500)
        classifier = StubClassifier([match_response(10)])

        ItemMatcher(classifier, description_limit=100).match(posting, sample_profile)

        assert "y" * 100 in classifier.prompts[0]
        assert "y" * 101 not in classifier.prompts[0]

    def test_unexpected_parse_error_returns_fallback(self, posting, sample_profile):
        matcher = ItemMatcher(StubClassifier([match_response(70)]))

        with patch(
            "jobmatch.matching.engine.parse_match_response", side_effect=MemoryError("too big")
        ):
            result = matcher.match(posting, sample_profile)

        assert result.is_fallback

    def test_invalid_description_limit(self):
        with pytest.raises(ValueError):
            ItemMatcher(StubClassifier(), description_limit=0)
