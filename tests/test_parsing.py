"""Unit tests for classifier response parsing.

Covers fence stripping, score validation, optional field defaults and the
failure outcomes that make the item matcher fall back.
"""

import pytest

from jobmatch.classification.exceptions import ClassifierResponseError
from jobmatch.classification.parsing import ParseOutcome, parse_match_response, strip_fences
from tests.helpers import match_response


class TestStripFences:
    """Test suite for markdown fence removal."""

    def test_plain_json_unchanged(self):
        assert strip_fences('{"matchScore": 5}') == '{"matchScore": 5}'

    def test_json_fence_removed(self):
        text = '```json\n{"matchScore": 5}\n```'
        assert strip_fences(text) == '{"matchScore": 5}'

    def test_bare_fence_removed(self):
        text = '```\n{"matchScore": 5}\n```'
        assert strip_fences(text) == '{"matchScore": 5}'

    def test_surrounding_prose_dropped(self):
        text = 'Here is my analysis:\n{"matchScore": 5, "x": {"y": 1}}\nHope this helps.'
        assert strip_fences(text) == '{"matchScore": 5, "x": {"y": 1}}'

    def test_no_braces_returns_stripped_text(self):
        assert strip_fences("  not json  ") == "not json"

    def test_none_is_empty(self):
        assert strip_fences(None) == ""


class TestParseMatchResponse:
    """Test suite for parse_match_response."""

    def test_full_response(self):
        text = match_response(
            85,
            matched=["Python", "FastAPI"],
            missing=["Kubernetes"],
            reasoning="Strong backend fit",
            salaryMatch="Competitive",
            locationMatch="Perfect",
        )

        outcome = parse_match_response(text)

        assert outcome.ok
        assert outcome.error is None
        result = outcome.result
        assert result.match_score == 85
        assert result.matched_skills == ["Python", "FastAPI"]
        assert result.missing_skills == ["Kubernetes"]
        assert result.reasoning == "Strong backend fit"
        assert result.salary_match == "Competitive"
        assert result.location_match == "Perfect"

    def test_fenced_response(self):
        outcome = parse_match_response("```json\n" + match_response(72) + "\n```")
        assert outcome.ok
        assert outcome.result.match_score == 72

    def test_missing_optional_fields_default(self):
        outcome = parse_match_response('{"matchScore": 40}')

        assert outcome.ok
        assert outcome.result.matched_skills == []
        assert outcome.result.missing_skills == []
        assert outcome.result.reasoning == ""
        assert outcome.result.salary_match is None
        assert outcome.result.location_match is None

    def test_null_skill_lists_default_to_empty(self):
        outcome = parse_match_response(
            '{"matchScore": 40, "matchedSkills": null, "missingSkills": null}'
        )
        assert outcome.ok
        assert outcome.result.matched_skills == []

    @pytest.mark.parametrize("score", [0, 100])
    def test_boundary_scores_accepted(self, score):
        outcome = parse_match_response(match_response(score))
        assert outcome.ok
        assert outcome.result.match_score == score

    def test_fractional_score_rounded(self):
        outcome = parse_match_response(match_response(74.6))
        assert outcome.ok
        assert outcome.result.match_score == 75

    @pytest.mark.parametrize("score", [-1, 101, 250])
    def test_out_of_range_score_fails(self, score):
        outcome = parse_match_response(match_response(score))
        assert not outcome.ok
        assert isinstance(outcome.error, ClassifierResponseError)

    @pytest.mark.parametrize("score", ["85", True, None, [85]])
    def test_non_numeric_score_fails(self, score):
        outcome = parse_match_response(match_response(score))
        assert not outcome.ok

    def test_missing_score_fails(self):
        outcome = parse_match_response('{"matchedSkills": ["Python"]}')
        assert not outcome.ok
        assert "matchScore" in str(outcome.error)

    def test_skills_must_be_list(self):
        outcome = parse_match_response('{"matchScore": 50, "matchedSkills": "Python"}')
        assert not outcome.ok

    def test_invalid_json_fails_with_raw_text(self):
        outcome = parse_match_response("I think this is a good match!")
        assert not outcome.ok
        assert outcome.error.raw_text == "I think this is a good match!"

    def test_truncated_json_fails(self):
        outcome = parse_match_response('{"matchScore": 85, "matchedSkills": ["Py')
        assert not outcome.ok

    def test_empty_response_fails(self):
        outcome = parse_match_response("")
        assert not outcome.ok
        assert "empty" in str(outcome.error)

    def test_json_array_fails(self):
        outcome = parse_match_response("[1, 2, 3]")
        assert not outcome.ok


class TestParseOutcome:
    """Test suite for the ParseOutcome wrapper."""

    def test_failure_is_not_ok(self):
        outcome = ParseOutcome.failure(ClassifierResponseError("bad"))
        assert not outcome.ok
        assert outcome.result is None


class TestPathologicalResponses:
    """Responses the JSON decoder cannot handle still yield a failure outcome."""

    def test_deeply_nested_json_fails(self):
        text = '{"matchScore": 50, "x": ' + "[" * 200000 + "]" * 200000 + "}"

        outcome = parse_match_response(text)

        assert not outcome.ok
        assert isinstance(outcome.error, ClassifierResponseError)
