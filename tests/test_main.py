"""Unit tests for the main entry point.

Tests the main() function including:
- Input file loading (postings JSON, profile JSON or YAML)
- Configuration and classifier errors mapped to exit codes
- Report and JSON output
- Cancellation exit code
"""

import json
import signal
from unittest.mock import patch

import pytest

from jobmatch.classification.exceptions import ClassifierConfigurationError
from jobmatch.main import (
    EXIT_CANCELLED,
    EXIT_INVALID,
    EXIT_OK,
    build_parser,
    load_postings,
    load_profile,
    main,
)
from jobmatch.pipeline import CancelToken, InvalidInputError
from tests.helpers import StubClassifier, match_response

POSTINGS = [
    {"id": "1", "title": "Backend Engineer", "company": "Acme", "description": "Python"},
    {"id": "2", "title": "Data Analyst", "company": "Globex", "description": "SQL"},
]


@pytest.fixture
def workdir(tmp_path, monkeypatch, mock_env_vars):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "postings.json").write_text(json.dumps(POSTINGS))
    (tmp_path / "profile.yaml").write_text(
        "skills: [Python, SQL]\ndesiredRoles: [Backend Engineer]\nyearsOfExperience: 5\n"
    )
    return tmp_path


@pytest.fixture
def stub_classifier():
    return StubClassifier(
        by_title={
            "Backend Engineer": match_response(88, matched=["Python"]),
            "Data Analyst": match_response(40, missing=["Tableau"]),
        }
    )


@pytest.fixture
def patched_runtime(stub_classifier):
    with patch("jobmatch.main.OpenAIClassifier", return_value=stub_classifier) as mock_cls, patch(
        "jobmatch.main.signal.signal"
    ):
        yield mock_cls


ARGS = ["--postings", "postings.json", "--profile", "profile.yaml"]


class TestLoadInputs:
    """Tests for input file helpers."""

    def test_load_postings_list(self, tmp_path):
        path = tmp_path / "postings.json"
        path.write_text(json.dumps(POSTINGS))
        assert load_postings(path) == POSTINGS

    def test_load_postings_jobs_envelope(self, tmp_path):
        path = tmp_path / "postings.json"
        path.write_text(json.dumps({"jobs": POSTINGS, "total": 2}))
        assert load_postings(path) == POSTINGS

    def test_load_postings_wrong_shape(self, tmp_path):
        path = tmp_path / "postings.json"
        path.write_text(json.dumps({"id": "1"}))

        with pytest.raises(InvalidInputError):
            load_postings(path)

    def test_load_postings_missing_file(self, tmp_path):
        with pytest.raises(InvalidInputError):
            load_postings(tmp_path / "missing.json")

    def test_load_profile_json(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({"skills": ["Go"]}))
        assert load_profile(path) == {"skills": ["Go"]}

    @pytest.mark.parametrize("value", ["0", "-1", "two"])
    def test_limit_below_one_rejected(self, value, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(ARGS + ["--limit", value])

        assert exc_info.value.code == 2
        assert "--limit" in capsys.readouterr().err

    def test_limit_accepted(self):
        assert build_parser().parse_args(ARGS + ["--limit", "3"]).limit == 3

    def test_load_profile_invalid_yaml(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_text("skills: [unclosed")

        with pytest.raises(InvalidInputError):
            load_profile(path)


class TestMain:
    """Tests for main()."""

    def test_report_output(self, workdir, patched_runtime, capsys):
        exit_code = main(ARGS)

        out = capsys.readouterr().out
        assert exit_code == EXIT_OK
        assert "Job Match Report" in out
        assert out.index("Backend Engineer") < out.index("Data Analyst")
        assert "1 jobs meet the 75%+ threshold." in out

    def test_json_output(self, workdir, patched_runtime, capsys):
        exit_code = main(ARGS + ["--json", "--threshold", "90"])

        results = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_OK
        assert [r["id"] for r in results] == ["1", "2"]
        assert results[0]["matchScore"] == 88
        assert results[1]["missingSkills"] == ["Tableau"]

    def test_classifier_built_from_config(self, workdir, patched_runtime, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "gpt-4o")

        main(ARGS)

        kwargs = patched_runtime.call_args.kwargs
        assert kwargs["api_key"] == "test-key"
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["max_tokens"] == 1024

    def test_missing_api_key(self, workdir, patched_runtime, monkeypatch, capsys):
        monkeypatch.delenv("LLM_API_KEY")

        assert main(ARGS) == EXIT_INVALID
        assert "LLM_API_KEY" in capsys.readouterr().err

    def test_classifier_configuration_error(self, workdir):
        with patch(
            "jobmatch.main.OpenAIClassifier", side_effect=ClassifierConfigurationError("no key")
        ), patch("jobmatch.main.signal.signal"):
            assert main(ARGS) == EXIT_INVALID

    def test_invalid_profile(self, workdir, patched_runtime, stub_classifier):
        (workdir / "profile.yaml").write_text("- not\n- a mapping\n")

        assert main(ARGS) == EXIT_INVALID
        assert stub_classifier.call_count == 0

    def test_missing_postings_file(self, workdir, patched_runtime):
        assert main(["--postings", "nope.json", "--profile", "profile.yaml"]) == EXIT_INVALID

    def test_cancelled_run(self, workdir, patched_runtime, stub_classifier):
        token = CancelToken()
        token.cancel(reason="test")

        with patch("jobmatch.main.CancelToken", return_value=token):
            exit_code = main(ARGS)

        assert exit_code == EXIT_CANCELLED
        assert stub_classifier.call_count == 0

    def test_signal_handlers_installed(self, workdir, stub_classifier):
        with patch("jobmatch.main.OpenAIClassifier", return_value=stub_classifier), patch(
            "jobmatch.main.signal.signal"
        ) as mock_signal:
            main(ARGS)

        signals = [c.args[0] for c in mock_signal.call_args_list]
        assert signal.SIGINT in signals
        assert signal.SIGTERM in signals

