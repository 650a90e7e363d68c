"""Tests for threshold config loading and request fingerprinting."""

from __future__ import annotations

from pathlib import Path

import pytest

from lopper.analysis.cache import compute_input_digest
from lopper.analysis.request import AnalysisRequest
from lopper.config import LopperConfig, load_config, request_fingerprint, resolve_config_path
from lopper.exceptions import ConfigError
from lopper.model import RemovalCandidateWeights


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    loaded = load_config(tmp_path)

    assert loaded == LopperConfig()
    assert loaded.low_confidence_warning_percent == 40
    assert loaded.min_usage_percent_for_recommendations == 40
    assert loaded.removal_candidate_weights == RemovalCandidateWeights(usage=0.5, impact=0.3, confidence=0.2)


def test_load_config_reads_top_level_keys(tmp_path: Path) -> None:
    config_path = tmp_path / ".lopper.yml"
    config_path.write_text(
        "low_confidence_warning_percent: 55\nremoval_candidate_weight_usage: 2\n",
        encoding="utf-8",
    )

    loaded = load_config(tmp_path)

    assert loaded.low_confidence_warning_percent == 55
    assert loaded.removal_candidate_weight_usage == 2.0
    assert loaded.config_path == str(config_path)


def test_nested_thresholds_take_precedence(tmp_path: Path) -> None:
    (tmp_path / ".lopper.yaml").write_text(
        "min_usage_percent_for_recommendations: 10\nthresholds:\n  min_usage_percent_for_recommendations: 70\n",
        encoding="utf-8",
    )

    loaded = load_config(tmp_path)

    assert loaded.min_usage_percent_for_recommendations == 70


def test_json_config_is_accepted(tmp_path: Path) -> None:
    (tmp_path / "lopper.json").write_text('{"thresholds": {"low_confidence_warning_percent": 0}}', encoding="utf-8")

    assert load_config(tmp_path).low_confidence_warning_percent == 0


def test_yml_wins_over_other_default_names(tmp_path: Path) -> None:
    (tmp_path / ".lopper.yml").write_text("low_confidence_warning_percent: 11\n", encoding="utf-8")
    (tmp_path / "lopper.json").write_text('{"low_confidence_warning_percent": 22}', encoding="utf-8")

    assert load_config(tmp_path).low_confidence_warning_percent == 11


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".lopper.yml").write_text("", encoding="utf-8")

    loaded = load_config(tmp_path)

    assert loaded.low_confidence_warning_percent == 40


def test_explicit_relative_path_resolves_against_root(tmp_path: Path) -> None:
    (tmp_path / "conf").mkdir()
    (tmp_path / "conf" / "thresholds.yml").write_text("low_confidence_warning_percent: 5\n", encoding="utf-8")

    loaded = load_config(tmp_path, Path("conf/thresholds.yml"))

    assert loaded.low_confidence_warning_percent == 5


def test_explicit_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(tmp_path, tmp_path / "absent.yml")


def test_resolve_config_path_none_when_absent(tmp_path: Path) -> None:
    assert resolve_config_path(tmp_path, None) is None


@pytest.mark.parametrize(
    ("yaml_content", "expected_match"),
    [
        ("low_confidence_warning_percent: 101\n", "low_confidence_warning_percent"),
        ("low_confidence_warning_percent: -1\n", "low_confidence_warning_percent"),
        ("min_usage_percent_for_recommendations: true\n", "min_usage_percent_for_recommendations"),
        ("min_usage_percent_for_recommendations: 12.5\n", "min_usage_percent_for_recommendations"),
        ("removal_candidate_weight_impact: -0.1\n", "removal_candidate_weight_impact"),
        ("removal_candidate_weight_impact: .nan\n", "removal_candidate_weight_impact"),
        ("removal_candidate_weight_confidence: high\n", "removal_candidate_weight_confidence"),
        ("unknown_key: 1\n", "unknown_key"),
        ("thresholds:\n  typo_percent: 1\n", "thresholds.typo_percent"),
        ("thresholds: [1, 2]\n", "thresholds must be a mapping"),
        ("- just\n- a list\n", "must be a mapping"),
        ("key: [unclosed\n", "Invalid config file"),
    ],
    ids=[
        "percent_too_high",
        "percent_negative",
        "percent_bool",
        "percent_float",
        "weight_negative",
        "weight_nan",
        "weight_string",
        "unknown_top_level",
        "unknown_nested",
        "thresholds_not_mapping",
        "root_not_mapping",
        "invalid_yaml",
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, yaml_content: str, expected_match: str) -> None:
    (tmp_path / ".lopper.yml").write_text(yaml_content, encoding="utf-8")

    with pytest.raises(ConfigError, match=expected_match):
        load_config(tmp_path)


def test_all_zero_weights_are_rejected(tmp_path: Path) -> None:
    (tmp_path / ".lopper.yml").write_text(
        "thresholds:\n"
        "  removal_candidate_weight_usage: 0\n"
        "  removal_candidate_weight_impact: 0\n"
        "  removal_candidate_weight_confidence: 0\n",
        encoding="utf-8",
    )

    with pytest.raises(ConfigError, match="at least one weight"):
        load_config(tmp_path)


def test_config_error_is_a_value_error(tmp_path: Path) -> None:
    (tmp_path / ".lopper.yml").write_text("unknown_key: 1\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(tmp_path)


class TestApplyTo:
    def test_fills_unset_request_fields(self) -> None:
        config = LopperConfig(low_confidence_warning_percent=25, config_path="/repo/.lopper.yml")

        applied = config.apply_to(AnalysisRequest(repo_path="/repo"))

        assert applied.low_confidence_warning_percent == 25
        assert applied.min_usage_percent_for_recommendations == 40
        assert applied.removal_candidate_weights == config.removal_candidate_weights
        assert applied.config_path == "/repo/.lopper.yml"

    def test_explicit_request_values_win(self) -> None:
        weights = RemovalCandidateWeights(usage=1, impact=1, confidence=1)
        request = AnalysisRequest(
            repo_path="/repo",
            config_path="custom.yml",
            low_confidence_warning_percent=0,
            removal_candidate_weights=weights,
        )

        applied = LopperConfig(low_confidence_warning_percent=80, config_path="/repo/.lopper.yml").apply_to(request)

        assert applied.low_confidence_warning_percent == 0
        assert applied.removal_candidate_weights == weights
        assert applied.config_path == "/repo/.lopper.yml"

    def test_keeps_request_config_path_when_nothing_was_loaded(self) -> None:
        applied = LopperConfig().apply_to(AnalysisRequest(repo_path="/repo", config_path="custom.yml"))

        assert applied.config_path == "custom.yml"

    def test_relative_config_path_is_hashed_from_the_repo_root(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        repo = tmp_path / "repo"
        repo.mkdir()
        config_file = repo / "custom.yml"
        config_file.write_text("low_confidence_warning_percent: 30\n", encoding="utf-8")
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)
        request = AnalysisRequest(repo_path=str(repo), config_path="custom.yml")

        applied = load_config(repo, Path(request.config_path)).apply_to(request)
        before = compute_input_digest(repo, applied.config_path)
        config_file.write_text("low_confidence_warning_percent: 60\n", encoding="utf-8")
        after = compute_input_digest(repo, applied.config_path)

        assert applied.config_path == str(config_file.resolve())
        assert before != after


class TestRequestFingerprint:
    def test_is_stable_and_normalizes_root(self) -> None:
        request = AnalysisRequest(repo_path="/repo")

        assert request_fingerprint(request, "js-ts", "/repo/pkg") == request_fingerprint(
            request, " js-ts ", "/repo/pkg/../pkg"
        )

    @pytest.mark.parametrize(
        "changed",
        [
            AnalysisRequest(repo_path="/repo", dependency="lodash"),
            AnalysisRequest(repo_path="/repo", top_n=10),
            AnalysisRequest(repo_path="/repo", runtime_profile="node-import"),
            AnalysisRequest(repo_path="/repo", config_path="/repo/.lopper.yml"),
            AnalysisRequest(repo_path="/repo", min_usage_percent_for_recommendations=40),
            AnalysisRequest(repo_path="/repo", low_confidence_warning_percent=40),
            AnalysisRequest(
                repo_path="/repo",
                removal_candidate_weights=RemovalCandidateWeights(usage=0.5, impact=0.3, confidence=0.2),
            ),
        ],
    )
    def test_output_affecting_fields_change_the_key(self, changed: AnalysisRequest) -> None:
        baseline = request_fingerprint(AnalysisRequest(repo_path="/repo"), "js-ts", "/repo")

        assert request_fingerprint(changed, "js-ts", "/repo") != baseline

    def test_adapter_and_root_change_the_key(self) -> None:
        request = AnalysisRequest(repo_path="/repo")
        baseline = request_fingerprint(request, "js-ts", "/repo")

        assert request_fingerprint(request, "python", "/repo") != baseline
        assert request_fingerprint(request, "js-ts", "/repo/pkg") != baseline

    def test_repo_path_alone_does_not_change_the_key(self) -> None:
        assert request_fingerprint(AnalysisRequest(repo_path="/a"), "js-ts", "/repo") == request_fingerprint(
            AnalysisRequest(repo_path="/b"), "js-ts", "/repo"
        )
