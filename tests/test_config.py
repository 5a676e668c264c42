"""
Unit tests for configuration and data models.
"""

import pytest
from pydantic import ValidationError

from answer_grader.config import (
    ConfigurationError,
    Settings,
    check_api_key_format,
    default_base_url,
)
from answer_grader.grading import normalize_result
from answer_grader.models import (
    GradingRequest,
    GradingResult,
    ProviderConfig,
    ProviderKind,
    ScoreLabel,
    label_for_score,
)


class TestSettings:
    """Tests for Settings."""

    def test_provider_config_resolves_selected_provider(self, test_settings: Settings) -> None:
        """Test the configured provider tag selects credentials."""
        config = test_settings.provider_config()

        assert config.provider == ProviderKind.ZHIPU
        assert config.api_key == "zhipu-test-key-0123456789abcdef"
        assert config.base_url == "https://zhipu.test.local/api/paas/v4"

    def test_provider_config_override(self, test_settings: Settings) -> None:
        """Test an explicit provider and model override settings."""
        config = test_settings.provider_config(ProviderKind.OPENAI, model="gpt-4o")

        assert config.provider == ProviderKind.OPENAI
        assert config.api_key == "sk-test-openai-key"
        assert config.resolved_model == "gpt-4o"
        assert config.base_url is None

    def test_provider_config_missing_key(self, test_settings: Settings) -> None:
        """Test a provider without a key cannot be configured."""
        settings = test_settings.model_copy(update={"anthropic_api_key": None})

        with pytest.raises(ConfigurationError, match="claude") as exc_info:
            settings.provider_config(ProviderKind.CLAUDE)

        assert exc_info.value.provider == ProviderKind.CLAUDE

    def test_settings_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test settings load case-insensitively from the environment."""
        monkeypatch.setenv("GRADER_PROVIDER", "claude")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-from-env")
        monkeypatch.setenv("CLAUDE_MODEL", "claude-env-model")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)
        config = settings.provider_config()

        assert config.provider == ProviderKind.CLAUDE
        assert config.api_key == "sk-ant-from-env"
        assert config.resolved_model == "claude-env-model"
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_blank_base_url_is_none(self) -> None:
        """Test an empty override means 'use the default endpoint'."""
        settings = Settings(_env_file=None, openai_base_url="")

        assert settings.openai_base_url is None


class TestApiKeyFormat:
    """Tests for check_api_key_format."""

    @pytest.mark.parametrize(
        ("provider", "key", "valid"),
        [
            (ProviderKind.OPENAI, "sk-abc123", True),
            (ProviderKind.OPENAI, "abc123", False),
            (ProviderKind.CLAUDE, "sk-ant-abc123", True),
            (ProviderKind.CLAUDE, "sk-abc123", False),
            (ProviderKind.ZHIPU, "a" * 21, True),
            (ProviderKind.ZHIPU, "a" * 20, False),
            (ProviderKind.OPENAI, "", False),
        ],
    )
    def test_key_format(self, provider: ProviderKind, key: str, valid: bool) -> None:
        """Test per-provider key format rules."""
        is_valid, message = check_api_key_format(provider, key)

        assert is_valid is valid
        assert message

    def test_default_base_urls(self) -> None:
        """Test each provider has a documented endpoint."""
        assert default_base_url(ProviderKind.OPENAI) == "https://api.openai.com/v1"
        assert default_base_url(ProviderKind.CLAUDE) == "https://api.anthropic.com"
        assert default_base_url(ProviderKind.ZHIPU) == "https://open.bigmodel.cn/api/paas/v4"


class TestModels:
    """Tests for request and result models."""

    def test_request_rejects_blank_fields(self) -> None:
        """Test whitespace-only question, reference or answer is rejected."""
        with pytest.raises(ValidationError):
            GradingRequest(question_text="Q", reference_answer="R", student_answer="   ")

    def test_request_rejects_out_of_range_current_score(self) -> None:
        """Test current score must be between 1 and 5."""
        with pytest.raises(ValidationError):
            GradingRequest(
                question_text="Q", reference_answer="R", student_answer="A", current_score=6
            )

    def test_request_accepts_camel_case(self) -> None:
        """Test requests can be built from the camelCase wire shape."""
        request = GradingRequest.model_validate(
            {
                "questionText": "Q",
                "referenceAnswer": "R",
                "studentAnswer": "A",
                "scoringCriteria": None,
                "currentScore": 2,
            }
        )

        assert request.scoring_criteria == ""
        assert request.current_score == 2

    def test_request_is_immutable(self, sample_request: GradingRequest) -> None:
        """Test requests are frozen."""
        with pytest.raises(ValidationError):
            sample_request.student_answer = "changed"  # type: ignore[misc]

    def test_label_table(self) -> None:
        """Test the fixed label table."""
        assert [label_for_score(s).value for s in range(1, 6)] == [
            "needs improvement",
            "passing",
            "average",
            "good",
            "excellent",
        ]
        assert label_for_score(42) == ScoreLabel.AVERAGE

    def test_result_payload_shape(self) -> None:
        """Test the camelCase payload carries exactly the result fields."""
        payload = normalize_result({"score": 4}).to_payload()

        assert set(payload) == {"score", "scoreLabel", "upgradeAnswer", "feedback"}
        assert "encouragement" not in payload
        assert payload["scoreLabel"] == "good"
        assert set(payload["upgradeAnswer"]) == {"targetScore", "templateAnswer", "keyPoints"}
        assert set(payload["feedback"]) == {"strengths", "weaknesses", "suggestions"}

    def test_result_payload_with_encouragement(self) -> None:
        """Test the optional encouragement block is serialized when present."""
        payload = normalize_result({}, include_encouragement=True).to_payload()

        assert set(payload["encouragement"]) == {"message", "tip", "progress"}

    @pytest.mark.parametrize(("score", "wrong"), [(1, True), (3, True), (4, False), (5, False)])
    def test_result_is_wrong(self, score: int, wrong: bool) -> None:
        """Test answers scoring 3 or lower are marked wrong."""
        result: GradingResult = normalize_result({"score": score})

        assert result.is_wrong is wrong

    def test_result_rejects_out_of_range_score(self) -> None:
        """Test the model itself enforces the score range."""
        valid = normalize_result({})

        with pytest.raises(ValidationError):
            GradingResult(
                score=6,
                score_label=ScoreLabel.EXCELLENT,
                upgrade_answer=valid.upgrade_answer,
                feedback=valid.feedback,
            )

    def test_provider_config_requires_key(self) -> None:
        """Test an empty API key is rejected."""
        with pytest.raises(ValidationError):
            ProviderConfig(provider=ProviderKind.OPENAI, api_key="")
