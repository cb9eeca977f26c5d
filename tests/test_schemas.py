"""Tests for request/response models and configuration."""

import pydantic
import pytest

from models.schemas import MagicEightBallRequest, ResponseRecord, ResponseStatus, SystemConfig


class TestResponseRecord:
    def test_defaults_to_success_with_empty_message(self) -> None:
        record = ResponseRecord(questionNumber=1, question="Q", answer="Yes", elapsedMillis=0)

        assert record.status == ResponseStatus.SUCCESS
        assert record.message == ""

    def test_negative_elapsed_time_is_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ResponseRecord(questionNumber=1, question="Q", answer="Yes", elapsedMillis=-1)

    def test_question_number_starts_at_one(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ResponseRecord(questionNumber=0, question="Q", answer="Yes", elapsedMillis=0)

    def test_status_serializes_as_code(self) -> None:
        record = ResponseRecord(
            questionNumber=1,
            question="Q",
            elapsedMillis=0,
            status=ResponseStatus.INTERNAL_ERROR,
            message="boom",
        )

        assert record.model_dump(mode="json")["status"] == 500


class TestMagicEightBallRequest:
    def test_questions_keep_submission_order(self) -> None:
        request = MagicEightBallRequest(questions=["b", "a", "b"])

        assert request.questions == ["b", "a", "b"]

    def test_questions_field_is_required(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            MagicEightBallRequest()


class TestSystemConfig:
    def test_defaults_when_environment_is_empty(self, monkeypatch) -> None:
        for name in ("API_PORT", "MAX_CONCURRENT_WORKERS", "QUESTION_TIMEOUT_MS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = SystemConfig.from_env()

        assert config.apiPort == 8080
        assert config.maxConcurrentWorkers is None
        assert config.questionTimeoutMs is None
        assert config.logLevel == "INFO"

    def test_values_are_read_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("API_PORT", "9000")
        monkeypatch.setenv("MAX_CONCURRENT_WORKERS", "4")
        monkeypatch.setenv("QUESTION_TIMEOUT_MS", "250")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = SystemConfig.from_env()

        assert config.apiPort == 9000
        assert config.maxConcurrentWorkers == 4
        assert config.questionTimeoutMs == 250
        assert config.logLevel == "DEBUG"

    def test_invalid_log_level_is_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            SystemConfig(logLevel="LOUD")

    def test_zero_workers_is_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            SystemConfig(maxConcurrentWorkers=0)
