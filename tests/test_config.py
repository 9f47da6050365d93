"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from meetsync.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("TRANSCRIPT_CAP", "MOM_INTERVAL_SECONDS", "SUMMARIZER_BACKEND"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.transcript_cap == 2000
        assert s.mom_interval_seconds == 25.0
        assert s.summarizer_backend == "builtin"
        assert s.cors_origins == ["*"]

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRANSCRIPT_CAP", "50")
        monkeypatch.setenv("SUMMARIZER_BACKEND", "llm")
        monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:5173"]')
        s = Settings(_env_file=None)
        assert s.transcript_cap == 50
        assert s.summarizer_backend == "llm"
        assert s.cors_origins == ["http://localhost:5173"]

    def test_rejects_unknown_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUMMARIZER_BACKEND", "gpt")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_rejects_zero_cap(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, transcript_cap=0)
