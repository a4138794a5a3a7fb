"""Unit tests for environment configuration."""

import pytest

from legacy_rewriter.core.config import POST_R3_MARKER, PRE_R3_MARKER, RewriteConfig, load_config


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PRE_MARKER", "POST_MARKER", "IMPORT_PREFIX", "LOG_LEVEL"):
        monkeypatch.delenv(f"LEGACY_REWRITER_{name}", raising=False)

    config = load_config()

    assert config == RewriteConfig()
    assert config.pre_marker == PRE_R3_MARKER == "__PRE_R3__"
    assert config.post_marker == POST_R3_MARKER == "__POST_R3__"
    assert config.log_level == "WARNING"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEGACY_REWRITER_PRE_MARKER", "__OLD__")
    monkeypatch.setenv("LEGACY_REWRITER_POST_MARKER", "__NEW__")
    monkeypatch.setenv("LEGACY_REWRITER_IMPORT_PREFIX", "ngcc")
    monkeypatch.setenv("LEGACY_REWRITER_LOG_LEVEL", "debug")

    config = load_config()

    assert config.pre_marker == "__OLD__"
    assert config.post_marker == "__NEW__"
    assert config.import_prefix == "ngcc"
    assert config.log_level == "DEBUG"
