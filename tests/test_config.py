"""Tests for environment based settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cl_resize_tools.common.file_storage_impl import LocalFileStorage
from cl_resize_tools.config import (
    ResizeSettings,
    configure_logging,
    get_file_storage,
    get_settings,
)
from cl_resize_tools.plugins.image_resize.algo.geometry import ResizeMode


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    for name in ("MODE", "DEFAULT_QUALITY", "STORAGE_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(f"CL_RESIZE_{name}", raising=False)

    settings = ResizeSettings(_env_file=None)  # pyright: ignore[reportCallIssue]

    assert settings.mode is ResizeMode.fill
    assert settings.default_quality == 90
    assert settings.log_level == "INFO"


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("CL_RESIZE_MODE", "inset")
    monkeypatch.setenv("CL_RESIZE_DEFAULT_QUALITY", "75")
    monkeypatch.setenv("CL_RESIZE_STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("CL_RESIZE_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.mode is ResizeMode.fit
    assert settings.default_quality == 75
    assert settings.storage_dir == tmp_path
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("name", "value"),
    [("MODE", "stretch"), ("DEFAULT_QUALITY", "101"), ("LOG_LEVEL", "loud")],
)
def test_settings_invalid_values_fail_fast(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
):
    monkeypatch.setenv(f"CL_RESIZE_{name}", value)

    with pytest.raises(ValidationError):
        _ = get_settings()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_configure_logging(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CL_RESIZE_LOG_LEVEL", "WARNING")

    configure_logging()


def test_get_file_storage_uses_storage_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    storage_dir = tmp_path / "jobs"
    monkeypatch.setenv("CL_RESIZE_STORAGE_DIR", str(storage_dir))

    storage = get_file_storage()

    assert isinstance(storage, LocalFileStorage)
    assert storage.base_dir == storage_dir.resolve()
    assert storage_dir.is_dir()


def test_get_file_storage_from_explicit_settings(tmp_path: Path):
    settings = ResizeSettings(storage_dir=tmp_path / "explicit", _env_file=None)  # pyright: ignore[reportCallIssue]

    assert get_file_storage(settings).base_dir == (tmp_path / "explicit").resolve()
