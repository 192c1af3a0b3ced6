import logging
from pathlib import Path

import pytest

from termnotes.config import (
    CONFIG_ENV_STORE,
    AppConfig,
    ConfigError,
    configure_logging,
    load_config,
    validate_config,
)
from termnotes.session import EXTENDED, MINIMAL


@pytest.fixture(autouse=True)
def _no_env_store(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_STORE, raising=False)


def test_defaults_when_file_absent(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    config = load_config()

    assert config.layout == "extended"
    assert config.field_layout is EXTENDED
    assert config.theme is None
    assert config.log_level == "WARNING"


def test_yaml_settings(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text(
        "\n".join(
            [
                f"store: {tmp_path / 'notes.json'}",
                "layout: Minimal",
                "theme: nord",
                "log_level: debug",
            ]
        ),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.store_path == tmp_path / "notes.json"
    assert config.field_layout is MINIMAL
    assert config.theme == "nord"
    assert config.log_level == "DEBUG"


def test_env_overrides_yaml_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.yml"
    path.write_text("store: /somewhere/else.json\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_STORE, str(tmp_path / "env.json"))

    assert load_config(path).store_path == tmp_path / "env.json"


def test_overrides_ignore_none(tmp_path: Path) -> None:
    config = AppConfig(store_path=tmp_path / "a.json")
    updated = config.with_overrides(store_path=None, layout="minimal")

    assert updated.store_path == tmp_path / "a.json"
    assert updated.layout == "minimal"
    assert config.layout == "extended"


@pytest.mark.parametrize(
    "body",
    [
        "- just\n- a list\n",
        "layout: full\n",
        "log_level: LOUD\n",
        "store: 42\n",
        "store: [unclosed\n",
    ],
)
def test_invalid_files(tmp_path: Path, body: str) -> None:
    path = tmp_path / "config.yml"
    path.write_text(body, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_explicit_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yml")


def test_validate_config_rejects_unknown_layout(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        validate_config(AppConfig(store_path=tmp_path / "n.json", layout="huge"))


def test_configure_logging_writes_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "termnotes.log"
    handler = configure_logging(log_file, "info")
    try:
        logging.getLogger("termnotes.storage").info("hello from storage")
        handler.flush()
        assert "hello from storage" in log_file.read_text(encoding="utf-8")
    finally:
        logging.getLogger("termnotes").removeHandler(handler)
        handler.close()
