from pathlib import Path

import pytest

from sincewhen.config import DATA_PATH_DEFAULT, load_config
from sincewhen.errors import ConfigError


def test_config_defaults_when_file_missing(tmp_path: Path):
    cfg = load_config(str(tmp_path / "missing.yaml"))

    assert cfg.timezone == "UTC"
    assert cfg.data_path == DATA_PATH_DEFAULT
    assert cfg.log_level == "WARNING"

def test_config_defaults_without_path():
    assert load_config(None).timezone == "UTC"

def test_config_reads_values(tmp_path: Path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        """
        timezone: 'America/Phoenix'
        data_path: /tmp/sincewhen/events.json
        log_level: info
        """,
        encoding="utf-8",
    )

    cfg = load_config(str(cfg_path))

    assert cfg.timezone == "America/Phoenix"
    assert cfg.data_path == "/tmp/sincewhen/events.json"
    assert cfg.log_level == "INFO"

def test_empty_config_file_uses_defaults(tmp_path: Path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("", encoding="utf-8")

    assert load_config(str(cfg_path)).data_path == DATA_PATH_DEFAULT

@pytest.mark.parametrize(
    "content, message",
    [
        ("timezone: Mars/Olympus\n", "Unknown timezone"),
        ("- a\n- b\n", "must be a mapping"),
        ("timezone: [unclosed\n", "Could not read config"),
        ("log_level: chatty\n", "Unknown log_level"),
    ],
)
def test_invalid_config_raises_config_error(tmp_path: Path, content: str, message: str):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(str(cfg_path))
