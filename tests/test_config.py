from pathlib import Path

import pytest
import yaml

from portal.config import AppConfig, load_config, save_config


def test_defaults() -> None:
    config = AppConfig()

    assert config.db_path == "data/unimatch.db"
    assert config.storage_key == "unimatch_db_v1"
    assert config.seed_demo is True
    assert config.icebreaker is None


def test_load_config_with_provider(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    with open(config_file, "w") as f:
        yaml.dump(
            {
                "db_path": str(tmp_path / "app.db"),
                "seed_demo": False,
                "icebreaker": {
                    "provider_id": "ice",
                    "provider_type": "fake",
                    "model_name": "fake-model",
                },
            },
            f,
        )

    config = load_config(config_file)

    assert config.seed_demo is False
    assert config.icebreaker is not None
    assert config.icebreaker.provider_type == "fake"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    assert load_config(config_file) == AppConfig()


def test_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "content",
    ["- just\n- a list\n", "icebreaker_max_tokens: 0\n", "db_path: [unclosed\n"],
)
def test_invalid_config_raises_value_error(tmp_path: Path, content: str) -> None:
    config_file = tmp_path / "bad.yaml"
    config_file.write_text(content)

    with pytest.raises(ValueError):
        load_config(config_file)


def test_save_then_load(tmp_path: Path) -> None:
    config = AppConfig(db_path="x.db", log_level="DEBUG")
    path = tmp_path / "nested" / "config.yaml"

    save_config(config, path)

    assert load_config(path) == config
