import pytest

from mindtrack.config_manager import SystemConfig, get_config
from mindtrack.exceptions import ConfigError


def test_defaults_without_runtime_file(tmp_path):
    cfg = get_config(tmp_path / "missing.yaml")
    assert cfg == SystemConfig()
    assert cfg.ADJUSTMENT_WINDOW == 14
    assert cfg.MIN_EXPECTED_DAYS == 7


def test_runtime_yaml_overrides_known_keys(tmp_path):
    path = tmp_path / "runtime.yaml"
    path.write_text("LOOSEN_RATE: 0.25\nMAX_FEEDBACK_ITEMS: 20\nNOT_A_SETTING: 1\n", encoding="utf-8")

    cfg = get_config(path)

    assert cfg.LOOSEN_RATE == 0.25
    assert cfg.MAX_FEEDBACK_ITEMS == 20
    assert not hasattr(cfg, "NOT_A_SETTING")


def test_empty_runtime_yaml_uses_defaults(tmp_path):
    path = tmp_path / "runtime.yaml"
    path.write_text("", encoding="utf-8")
    assert get_config(path) == SystemConfig()


def test_broken_yaml_raises_config_error(tmp_path):
    path = tmp_path / "runtime.yaml"
    path.write_text("LOOSEN_RATE: [0.3\n", encoding="utf-8")

    with pytest.raises(ConfigError) as exc:
        get_config(path)
    assert exc.value.config_path == str(path)


def test_non_mapping_yaml_raises_config_error(tmp_path):
    path = tmp_path / "runtime.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        get_config(path)
