#!filepath: tests/base_test/test_app_config.py
import yaml
import pytest

from spending_planner.config import AppConfig
from spending_planner.config.log_config import LogConfig
from spending_planner.config.planner_config import PlannerConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("PLANNER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PLANNER_DEFAULT_WEEKS", raising=False)


@pytest.fixture
def sample_config_file(tmp_path):
    """
    创建临时 YAML 配置文件用于测试，
    pytest 会自动清理该目录。
    """
    data = {
        "log": {
            "dir": "logs",
            "rotation": "1 day",
            "retention": "30 days",
            "level": "DEBUG"
        },
        "planner": {
            "default_weeks": 26,
            "cache_size": 8,
            "default_growth_rate_percent": {"coins": 3.0, "gems": 1.0}
        }
    }

    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(data), encoding="utf-8")
    return config_file


def test_app_config_load(sample_config_file):
    """测试 AppConfig 是否能正确加载 YAML"""
    cfg = AppConfig.load(path=str(sample_config_file))

    # 顶层
    assert isinstance(cfg, AppConfig)

    # 子配置是否根据 schema 解析成功
    assert isinstance(cfg.log, LogConfig)
    assert isinstance(cfg.planner, PlannerConfig)


def test_log_config_values(sample_config_file):
    """检查 log 配置内容是否正确读取"""
    cfg = AppConfig.load(path=str(sample_config_file))
    assert cfg.log.level == "DEBUG"
    assert cfg.log.dir == "logs"


def test_planner_config_values(sample_config_file):
    cfg = AppConfig.load(path=str(sample_config_file))

    assert cfg.planner.default_weeks == 26
    assert cfg.planner.cache_size == 8
    assert cfg.planner.default_growth_rate_percent == {"coins": 3.0, "gems": 1.0}


def test_default_config_file():
    """包内 base.yml"""
    cfg = AppConfig.load()

    assert cfg.planner.default_weeks == 12
    assert cfg.planner.default_growth_rate_percent["coins"] == 5.0


def test_missing_sections_use_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    cfg = AppConfig.load(path=str(path))

    assert cfg.log.level == "INFO"
    assert cfg.planner.cache_size == 32


def test_env_overrides(sample_config_file, monkeypatch):
    monkeypatch.setenv("PLANNER_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("PLANNER_DEFAULT_WEEKS", "52")

    cfg = AppConfig.load(path=str(sample_config_file))

    assert cfg.log.level == "WARNING"
    assert cfg.planner.default_weeks == 52


def test_unsupported_weeks_should_fail(tmp_path):
    """default_weeks 只能是 4 / 8 / 12 / 26 / 52"""
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text(yaml.safe_dump({"planner": {"default_weeks": 10}}))

    with pytest.raises(Exception):
        AppConfig.load(path=str(bad_file))


def test_missing_file_should_fail(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load(path=str(tmp_path / "nope.yaml"))
