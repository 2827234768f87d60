"""
Tests for run configuration layering.
"""

from pathlib import Path

import pytest

from playletlink.config import DEFAULT_BASE_URL, RunConfig
from playletlink.errors import ConfigError


class TestRunConfig:

    def test_defaults(self):
        config = RunConfig.from_env(environ={})

        assert config.base_url == DEFAULT_BASE_URL
        assert config.page_id == 1
        assert config.page_size == 30
        assert config.month == "2025-01"
        assert config.dataset_path == Path("短剧.csv")
        assert config.output_path == Path("matching_results.json")

    def test_query_params(self):
        config = RunConfig(page_id=3, page_size=10, month="2024-12")
        assert config.query_params() == {"pageId": 3, "pageSize": 10, "month": "2024-12"}

    def test_environment_values(self):
        environ = {
            "PLAYLET_RANKING_URL": "https://ranking.test/list",
            "PLAYLET_PAGE_ID": "2",
            "PLAYLET_PAGE_SIZE": " 50 ",
            "PLAYLET_MONTH": "2025-02",
            "PLAYLET_DATASET": "data/dramas.csv",
            "PLAYLET_OUTPUT": "out/report.json",
        }
        config = RunConfig.from_env(environ=environ)

        assert config.base_url == "https://ranking.test/list"
        assert config.page_id == 2
        assert config.page_size == 50
        assert config.month == "2025-02"
        assert config.dataset_path == Path("data/dramas.csv")
        assert config.output_path == Path("out/report.json")

    def test_overrides_beat_environment(self):
        config = RunConfig.from_env({"page_size": 5, "month": None}, environ={"PLAYLET_PAGE_SIZE": "50", "PLAYLET_MONTH": "2025-02"})

        assert config.page_size == 5
        assert config.month == "2025-02"  # None means "not given"

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("PLAYLET_MONTH", "2023-07")
        assert RunConfig.from_env().month == "2023-07"

    def test_blank_environment_value_ignored(self):
        assert RunConfig.from_env(environ={"PLAYLET_PAGE_ID": "  "}).page_id == 1

    def test_non_integer_rejected(self):
        with pytest.raises(ConfigError, match="page_id"):
            RunConfig.from_env(environ={"PLAYLET_PAGE_ID": "first"})

    def test_non_numeric_timeout_rejected(self):
        with pytest.raises(ConfigError, match="timeout"):
            RunConfig.from_env({"timeout": "soon"}, environ={})

    def test_unknown_override_rejected(self):
        with pytest.raises(ConfigError, match="colour"):
            RunConfig.from_env({"colour": "red"}, environ={})
