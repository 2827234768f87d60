"""
Tests for .env loading.
"""

import os

from playletlink.env import load_env


class TestLoadEnv:

    def test_missing_file(self, tmp_path):
        assert load_env(tmp_path / ".env") is False

    def test_loads_values(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("# ranking settings\nPLAYLET_MONTH=2025-04\nPLAYLET_PAGE_SIZE=10\n", encoding="utf-8")

        assert load_env(env_file) is True
        assert os.environ["PLAYLET_MONTH"] == "2025-04"
        assert os.environ["PLAYLET_PAGE_SIZE"] == "10"

    def test_existing_variables_win(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PLAYLET_MONTH", "2024-01")
        env_file = tmp_path / ".env"
        env_file.write_text("PLAYLET_MONTH=2025-04\n", encoding="utf-8")

        load_env(env_file)

        assert os.environ["PLAYLET_MONTH"] == "2024-01"

    def test_defaults_to_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("PLAYLET_DATASET=local.csv\n", encoding="utf-8")

        assert load_env() is True
        assert os.environ["PLAYLET_DATASET"] == "local.csv"
