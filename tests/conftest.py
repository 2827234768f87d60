"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
import requests

from playletlink.config import ENV_VARS
from playletlink.logger import get_logger
from playletlink.schema import RawRecord


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep PLAYLET_* variables from the developer's shell out of tests."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    get_logger().reset_metrics()


@pytest.fixture
def sample_csv_text() -> str:
    """Dataset rows as they appear in the real export."""
    return "\n".join([
        "100-灵异（30集）&张三&李四,https://pan.quark.cn/s/a1",
        "32019-MyShow（71集）,https://pan.quark.cn/s/b2",
        "555-别的剧（20集）,https://example.com/not-quark",
        "only-one-column",
        "",
        "\"200-逆袭人生（80集），王五\", https://pan.quark.cn/s/c3 ",
    ]) + "\n"


@pytest.fixture
def sample_dataset(tmp_path, sample_csv_text) -> Path:
    """CSV dataset file with a mix of accepted and discarded rows."""
    path = tmp_path / "短剧.csv"
    path.write_text(sample_csv_text, encoding="utf-8")
    return path


@pytest.fixture
def sample_records() -> List[RawRecord]:
    return [
        RawRecord(label="100-灵异（30集）&张三&李四", link="https://pan.quark.cn/s/a1"),
        RawRecord(label="32019-MyShow（71集）", link="https://pan.quark.cn/s/b2"),
        RawRecord(label="200-逆袭人生（80集），王五", link="https://pan.quark.cn/s/c3"),
    ]


@pytest.fixture
def ranking_payload() -> Dict[str, Any]:
    """Ranking endpoint body with three entries."""
    return {
        "statusCode": 200,
        "content": [
            {"ranking": 1, "playletName": "灵异", "playletId": 9001},
            {"ranking": 2, "playletName": "逆袭人生之王者归来", "playletId": 9002},
            {"ranking": 3, "playletName": "无人知晓", "playletId": 9003},
        ],
    }


def make_response(status_code: int = 200, body: Any = None, text: str = None) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = "https://ranking.test/listHotRanking"
    if text is None:
        text = json.dumps(body if body is not None else {}, ensure_ascii=False)
    resp._content = text.encode("utf-8")
    resp.encoding = "utf-8"
    return resp


@pytest.fixture
def response_factory():
    return make_response
