# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_crawler.config import (
    DEFAULT_MAX_DEPTH,
    MAX_HOST_VISITS,
    REQUEST_TIMEOUT,
    USER_AGENTS,
    CrawlerConfig,
    load_config,
)
from site_crawler.errors import InvalidURLError


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("seeds: [http://example.com]\nmax_depth: 2", ".yaml", None),
        (json.dumps({"seeds": ["http://example.com"], "max_depth": 2}), ".json", None),
        ("{}", ".yaml", ValidationError),
        ("seeds: [unclosed", ".yaml", ValueError),
        ("- a\n- b", ".yml", TypeError),
        ("[1, 2]", ".json", TypeError),
        ("{not json", ".json", ValueError),
        ("seeds = []", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.seed_urls == ["http://example.com/"]
        assert cfg.max_depth == 2


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None, seeds=["https://example.test"])
    assert cfg.max_depth == DEFAULT_MAX_DEPTH
    assert cfg.max_host_visits == MAX_HOST_VISITS
    assert cfg.timeout == REQUEST_TIMEOUT
    assert cfg.resource_dir == Path("archive/res")
    assert cfg.user_agent in USER_AGENTS


def test_default_file_is_used_when_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "seeds: [https://example.test]\nmax_host_visits: 7", encoding="utf-8"
    )
    cfg = load_config(None)
    assert cfg.max_host_visits == 7


def test_overrides_win_and_none_is_ignored(tmp_path):
    cfg_path = write_file(
        tmp_path, "seeds: [https://from-file.test]\nmax_depth: 3\ntimeout: 5", ".yaml"
    )
    cfg = load_config(cfg_path, seeds=["https://from-cli.test/a"], max_depth=None, timeout=1.5)
    assert cfg.seed_urls == ["https://from-cli.test/a"]
    assert cfg.max_depth == 3
    assert cfg.timeout == 1.5


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize("bad", ["not_a_url", "another.invalid/url", "ftp://example.test/"])
def test_invalid_seed_is_reported_as_invalid_url(bad):
    with pytest.raises(InvalidURLError) as info:
        load_config(None, seeds=["https://good.test", bad])
    assert str(info.value) == f"Invalid URL: {bad}"
    assert info.value.url == bad


def test_seeds_required(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValidationError):
        load_config(None, seeds=[])


@pytest.mark.parametrize(
    "field,value",
    [("max_host_visits", 0), ("max_depth", -1), ("timeout", 0), ("unknown", 1)],
)
def test_field_validation(field, value):
    with pytest.raises(ValidationError):
        CrawlerConfig(seeds=["https://example.test"], **{field: value})


def test_seed_urls_are_deduplicated():
    cfg = CrawlerConfig(seeds=["https://a.test", "https://a.test/", "https://b.test/x"])
    assert cfg.seed_urls == ["https://a.test/", "https://b.test/x"]


def test_config_is_frozen():
    cfg = CrawlerConfig(seeds=["https://a.test"])
    with pytest.raises(ValidationError):
        cfg.max_depth = 1


def test_long_seed_is_accepted():
    seed = "https://example.test/" + "a" * 3000
    cfg = CrawlerConfig(seeds=[seed])
    assert cfg.seed_urls == [seed]
    assert len(cfg.seed_urls[0]) > 2083
