from __future__ import annotations

import json
from pathlib import Path

from rssriver.cli import main


def test_mapping_command(capsys):
    assert main(["mapping", "article", "--dialect", "modern"]) == 0
    mapping = json.loads(capsys.readouterr().out)
    assert mapping["article"]["properties"]["location"] == {"type": "geo_point"}


def test_convert_command(tmp_path: Path, sample_rss: str, capsys):
    feed = tmp_path / "feed.xml"
    feed.write_text(sample_rss, encoding="utf-8")
    assert main(["convert", str(feed), "--feedname", "news", "--river", "feeds-main"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    documents = [json.loads(line) for line in lines]
    assert [d["title"] for d in documents] == ["Breaking News", "Short note"]
    assert all(d["river"] == "feeds-main" for d in documents)


def test_convert_reports_parse_failure(tmp_path: Path, capsys):
    feed = tmp_path / "broken.xml"
    feed.write_bytes(b"<<<>>> definitely not a feed")
    assert main(["convert", str(feed), "--feedname", "news"]) == 1
    assert "Conversion failed" in capsys.readouterr().err
