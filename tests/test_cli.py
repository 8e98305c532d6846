"""Tests for the command-line entry point."""

from __future__ import annotations

import io
import json

from semantic_markdown.__main__ import main


class TestMain:
    def test_file_to_stdout(self, article_path, capsys):
        assert main([str(article_path), "--extract-main-content"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("# How to Parse HTML")
        assert "Related posts" not in out

    def test_stdin_to_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("<h1>Title</h1><p>Body</p>"))
        target = tmp_path / "out.md"
        assert main(["-", "-o", str(target)]) == 0
        assert target.read_text(encoding="utf-8") == "# Title\n\nBody\n"

    def test_metadata_flag(self, article_path, capsys):
        assert main([str(article_path), "--include-metadata", "basic"]) == 0
        assert capsys.readouterr().out.startswith('---\ntitle: "How to Parse HTML - Dev Blog"')

    def test_url_map_written(self, article_path, tmp_path, capsys):
        url_map = tmp_path / "refs.json"
        assert main([str(article_path), "--extract-main-content", "--url-map", str(url_map)]) == 0
        assert "ref1://tree.png" in capsys.readouterr().out
        assert json.loads(url_map.read_text(encoding="utf-8")) == {
            "https://www.crummy.com/software/BeautifulSoup/bs4/doc/": "ref0",
            "https://cdn.example.com/images/2024": "ref1",
        }

    def test_show_url_map(self, article_path, capsys):
        assert main([str(article_path), "--extract-main-content", "--show-url-map"]) == 0
        assert "ref1" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.html")]) == 1
        assert "Could not read" in capsys.readouterr().err

    def test_unknown_parser(self, article_path, capsys):
        assert main([str(article_path), "--parser", "no-such-parser"]) == 1
        assert "no-such-parser" in capsys.readouterr().err
