# -*- coding: utf-8 -*-
"""
Tests for the sitegen command line entry points
"""

import json

from conftest import SAMPLE_DOCUMENT
from sitegen.cli import cli_build, cli_merge, load_files


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestMerge:

    def test_merge_json_lists(self, tmp_path):
        base = write_json(tmp_path / "base.json", [
            {"path": "index.html", "content": "<html/>"},
            {"path": "src/App.jsx", "content": "old"},
        ])
        incoming = write_json(tmp_path / "new.json", {"files": [{"path": "src/App.tsx", "content": "new"}]})
        out = tmp_path / "merged.json"

        cli_merge([base, incoming, "-o", str(out)])

        merged = json.loads(out.read_text(encoding="utf-8"))
        assert [f["path"] for f in merged] == ["index.html", "src/App.tsx"]

    def test_merge_to_stdout(self, tmp_path, capsys):
        base = write_json(tmp_path / "base.json", [])
        incoming = write_json(tmp_path / "new.json", [{"path": "a.ts", "content": "a"}])
        cli_merge([base, incoming])
        assert json.loads(capsys.readouterr().out) == [{"path": "a.ts", "content": "a"}]


class TestBuild:

    def test_replay(self, tmp_path):
        response = tmp_path / "response.txt"
        response.write_text(SAMPLE_DOCUMENT, encoding="utf-8")
        out_dir = tmp_path / "site"
        files_json = tmp_path / "files.json"

        cli_build([
            "--replay", str(response),
            "--out-dir", str(out_dir),
            "--chunk-size", "9",
            "--files-json", str(files_json),
            "--no-verbose",
        ])

        assert (out_dir / "package.json").exists()
        assert "Sunrise" in (out_dir / "src" / "App.tsx").read_text(encoding="utf-8")
        assert len(json.loads(files_json.read_text(encoding="utf-8"))) == 3

    def test_sse_capture(self, tmp_path):
        capture = tmp_path / "capture.txt"
        lines = ['data: {"type": "message_start"}']
        for i in range(0, len(SAMPLE_DOCUMENT), 13):
            lines.append("data: " + json.dumps({"type": "text_block", "delta": SAMPLE_DOCUMENT[i:i + 13]}))
        lines.append('data: {"type": "done"}')
        capture.write_text("\n\n".join(lines) + "\n", encoding="utf-8")
        out_dir = tmp_path / "site"

        cli_build(["--sse", str(capture), "--out-dir", str(out_dir), "--no-verbose"])

        assert (out_dir / "src" / "components" / "Hero.tsx").exists()

    def test_base_directory_variants_removed(self, tmp_path, capsys):
        out_dir = tmp_path / "site"
        (out_dir / "src").mkdir(parents=True)
        (out_dir / "src" / "App.jsx").write_text("old", encoding="utf-8")
        (out_dir / "node_modules").mkdir()
        (out_dir / "node_modules" / "dep.js").write_text("", encoding="utf-8")
        response = tmp_path / "response.txt"
        response.write_text(SAMPLE_DOCUMENT, encoding="utf-8")

        cli_build(["--replay", str(response), "--base", str(out_dir), "--out-dir", str(out_dir)])

        assert not (out_dir / "src" / "App.jsx").exists()
        assert (out_dir / "src" / "App.tsx").exists()
        assert "Sunrise Bakery" in capsys.readouterr().out

    def test_load_files_skips_dependency_dirs(self, tmp_path):
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "x.js").write_text("", encoding="utf-8")
        (tmp_path / "index.html").write_text("<html/>", encoding="utf-8")
        assert [f.path for f in load_files(tmp_path)] == ["index.html"]
