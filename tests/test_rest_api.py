# -*- coding: utf-8 -*-
"""
Tests for the sitegen REST API
"""

import pytest
from fastapi.testclient import TestClient

from conftest import SAMPLE_ACTIONS, SAMPLE_DOCUMENT
from sitegen.generators.base import BaseGenerator
from sitegen.generators.config import GeneratorConfig
from sitegen.generators.replay_generator import ReplayGenerator
from sitegen.parsing.sse import StreamError
from sitegen.rest_api.app import create_app


class BrokenGenerator(BaseGenerator):
    def __init__(self):
        super().__init__(GeneratorConfig(model_name="broken"))

    def generate_single(self, prompt=None, messages=None, extra_params=None):
        raise NotImplementedError

    def stream(self, prompt=None, messages=None, extra_params=None):
        yield "<boltArtifact title="
        raise StreamError("upstream closed")


@pytest.fixture
def client():
    return TestClient(create_app(generator=ReplayGenerator(SAMPLE_DOCUMENT, {"chunk_size": 11})))


class TestHealth:

    def test_health(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["service"] == "sitegen REST API"


class TestParse:

    def test_parse_document(self, client):
        resp = client.post("/api/v1/parse", json={"document": SAMPLE_DOCUMENT})
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["title"] == "Sunrise Bakery"
        assert [s["kind"] for s in data["steps"]] == [a[0] for a in SAMPLE_ACTIONS]
        assert all(s["status"] == "completed" for s in data["steps"])
        assert data["commands"] == ["npm install", "npm run dev"]
        assert set(data["mount_tree"]) == {"src", "package.json"}

    def test_parse_merges_base_files(self, client):
        resp = client.post("/api/v1/parse", json={
            "document": SAMPLE_DOCUMENT,
            "base_files": [{"path": "src/App.jsx", "content": "old"}, {"path": "README.md", "content": "r"}],
        })
        paths = [f["path"] for f in resp.json()["files"]]
        assert "src/App.jsx" not in paths
        assert paths[0] == "README.md"

    def test_parse_conflict(self, client):
        resp = client.post("/api/v1/parse", json={
            "document": '<boltArtifact title="T"><boltAction type="file" filePath="src">x</boltAction>',
            "base_files": [{"path": "src/App.tsx", "content": ""}],
        })
        assert resp.status_code == 422
        assert "src" in resp.json()["detail"]


class TestMerge:

    def test_merge(self, client):
        resp = client.post("/api/v1/merge", json={
            "base_files": [{"path": "vite.config.ts", "content": "a"}],
            "new_files": [{"path": "vite.config.js", "content": "b"}],
        })
        assert resp.status_code == 200
        assert resp.json()["files"] == [{"path": "vite.config.js", "content": "b"}]


class TestBuild:

    def test_build_with_default_generator(self, client):
        resp = client.post("/api/v1/build", json={"prompt": "A bakery site"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["title"] == "Sunrise Bakery"
        assert len(data["files"]) == 3

    def test_build_requires_prompt_or_messages(self, client):
        assert client.post("/api/v1/build", json={}).status_code == 400
        resp = client.post("/api/v1/build", json={
            "prompt": "x",
            "messages": [{"role": "user", "content": "y"}],
        })
        assert resp.status_code == 400

    def test_build_stream_error(self):
        client = TestClient(create_app(generator=BrokenGenerator()))
        resp = client.post("/api/v1/build", json={"prompt": "x"})
        assert resp.status_code == 502
        assert resp.json()["detail"] == "upstream closed"
