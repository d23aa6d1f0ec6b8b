# -*- coding: utf-8 -*-
"""
Unit Tests for BuildWorkflow and LocalWorkspace
"""

import pytest

from conftest import SAMPLE_ACTIONS, SAMPLE_DOCUMENT, as_actions
from sitegen.core.node import PathConflictError
from sitegen.generators.base import BaseGenerator
from sitegen.generators.config import GeneratorConfig
from sitegen.generators.replay_generator import ReplayGenerator
from sitegen.parsing.sse import StreamError
from sitegen.schemas.step_schemas import StepStatus
from sitegen.workflows.build_workflow import BuildWorkflow
from sitegen.workspaces.local_workspace import LocalWorkspace

CONVERSION_DOCUMENT = """<boltArtifact id="app" title="Typed">
<boltAction type="file" filePath="src/App.tsx">export default () => null;</boltAction>
<boltAction type="file" filePath="vite.config.ts">export default {};</boltAction>
</boltArtifact>"""

TEMPLATE_FILES = [
    {"path": "index.html", "content": "<html/>"},
    {"path": "src/App.jsx", "content": "old app"},
    {"path": "vite.config.js", "content": "old config"},
]


class FailingGenerator(BaseGenerator):
    """Streams the given chunks, then fails"""

    def __init__(self, chunks):
        super().__init__(GeneratorConfig(model_name="failing"))
        self.chunks = chunks

    def generate_single(self, prompt=None, messages=None, extra_params=None):
        raise NotImplementedError

    def stream(self, prompt=None, messages=None, extra_params=None):
        yield from self.chunks
        raise StreamError("connection reset")


class TestTurn:
    """One model turn through the session"""

    def test_replay_turn(self):
        seen = []
        workflow = BuildWorkflow(
            generator=ReplayGenerator(SAMPLE_DOCUMENT, {"chunk_size": 7}),
            on_steps=seen.extend,
        )
        result = workflow.run(prompt="bakery")

        assert result.title == "Sunrise Bakery"
        assert as_actions(result.steps) == SAMPLE_ACTIONS
        assert all(s.status == StepStatus.COMPLETED for s in result.steps)
        assert as_actions(seen) == SAMPLE_ACTIONS
        assert all(s.status == StepStatus.PENDING for s in seen)
        assert result.commands == ["npm install", "npm run dev"]
        assert result.response_text == SAMPLE_DOCUMENT
        assert [f.path for f in result.files] == [
            "package.json",
            "src/App.tsx",
            "src/components/Hero.tsx",
        ]

    def test_tree_grows_while_streaming(self):
        workflow = BuildWorkflow()
        workflow.start_turn()
        cut = SAMPLE_DOCUMENT.index("npm install")

        workflow.feed(SAMPLE_DOCUMENT[:cut])
        assert [f.path for f in workflow.tree.flatten()] == ["src/App.tsx", "package.json"]

        workflow.feed(SAMPLE_DOCUMENT[cut:])
        assert workflow.tree.get_node("src/components/Hero.tsx") is not None

    def test_default_title(self):
        result = BuildWorkflow().run_chunks(["Nothing to build today."])
        assert result.title == "Project Files"
        assert result.files == []

    def test_run_without_generator(self):
        with pytest.raises(ValueError):
            BuildWorkflow().run(prompt="x")

    def test_stream_failure_keeps_applied_steps(self):
        cut = SAMPLE_DOCUMENT.index("npm install")
        workflow = BuildWorkflow(generator=FailingGenerator([SAMPLE_DOCUMENT[:cut]]))

        with pytest.raises(StreamError):
            workflow.run(prompt="bakery")

        assert workflow.tree.get_node("package.json") is not None
        assert workflow.tree.get_node("src/App.tsx") is not None
        assert len(workflow.steps) == 3

    def test_conflict_propagates(self):
        doc = '<boltArtifact title="T"><boltAction type="file" filePath="src">x</boltAction>'
        workflow = BuildWorkflow(base_files=[{"path": "src/App.tsx", "content": ""}])
        with pytest.raises(PathConflictError):
            workflow.run_chunks([doc])
        assert workflow.tree.get_node("src/App.tsx") is not None


class TestMultiTurn:
    """Reconciling generated files with the existing project"""

    def test_variants_replaced(self):
        workflow = BuildWorkflow(base_files=TEMPLATE_FILES)
        result = workflow.run_chunks([CONVERSION_DOCUMENT])

        assert result.removed == ["src/App.jsx", "vite.config.js"]
        assert [f.path for f in result.files] == ["index.html", "src/App.tsx", "vite.config.ts"]
        assert workflow.tree.get_node("src/App.jsx") is None

    def test_second_turn_builds_on_first(self):
        workflow = BuildWorkflow(base_files=TEMPLATE_FILES)
        workflow.run_chunks([CONVERSION_DOCUMENT])
        result = workflow.run_chunks([
            '<boltArtifact title="More"><boltAction type="file" filePath="src/Nav.tsx">nav</boltAction></boltArtifact>'
        ])

        assert result.removed == []
        assert result.title == "More"
        assert [f.path for f in result.files] == ["index.html", "src/App.tsx", "vite.config.ts", "src/Nav.tsx"]
        assert [s.id for s in result.steps] == [1, 2]

    def test_base_paths_are_normalized(self):
        workflow = BuildWorkflow(base_files=[{"path": "/src/App.jsx", "content": ""}, {"path": "/", "content": ""}])
        assert [f.path for f in workflow.base_files] == ["src/App.jsx"]


class TestWorkspace:
    """Mounting into a local directory"""

    def test_mount_and_remove(self, tmp_path):
        workflow = BuildWorkflow(workspace=LocalWorkspace(tmp_path), base_files=TEMPLATE_FILES)
        workflow.mount()
        assert (tmp_path / "src" / "App.jsx").read_text(encoding="utf-8") == "old app"

        workflow.run_chunks([CONVERSION_DOCUMENT])
        mount_tree = workflow.mount()

        assert not (tmp_path / "src" / "App.jsx").exists()
        assert not (tmp_path / "vite.config.js").exists()
        assert (tmp_path / "src" / "App.tsx").read_text(encoding="utf-8") == "export default () => null;"
        assert "vite.config.ts" in mount_tree

    def test_run_commands_stops_on_failure(self, tmp_path):
        doc = (
            '<boltArtifact title="T">'
            '<boltAction type="shell">echo hello</boltAction>'
            '<boltAction type="shell">exit 3</boltAction>'
            '<boltAction type="shell">echo never</boltAction>'
            '</boltArtifact>'
        )
        workflow = BuildWorkflow(workspace=LocalWorkspace(tmp_path))
        workflow.run_chunks([doc])
        results = workflow.run_commands()

        assert [r[0] for r in results] == ["echo hello", "exit 3"]
        assert results[0][1:] == ("hello\n", "0")
        assert results[1][2] == "Error: Exit code 3"

    def test_workspace_rejects_escaping_paths(self, tmp_path):
        workspace = LocalWorkspace(tmp_path / "site")
        with pytest.raises(ValueError):
            workspace.mount({"..": {"directory": {"evil.txt": {"file": {"contents": ""}}}}})

    def test_mount_requires_workspace(self):
        with pytest.raises(ValueError):
            BuildWorkflow().mount()
