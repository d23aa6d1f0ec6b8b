# -*- coding: utf-8 -*-
"""
Shared test configuration: makes `src` importable and provides a sample
model response written in the artifact protocol.
"""

import os
import sys

import pytest

_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


SAMPLE_DOCUMENT = """Sure! Here is your bakery site.

<boltArtifact id="bakery" title="Sunrise Bakery">
<boltAction type="file" filePath="package.json">
{"name": "bakery", "scripts": {"dev": "vite"}}
</boltAction>
<boltAction type="file" filePath="src/App.tsx">
export default function App() {
  return <h1 className="title">Sunrise</h1>;
}
</boltAction>
<boltAction type="shell">
npm install
</boltAction>
<boltAction type="file" filePath="src/components/Hero.tsx">
export const Hero = () => <img title="oven" alt="a > b" />;
</boltAction>
<boltAction type="shell">
npm run dev
</boltAction>
</boltArtifact>

Run it and enjoy!"""

# (kind, path, content, title) of every step in SAMPLE_DOCUMENT, in order
SAMPLE_ACTIONS = [
    ("set_title", None, None, "Sunrise Bakery"),
    ("create_file", "package.json", '{"name": "bakery", "scripts": {"dev": "vite"}}', None),
    (
        "create_file",
        "src/App.tsx",
        'export default function App() {\n  return <h1 className="title">Sunrise</h1>;\n}',
        None,
    ),
    ("run_command", None, "npm install", None),
    ("create_file", "src/components/Hero.tsx", 'export const Hero = () => <img title="oven" alt="a > b" />;', None),
    ("run_command", None, "npm run dev", None),
]


def as_actions(steps):
    """Id-independent view of steps for comparisons"""
    return [(s.kind.value, s.path, s.content, s.title) for s in steps]


@pytest.fixture
def sample_document() -> str:
    return SAMPLE_DOCUMENT
