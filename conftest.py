import json
from pathlib import Path

import pytest

from backend import assets

# start: Text("Hello") then Choices([("go", "p2")]); p2: one text line.
SCENARIO = {
    "version": 1,
    "start": "start",
    "passages": {
        "start": [
            {"type": "text", "text": "Hello"},
            {"type": "choices", "choices": [{"text": "go", "passage": "p2"}]},
        ],
        "p2": [
            {"type": "text", "text": "You went."},
        ],
    },
}


@pytest.fixture
def scenario_bytes() -> bytes:
    return json.dumps(SCENARIO).encode("utf-8")


@pytest.fixture(autouse=True)
def embedded_assets(tmp_path: Path, scenario_bytes: bytes):
    """Point the embedded assets at the scenario story before every test."""
    story_path = tmp_path / "story.json"
    story_path.write_bytes(scenario_bytes)
    assets.init_assets(story_path)
    yield story_path
