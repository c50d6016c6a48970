"""Tests for storyline.session - lifecycle, advance, queries, save/resume."""

import json

import pytest

from storyline import InitError, SessionController, SessionError, UninitializedError
from storyline.engine import EngineError, EngineInitError
from storyline.loader import CorruptAssetError, VersionMismatchError
from storyline.models import ChoicesLine, InvalidChoiceLine, TextLine


@pytest.fixture
def controller(scenario_bytes: bytes) -> SessionController:
    c = SessionController()
    c.init(scenario_bytes)
    return c


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

class TestInit:
    def test_current_is_none_after_init(self, controller: SessionController) -> None:
        assert controller.initialized
        assert controller.current() is None
        assert controller.tag() == "None"

    def test_corrupt_story(self, scenario_bytes: bytes) -> None:
        c = SessionController()
        with pytest.raises(InitError) as exc:
            c.init(scenario_bytes[:-10])
        assert isinstance(exc.value.reason, CorruptAssetError)
        assert isinstance(exc.value.__cause__, CorruptAssetError)
        assert not c.initialized

    def test_version_mismatch(self) -> None:
        c = SessionController()
        story = json.dumps({"version": 9, "start": "s", "passages": {"s": []}}).encode()
        with pytest.raises(InitError) as exc:
            c.init(story)
        assert isinstance(exc.value.reason, VersionMismatchError)

    def test_engine_init_failure(self, scenario_bytes: bytes) -> None:
        bookmark = json.dumps({"version": 1, "passage": "nowhere"}).encode()
        with pytest.raises(InitError) as exc:
            SessionController().init(scenario_bytes, bookmark)
        assert isinstance(exc.value.reason, EngineInitError)

    @pytest.mark.parametrize("bookmark", [
        {"version": 1, "passage": "start", "position": 0, "awaiting_choice": True},
        {"version": 1, "passage": "start", "position": 99},
    ])
    def test_bookmark_outside_story(self, scenario_bytes: bytes, bookmark: dict) -> None:
        c = SessionController()
        with pytest.raises(InitError) as exc:
            c.init(scenario_bytes, json.dumps(bookmark).encode())
        assert isinstance(exc.value.reason, EngineInitError)
        assert not c.initialized

    def test_reinit_resets(self, controller: SessionController, scenario_bytes: bytes) -> None:
        controller.advance("")
        controller.advance("")
        controller.init(scenario_bytes)
        assert controller.current() is None
        assert controller.advance("") == TextLine(text="Hello")

    def test_failed_reinit_keeps_prior_session(self, controller: SessionController) -> None:
        controller.advance("")
        with pytest.raises(InitError):
            controller.init(b"garbage")
        assert controller.current() == TextLine(text="Hello")

    def test_reset(self, controller: SessionController) -> None:
        controller.reset()
        assert not controller.initialized
        with pytest.raises(UninitializedError):
            controller.current()

    def test_custom_engine_factory(self, scenario_bytes: bytes) -> None:
        class Fixed:
            def __init__(self, bookmark, story) -> None:
                pass

            def advance(self, input: str):
                return TextLine(text=f"echo {input}")

        c = SessionController(engine_factory=Fixed)
        c.init(scenario_bytes)
        assert c.advance("hi") == TextLine(text="echo hi")


class TestUninitialized:
    @pytest.mark.parametrize("call", [
        lambda c: c.advance("x"),
        lambda c: c.current(),
        lambda c: c.tag(),
        lambda c: c.tagged(),
        lambda c: c.autocomplete("g"),
        lambda c: c.is_choice("go"),
        lambda c: c.choices(),
        lambda c: c.save(),
    ])
    def test_operations_raise(self, call) -> None:
        with pytest.raises(UninitializedError):
            call(SessionController())

    def test_is_session_error(self) -> None:
        assert issubclass(UninitializedError, SessionError)


# ---------------------------------------------------------------------------
# Advance + queries
# ---------------------------------------------------------------------------

class TestScenario:
    def test_end_to_end(self, controller: SessionController) -> None:
        assert controller.advance("") == TextLine(text="Hello")
        assert controller.tag() == "Text"

        line = controller.advance("")
        assert isinstance(line, ChoicesLine)
        assert controller.tag() == "Choices"
        assert controller.choices() == ["go"]

        assert controller.advance("wrong") == InvalidChoiceLine()
        assert controller.tag() == "InvalidChoice"

        assert controller.advance("go") == TextLine(text="You went.")
        assert controller.tag() == "Text"

        assert controller.advance("") is None
        assert controller.tag() == "None"

    def test_end_stays_advanceable(self, controller: SessionController) -> None:
        for _ in range(4):
            controller.advance("")
        controller.advance("go")
        assert controller.advance("") is None
        assert controller.advance("") is None

    def test_queries_are_idempotent(self, controller: SessionController) -> None:
        controller.advance("")
        controller.advance("")
        first = (controller.current(), controller.tag(), controller.autocomplete("g"),
                 controller.is_choice("go"))
        for _ in range(3):
            again = (controller.current(), controller.tag(), controller.autocomplete("g"),
                     controller.is_choice("go"))
            assert again == first
        assert first[2] == "o"
        assert first[3] is True

    def test_queries_on_non_choice_line(self, controller: SessionController) -> None:
        controller.advance("")
        assert controller.autocomplete("g") == ""
        assert controller.is_choice("go") is False

    def test_tagged(self, controller: SessionController) -> None:
        controller.advance("")
        tagged = controller.tagged()
        assert tagged.tag == "Text"
        assert tagged.line == TextLine(text="Hello")

    def test_engine_error_keeps_current_line(self, scenario_bytes: bytes) -> None:
        class Broken:
            def __init__(self, bookmark, story) -> None:
                self.calls = 0

            def advance(self, input: str):
                self.calls += 1
                if self.calls > 1:
                    raise EngineError("boom")
                return TextLine(text="first")

        c = SessionController(engine_factory=Broken)
        c.init(scenario_bytes)
        c.advance("")
        with pytest.raises(EngineError):
            c.advance("")
        assert c.current() == TextLine(text="first")


class TestSaveResume:
    def test_resume_at_choice(self, controller: SessionController, scenario_bytes: bytes) -> None:
        controller.advance("")
        controller.advance("")
        blob = controller.save()

        resumed = SessionController()
        resumed.init(scenario_bytes, blob)
        assert resumed.current() is None
        assert resumed.advance("go") == TextLine(text="You went.")

    def test_save_reflects_position(self, controller: SessionController) -> None:
        controller.advance("")
        saved = json.loads(controller.save())
        assert saved["passage"] == "start"
        assert saved["position"] == 1
        assert saved["awaiting_choice"] is False


class TestStoryIsolation:
    def test_mutating_returned_line_leaves_story(self, controller: SessionController) -> None:
        controller.advance("")
        line = controller.advance("")
        with pytest.raises(AttributeError):
            line.choices.append(line.choices[0])
        assert controller.choices() == ["go"]
        assert controller.advance("go") == TextLine(text="You went.")
