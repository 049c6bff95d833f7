import pytest

import overleaf_toolkit.services.prompt as prompt_module
from overleaf_toolkit.services.prompt import ConsoleDecisionSource, DecisionSource, ScriptedDecisionSource


def test_scripted_decisions_replay_answers_in_order():
    decisions = ScriptedDecisionSource([True, False])

    assert decisions.confirm("first?") is True
    assert decisions.confirm("second?") is False
    assert decisions.prompts == [("first?", True), ("second?", False)]


def test_scripted_decisions_fail_when_exhausted():
    decisions = ScriptedDecisionSource([])

    with pytest.raises(IndexError, match="No scripted answer"):
        decisions.confirm("unexpected?")


def test_console_decisions_delegate_to_click(monkeypatch):
    captured = {}

    def fake_confirm(text, default):
        captured["text"] = text
        captured["default"] = default
        return True

    monkeypatch.setattr(prompt_module.click, "confirm", fake_confirm)

    assert ConsoleDecisionSource().confirm("Upgrade image?") is True
    assert "Upgrade image?" in captured["text"]
    assert captured["default"] is None
    assert isinstance(ConsoleDecisionSource(), DecisionSource)
