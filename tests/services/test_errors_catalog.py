import pytest

from overleaf_toolkit.errors_catalog import actionable_error


def test_actionable_error_formats_message_with_suggested_action():
    message = actionable_error("invalid_version", version="abc", path="config/version")

    assert "Invalid version 'abc' in config/version." in message
    assert "Suggested action:" in message


def test_actionable_error_rejects_unknown_code():
    with pytest.raises(KeyError):
        actionable_error("does_not_exist")
