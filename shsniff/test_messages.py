from shsniff.messages import error, warning


def test_multiline_messages_are_indented(capsys, monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    error("first\nsecond")
    assert capsys.readouterr().out == "[✗] first\n    second\n"


def test_arguments_are_joined_by_lines(capsys, monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    warning("a", 1)
    assert capsys.readouterr().out == "[?] a\n    1\n"
