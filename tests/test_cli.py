import pytest

from texttune import cli
from texttune.client.form import FormController


def test_parser_accepts_transform_options():
    args = cli.build_parser().parse_args(
        ["generate", "a thank-you note", "--max-words", "80", "--min-words", "20", "--tone", "friendly"]
    )

    assert args.command == "generate"
    assert args.input == "a thank-you note"
    assert (args.max_words, args.min_words, args.tone) == ("80", "20", "friendly")


def test_parser_rejects_unknown_tone():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["rewrite", "hello", "--tone", "pirate"])


def test_main_prints_result(monkeypatch, capsys):
    async def fake_submit(self):
        self.state.result = f"{self.mode.name}:{self.state.input_text}:{self.tone.value}"
        return self.state.result

    monkeypatch.setattr(FormController, "submit", fake_submit)

    assert cli.main(["rewrite", "i goed", "--tone", "casual"]) == 0
    assert capsys.readouterr().out.strip() == "REWRITE:i goed:casual"


def test_main_reports_controller_error(monkeypatch, capsys):
    async def fake_submit(self):
        self.error = "Max word limit cannot be less than min word limit."
        return None

    monkeypatch.setattr(FormController, "submit", fake_submit)

    assert cli.main(["rewrite", "hello", "--max-words", "1", "--min-words", "9"]) == 1
    assert "Max word limit cannot be less than min word limit." in capsys.readouterr().err


def test_main_reports_missing_input_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["rewrite", "--input-file", str(tmp_path / "missing.txt")])

    assert exc.value.code == 2
    assert "missing.txt" in capsys.readouterr().err
