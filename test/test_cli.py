"""
test/test_cli.py
Command line entry point (batch mode, output captured by capsys)
"""
import pytest

from schematalk.main import EXIT_ERROR, EXIT_INTERRUPTED, EXIT_OK, build_parser, describe_error, main


def indicators(text: str) -> list:
    return [line for line in text.splitlines() if line.startswith("[Slide ")]


BATCH = ["--batch", "--no-clear"]


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["ski"])
        assert args.batch is False
        assert args.stages in ("all", "final")
        assert args.usa is False

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_OK
        assert "usage: schematalk" in capsys.readouterr().out

    def test_unknown_stage_expansion(self):
        with pytest.raises(SystemExit):
            main(["ski", "--stages", "some"])


class TestCommands:
    def test_ski(self, capsys):
        assert main(["ski", *BATCH, "--stages", "final"]) == EXIT_OK
        out = capsys.readouterr().out
        assert len(indicators(out)) == 13
        assert "Metadata with AI" in out

    def test_ski_invalid_number_is_ignored(self, capsys, caplog):
        assert main(["ski", *BATCH, "--temperature", "warm"]) == EXIT_OK
        # default MCP reading kept
        assert "temperature=30 °F" in capsys.readouterr().out
        assert "Ignoring --temperature='warm'" in caplog.text

    def test_ski_usa_overrides(self, capsys):
        assert main(["ski", *BATCH, "--usa", "--visibility", "poor"]) == EXIT_OK
        out = capsys.readouterr().out
        assert '"decision": "no"' in out
        assert "°F" in out

    def test_shipping(self, capsys):
        assert main(["shipping", *BATCH]) == EXIT_OK
        assert "bad=55.0 vs good=74.33" in capsys.readouterr().out

    def test_compare_medicine(self, capsys):
        assert main(["compare", *BATCH, "--domain", "medicine", "--stages", "final"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "Schema quality ladder (medicine)" in out
        assert len(indicators(out)) == 6

    def test_registry(self, capsys):
        assert main(["registry", *BATCH, "--stages", "final"]) == EXIT_OK
        out = capsys.readouterr().out
        assert len(indicators(out)) == 6
        assert "Codec - ISO string <-> datetime" in out

    def test_bundled_deck(self, capsys):
        assert main(["deck", "why_metadata", *BATCH, "--stages", "final"]) == EXIT_OK
        out = capsys.readouterr().out
        assert len(indicators(out)) == 9
        assert "Why metadata" in out

    def test_list_decks(self, capsys):
        assert main(["decks"]) == EXIT_OK
        assert "why_metadata" in capsys.readouterr().out.split()

    def test_list_empty_directory(self, tmp_path, capsys):
        assert main(["decks", "--decks-path", str(tmp_path)]) == EXIT_OK
        assert "No decks found" in capsys.readouterr().out


class TestErrors:
    def test_missing_deck(self, tmp_path, capsys):
        assert main(["deck", "nope", *BATCH, "--decks-path", str(tmp_path)]) == EXIT_ERROR
        captured = capsys.readouterr()
        assert captured.err.startswith("schematalk: error:")
        assert "Traceback" not in captured.err

    def test_deck_without_slides(self, tmp_path, capsys):
        (tmp_path / "empty.yaml").write_text("deck_id: empty\noptions: {}\nslides: []\n", encoding="utf-8")
        assert main(["deck", "empty", *BATCH, "--decks-path", str(tmp_path)]) == EXIT_ERROR
        assert "schematalk: error:" in capsys.readouterr().err

    def test_interrupt(self, monkeypatch):
        def interrupted(args):
            raise KeyboardInterrupt

        monkeypatch.setattr("schematalk.main.cmd_decks", interrupted)
        assert main(["decks"]) == EXIT_INTERRUPTED

    def test_unexpected_error_is_one_line(self, monkeypatch, capsys):
        def broken(args):
            raise RuntimeError("stage renderer failed\nat line 2")

        monkeypatch.setattr("schematalk.main.cmd_decks", broken)
        assert main(["decks"]) == EXIT_ERROR
        err = capsys.readouterr().err
        assert "schematalk: error: RuntimeError: stage renderer failed" in err
        assert "at line 2" not in err
        assert "Traceback" not in err

    def test_renderer_failure_in_deck(self, monkeypatch, capsys):
        from schematalk.presenter import Presenter

        async def failing_run(self):
            raise ZeroDivisionError("division by zero")

        monkeypatch.setattr(Presenter, "run", failing_run)
        assert main(["compare", *BATCH]) == EXIT_ERROR
        captured = capsys.readouterr()
        assert "schematalk: error: ZeroDivisionError: division by zero" in captured.err
        assert "Traceback" not in captured.err

    def test_describe_validation_error(self):
        from pydantic import ValidationError

        from schematalk.schemas.shipping import Weight

        with pytest.raises(ValidationError) as info:
            Weight(value=-1, unit="kg")
        assert describe_error(info.value).startswith("value: ")

    def test_describe_plain_error(self):
        assert describe_error(ValueError("first\nsecond")) == "first"
        assert describe_error(RuntimeError()) == "RuntimeError"
