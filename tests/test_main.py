import json

from app import main
from core.command_service import CommandService


def test_render_command_outputs_json() -> None:
    rendered = json.loads(main.render_command(CommandService(), "delete all inactive users"))
    assert rendered["command"]["intent"]["primary"] == "management"
    assert rendered["outcome"] == "success"
    assert rendered["insights"] == ["High-risk operations detected. Additional validation recommended."]


def test_build_service_reads_config(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path))
    monkeypatch.setenv("CONFIDENCE_SUCCESS_THRESHOLD", "0.4")
    service = main.build_service()
    assert service.success_threshold == 0.4

    service.compile("hello", session_token="cli")

    row = json.loads((tmp_path / "compiles.jsonl").read_text(encoding="utf-8").strip())
    assert row["session_id"] == "cli"
    assert row["outcome"] == "success"


def test_cli_loop_exits_on_quit(monkeypatch, capsys) -> None:
    replies = iter(["", "hello", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))
    monkeypatch.setenv("COMPILE_LOG_ENABLED", "false")
    main.main()
    output = capsys.readouterr().out
    assert '"originalInput": "hello"' in output
    assert "Goodbye!" in output
