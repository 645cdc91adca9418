from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from lotlister.cli import EXIT_FATAL, EXIT_SUCCESS, main as cli_main

"""Exit code and console output contract for the CLI."""


def _args(temp_workdir: Path, *extra: str) -> list[str]:
    return [
        "--input", str(temp_workdir / "input"),
        "--photos", str(temp_workdir / "photos"),
        "--output", str(temp_workdir / "out"),
        *extra,
    ]


def test_exit_code_success(temp_workdir: Path, write_inventory, write_template, capsys):
    code = cli_main(_args(temp_workdir))
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS == 0
    assert "SUMMARY rows=4 created=3 skipped=1 photos=0 collisions=0 elapsed_sec=" in out
    assert "WARN row 3 skipped: missing LotNo" in out
    assert "INFO Created 3 listings" in out


def test_exit_code_missing_input(temp_workdir: Path, capsys):
    code = cli_main(["--input", str(temp_workdir / "missing")])
    out = capsys.readouterr().out
    assert code == EXIT_FATAL == 1
    assert "ERROR input: input directory not found:" in out


def test_exit_code_missing_data_file(temp_workdir: Path, write_template, capsys):
    code = cli_main(_args(temp_workdir))
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR data: data file not found:" in out
    assert (temp_workdir / "input" / "inventory_example.csv").exists()


def test_exit_code_empty_data_file(temp_workdir: Path, write_template, capsys):
    (temp_workdir / "input" / "inventory.csv").write_text("LotNo,ModelNo,Description,ContactPhone\n", encoding="utf-8")
    code = cli_main(_args(temp_workdir))
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR data: data file has no rows:" in out
    assert not (temp_workdir / "out").exists()


def test_exit_code_unreadable_template(temp_workdir: Path, write_inventory, capsys):
    (temp_workdir / "input" / "template.txt").write_bytes(b"\xff\xfe")
    code = cli_main(_args(temp_workdir))
    assert code == 1
    assert "ERROR template:" in capsys.readouterr().out


def test_exit_code_config_error(temp_workdir: Path, capsys):
    (temp_workdir / "config").mkdir()
    (temp_workdir / "config" / "listings.yml").write_text("unknown_key: 1\n", encoding="utf-8")
    code = cli_main([])
    assert code == 1
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_config_file_and_env_file(temp_workdir: Path, write_inventory, write_template, capsys, monkeypatch):
    (temp_workdir / "config").mkdir()
    (temp_workdir / "config" / "listings.yml").write_text("input_directory: ./input\n", encoding="utf-8")
    (temp_workdir / ".env").write_text(f"LOTLISTER_OUTPUT_DIR={temp_workdir / 'env_out'}\n", encoding="utf-8")
    # registered so that the value loaded from .env is removed after the test
    monkeypatch.setenv("LOTLISTER_OUTPUT_DIR", "")
    code = cli_main([])
    assert code == 0
    assert (temp_workdir / "env_out" / "Lot_1601.txt").exists()


def test_open_preview_flag(temp_workdir: Path, write_inventory, write_template):
    with patch("lotlister.cli.webbrowser.open") as mock_open:
        code = cli_main(_args(temp_workdir, "--open-preview"))
    assert code == 0
    mock_open.assert_called_once()
    assert mock_open.call_args[0][0].endswith("/preview.html")


def test_debug_flag_shows_row_details(temp_workdir: Path, write_inventory, write_template, capsys):
    code = cli_main(_args(temp_workdir, "--debug"))
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG row 1 lot=1601 listing=Lot_1601.txt photo=none" in out


def test_exit_code_data_file_not_utf8(temp_workdir: Path, write_template, capsys):
    (temp_workdir / "input" / "inventory.csv").write_bytes(
        "LotNo,ModelNo,Description,ContactPhone\n1601,M,Café table,555\n".encode("cp1252")
    )
    code = cli_main(_args(temp_workdir))
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR data: cannot read data file" in out
    assert not (temp_workdir / "out").exists()


def test_collision_preview_shows_only_surviving_photo(temp_workdir: Path, write_template, make_photo, capsys):
    make_photo(temp_workdir / "photos", "A:1.jpg")
    (temp_workdir / "input" / "inventory.csv").write_text(
        "LotNo,ModelNo,Description,ContactPhone\nA:1,first,,\nA/1,second,,\n", encoding="utf-8"
    )
    code = cli_main(_args(temp_workdir))
    assert code == 0
    out_dir = temp_workdir / "out"
    assert "Model: second" in (out_dir / "Lot_A_1.txt").read_text(encoding="utf-8")
    preview = (out_dir / "preview.html").read_text(encoding="utf-8")
    assert "<img" not in preview
    assert "With photo: 0" in preview
    assert "collisions=1" in capsys.readouterr().out
