from __future__ import annotations

import json

import pytest

import main

GARCHOMP_SET = """Garchomp @ Choice Band
Ability: Rough Skin
Level: 50
EVs: 252 Atk / 4 SpD / 252 Spe
Jolly Nature
- Earthquake
"""


def test_stat_command_prints_value(capsys) -> None:
    assert main.main(["stat", "speed", "102", "--ev", "252", "--nature", "Jolly", "--level", "50"]) == 0
    assert capsys.readouterr().out.strip() == "169"


def test_stat_command_json_output(capsys) -> None:
    main.main(["--json", "stat", "hp", "1", "--level", "100"])
    assert json.loads(capsys.readouterr().out) == {"stat": "hp", "value": 1}


def test_stats_command_with_inline_base_stats(tmp_path, capsys) -> None:
    set_file = tmp_path / "garchomp.txt"
    set_file.write_text(GARCHOMP_SET, encoding="utf-8")

    main.main(["stats", str(set_file), "--base", "108/130/95/80/85/102"])

    assert capsys.readouterr().out.strip() == (
        "Garchomp (Lv. 50, Jolly): HP 183 / Atk 182 / Def 115 / SpA 90 / SpD 106 / Spe 169"
    )


def test_debug_flag_writes_to_stderr(tmp_path, capsys) -> None:
    set_file = tmp_path / "garchomp.txt"
    set_file.write_text(GARCHOMP_SET, encoding="utf-8")

    main.main(["--debug", "stats", str(set_file), "--base", "108/130/95/80/85/102"])

    assert "[debug] Parsed set for Garchomp" in capsys.readouterr().err


def test_unknown_stat_exits_with_message() -> None:
    with pytest.raises(SystemExit, match="Unknown stat"):
        main.main(["stat", "luck", "100"])


def test_bad_base_stats_exit(tmp_path) -> None:
    set_file = tmp_path / "garchomp.txt"
    set_file.write_text(GARCHOMP_SET, encoding="utf-8")

    with pytest.raises(SystemExit, match="six values"):
        main.main(["stats", str(set_file), "--base", "1/2/3"])


def test_missing_set_file_exits(tmp_path) -> None:
    with pytest.raises(SystemExit, match="File not found"):
        main.main(["stats", str(tmp_path / "missing.txt")])


def test_stat_command_clamps_free_form_input(capsys) -> None:
    main.main(["stat", "hp", "108", "--iv", "40", "--ev", "-8", "--level", "50"])
    assert capsys.readouterr().out.strip() == "183"


def test_stats_command_applies_preset(tmp_path, capsys) -> None:
    set_file = tmp_path / "garchomp.txt"
    set_file.write_text(GARCHOMP_SET, encoding="utf-8")

    main.main(["--json", "stats", str(set_file), "--base", "108/130/95/80/85/102", "--preset", "max"])

    line = json.loads(capsys.readouterr().out)
    assert line["nature"] == "Jolly"
    assert line["stats"]["hp"] == 215
    assert line["stats"]["speed"] == 169
