import json

from bsp_dungeon.cli import build_config, main, parse_args


def test_ascii_output(capsys):
    code = main(["--seed", "7", "--size", "32", "--depth", "2"])
    assert code == 0
    out = capsys.readouterr().out
    rows = out.rstrip("\n").split("\n")
    assert len(rows) == 32
    assert any(ch in "+-|." for ch in out)


def test_summary_output(capsys):
    code = main(["--seed", "crypt", "--size", "48", "--depth", "3", "--format", "summary"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["config"]["seed"] == "crypt"
    assert payload["tree"]["leaf_count"] == 8


def test_show_containers_overlay(capsys):
    assert main(["--seed", "3", "--size", "24", "--depth", "1", "--show-containers"]) == 0
    out = capsys.readouterr().out
    assert ":" in out


def test_invalid_settings_exit_with_error(capsys):
    assert main(["--depth", "9"]) == 2
    assert main(["--size", "32", "--depth", "6"]) == 2


def test_precedence_yaml_env_cli(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yaml"
    path.write_text("dungeon:\n  dungeon_size: 64\n  split_depth: 2\n  corridor_thickness: 2\n", encoding="utf-8")
    monkeypatch.setenv("BSP_SPLIT_DEPTH", "4")
    args = parse_args(["--config", str(path), "--thickness", "3", "--seed", "11"])
    config = build_config(args)
    assert config.dungeon_size == 64
    assert config.split_depth == 4
    assert config.corridor_thickness == 3
    assert config.seed == 11
