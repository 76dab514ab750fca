import json

import pytest

import main


def test_parser_defaults():
    args = main.build_parser().parse_args([])
    assert args.width == 40 and args.height == 30
    assert args.seed is None
    config = main.config_from_args(args)
    assert not config.use_fixed_seed


def test_config_from_args_clamps_and_fixes_seed():
    args = main.build_parser().parse_args(["--seed", "7", "--land", "120", "--regions", "9"])
    config = main.config_from_args(args)
    assert config.use_fixed_seed and config.seed == 7
    assert config.land_percentage == 100
    assert config.region_count == 4


def test_cli_writes_json(tmp_path, capsys):
    out = tmp_path / "map.json"
    code = main.main(["--width", "20", "--height", "15", "--seed", "1", "--output", str(out)])
    assert code == 0
    printed = capsys.readouterr().out
    assert "Seed 1: 20x15 map" in printed
    data = json.loads(out.read_text())
    assert len(data["cells"]) == 300


def test_cli_rejects_bad_size(capsys):
    with pytest.raises(SystemExit) as exc:
        main.main(["--width", "22", "--height", "15"])
    assert exc.value.code == 2
    assert "multiples" in capsys.readouterr().err


def test_setup_starts_from_command_line_config(monkeypatch):
    pytest.importorskip("dearpygui.dearpygui")
    import ui.generator_setup

    received = []

    def fake_choose_config(width, height, config=None):
        received.append((width, height, config))
        return None

    monkeypatch.setattr(ui.generator_setup, "choose_config", fake_choose_config)
    code = main.main(["--width", "20", "--height", "15", "--seed", "5", "--land", "30", "--setup"])
    assert code == 1
    (width, height, config), = received
    assert (width, height) == (20, 15)
    assert config.seed == 5 and config.use_fixed_seed
    assert config.land_percentage == 30
