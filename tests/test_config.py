from pathlib import Path

import pytest

from weiqi.config import AIConfig, Difficulty, GameConfig, config_from_dict, load_config


def test_missing_path_gives_defaults(tmp_path):
    config = load_config(tmp_path / "absent.yaml")

    assert config == GameConfig()
    assert load_config(None).board_size == 9
    assert config.komi == 6.5
    assert config.ai.difficulty == Difficulty.INTERMEDIATE


def test_yaml_values_override_defaults(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text(
        "board_size: 19\n"
        "komi: 7.5\n"
        "human_color: white\n"
        "ai:\n"
        "  difficulty: master\n"
        "  primary_timeout_s: 2.0\n"
    )

    config = load_config(path)

    assert config.board_size == 19
    assert config.komi == 7.5
    assert config.human_color == "white"
    assert isinstance(config.ai, AIConfig)
    assert config.ai.difficulty == Difficulty.MASTER
    assert config.ai.primary_timeout_s == 2.0
    assert config.ai.secondary_timeout_s == 5.0


def test_shipped_default_config_loads():
    config = load_config(Path(__file__).resolve().parents[1] / "configs" / "default.yaml")

    assert config.max_moves == 400


@pytest.mark.parametrize(
    "data",
    [
        {"board_size": 10},
        {"human_color": "red"},
        {"max_moves": 0},
        {"unknown": 1},
        {"ai": {"primary_timeout_s": 0}},
        {"ai": {"difficulty": "grandmaster"}},
        {"ai": {"temperature": 1.0}},
    ],
)
def test_invalid_values_raise(data):
    with pytest.raises(ValueError):
        config_from_dict(data)


def test_non_mapping_yaml_raises(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")

    with pytest.raises(ValueError):
        load_config(path)


def test_difficulty_descriptions():
    assert "mistakes" in Difficulty.NOVICE.description
    assert AIConfig(difficulty="Master").difficulty == Difficulty.MASTER
