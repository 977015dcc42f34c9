"""
Difficulty resolver tests.
"""
import pytest

from pocket_arcade.difficulty import Difficulty, config_for

ORDERED = [Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD]


def test_gap_height_shrinks_with_difficulty():
    gaps = [config_for(d).gap_height for d in ORDERED]
    assert gaps[0] > gaps[1] > gaps[2]


def test_speed_grows_with_difficulty():
    speeds = [config_for(d).obstacle_speed for d in ORDERED]
    assert speeds[0] < speeds[1] < speeds[2]


def test_medium_values():
    config = config_for(Difficulty.MEDIUM)
    assert config.gap_height == 150
    assert config.obstacle_speed == 3
    assert config.gravity == 0.35
    assert config.jump_strength == -7
    assert config.player_start_x_ratio == 0.25


def test_shared_tuning_is_identical_across_levels():
    configs = [config_for(d) for d in ORDERED]
    assert len({(c.gravity, c.jump_strength, c.obstacle_width, c.player_size) for c in configs}) == 1


@pytest.mark.parametrize("text,expected", [
    ("easy", Difficulty.EASY),
    ("HARD", Difficulty.HARD),
    (" Medium ", Difficulty.MEDIUM),
])
def test_parse(text, expected):
    assert Difficulty.parse(text) is expected


def test_parse_rejects_unknown_name():
    with pytest.raises(ValueError, match="extreme"):
        Difficulty.parse("extreme")
