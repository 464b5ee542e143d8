import pytest

from dungeonkit.dungeon.config import DungeonConfig
from dungeonkit.exceptions import InvalidConfigError


def test_defaults_are_valid_in_both_modes():
    cfg = DungeonConfig()
    assert cfg.validate() is cfg
    assert cfg.validate(ranges=True) is cfg
    assert (cfg.style, cfg.room_count, cfg.room_min_size, cfg.room_max_size) == ("stone", 8, 6, 12)


def test_unknown_style_rejected():
    with pytest.raises(InvalidConfigError) as exc:
        DungeonConfig(style="lava").validate()
    assert exc.value.field == "style"


def test_min_above_max_rejected():
    with pytest.raises(InvalidConfigError) as exc:
        DungeonConfig(room_min_size=10, room_max_size=8).validate()
    assert exc.value.field == "room_min_size"


def test_equal_sizes_allowed_structurally_but_not_in_range_mode():
    cfg = DungeonConfig(room_count=3, room_min_size=8, room_max_size=8)
    cfg.validate()
    with pytest.raises(InvalidConfigError) as exc:
        cfg.validate(ranges=True)
    assert exc.value.field == "room_min_size"


@pytest.mark.parametrize(
    "field,value",
    [("room_count", 2), ("room_count", 21), ("corridor_width", 1.5), ("wall_height", 9.0), ("room_max_size", 25)],
)
def test_range_mode_rejects_out_of_range(field, value):
    cfg = DungeonConfig(**{field: value})
    with pytest.raises(InvalidConfigError) as exc:
        cfg.validate(ranges=True)
    assert exc.value.field == field


def test_structural_checks():
    with pytest.raises(InvalidConfigError):
        DungeonConfig(room_count=-1).validate()
    with pytest.raises(InvalidConfigError):
        DungeonConfig(corridor_width=0).validate()
    with pytest.raises(InvalidConfigError):
        DungeonConfig(room_min_size=0, room_max_size=5).validate()


def test_clamped_pulls_values_into_ranges():
    cfg = DungeonConfig(room_count=50, room_min_size=1, corridor_width=10.0, wall_height=1.0).clamped()
    assert cfg.room_count == 20
    assert cfg.room_min_size == 4
    assert cfg.corridor_width == 6.0
    assert cfg.wall_height == 3.0


def test_from_mapping_coerces_loose_input():
    cfg = DungeonConfig.from_mapping(
        {"style": "Crypt", "room_count": "12", "corridor_width": "2.5", "add_torches": "false", "bogus": 1, "wall_height": None}
    )
    assert cfg.style == "crypt"
    assert cfg.room_count == 12
    assert cfg.corridor_width == 2.5
    assert cfg.add_torches is False
    assert cfg.wall_height == 4.0


@pytest.mark.parametrize(
    "data,field",
    [
        ({"room_count": "abc"}, "room_count"),
        ({"room_count": 6.5}, "room_count"),
        ({"room_min_size": True}, "room_min_size"),
        ({"add_pillars": "maybe"}, "add_pillars"),
        ({"room_count": "inf"}, "room_count"),
        ({"room_count": float("inf")}, "room_count"),
        ({"room_max_size": 10**400}, "room_max_size"),
        ({"corridor_width": "nan"}, "corridor_width"),
        ({"wall_height": "-inf"}, "wall_height"),
    ],
)
def test_from_mapping_rejects_bad_values(data, field):
    with pytest.raises(InvalidConfigError) as exc:
        DungeonConfig.from_mapping(data)
    assert exc.value.field == field


def test_to_dict_round_trips_through_from_mapping():
    cfg = DungeonConfig(style="mine", room_count=5, add_treasure=False)
    assert DungeonConfig.from_mapping(cfg.to_dict()) == cfg


@pytest.mark.parametrize("field", ["corridor_width", "wall_height"])
@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_validate_rejects_non_finite_lengths(field, value):
    # NaN slips past "<= 0" comparisons, so it needs its own check.
    with pytest.raises(InvalidConfigError) as exc:
        DungeonConfig(**{field: value}).validate()
    assert exc.value.field == field
