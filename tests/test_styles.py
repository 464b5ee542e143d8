import pytest

from dungeonkit.dungeon.styles import (
    FALLBACK_PALETTE,
    STYLE_CATALOG,
    DungeonStyle,
    Palette,
    catalog_snapshot,
    colors_for,
    description_for,
    register_style,
)


def test_lookup_is_deterministic():
    for style in DungeonStyle:
        assert colors_for(style) == colors_for(style.value)
        assert description_for(style) == description_for(style.value)


def test_builtin_styles_have_distinct_palettes():
    palettes = {colors_for(s) for s in DungeonStyle}
    assert len(palettes) == 5
    assert all(description_for(s) for s in DungeonStyle)


def test_lookup_ignores_case():
    assert colors_for("CRYPT") == colors_for("crypt")


def test_unknown_style_falls_back_to_gray():
    assert colors_for("lava") == FALLBACK_PALETTE
    assert colors_for(None) == FALLBACK_PALETTE
    assert description_for("lava") == ""


def test_register_style_adds_entry():
    pal = Palette((0.1, 0.1, 0.5), (0.2, 0.2, 0.6), (0.9, 0.9, 1.0))
    try:
        register_style("Ice", pal, "Frozen halls")
        assert colors_for("ice") == pal
        assert catalog_snapshot()["ice"]["description"] == "Frozen halls"
    finally:
        STYLE_CATALOG.pop("ice", None)


def test_register_style_rejects_empty_name():
    with pytest.raises(ValueError):
        register_style("  ", FALLBACK_PALETTE)


def test_snapshot_shape():
    snap = catalog_snapshot()
    assert set(snap) >= {s.value for s in DungeonStyle}
    assert snap["stone"]["floor"] == [0.3, 0.3, 0.32]
