import math

import pytest

from cubcaster.details import (
    SceneDetails,
    extract_map,
    facing,
    fill_details,
    find_player,
    first_map_line,
    map_size,
    parse_color,
    parse_colors,
    parse_textures,
    width_of,
)

SCENE = [
    "NO ./textures/north.xpm\n",
    "SO ./textures/south.xpm\n",
    "WE ./textures/west.xpm\n",
    "EA ./textures/east.xpm\n",
    "\n",
    "F 220,100,0\n",
    "C 225,30,0\n",
    "\n",
    "111111\n",
    "100101\n",
    "1000N1\n",
    "111111",
]

ROWS = ["111111", "100101", "1000N1", "111111"]


def test_first_map_line_finds_wall_row():
    assert first_map_line(SCENE) == SCENE.index("111111\n")


def test_first_map_line_with_leading_space_skips_to_wall():
    lines = ["NO a\n", "  \n", " 1 1\n", "1 1\n"]
    assert first_map_line(lines) == lines.index(" 1 1\n")


def test_first_map_line_without_map_is_zero():
    assert first_map_line(["NO a\n", "F 1,2,3\n"]) == 0


def test_width_of_ignores_outer_spaces():
    assert width_of("  10 1  ") == len("10 1")


@pytest.mark.parametrize("line", ["", "    "])
def test_width_of_blank_line_is_zero(line):
    assert width_of(line) == 0


def test_map_size_is_longest_row_and_row_count():
    rows = ["1111", "1 0 0 1", "11"]
    width, height = map_size(rows)
    assert width == max(len(row) for row in rows)
    assert height == len(rows)


def test_map_size_of_empty_map():
    assert map_size([]) == (0, 0)


def test_extract_map_strips_newlines():
    assert extract_map(SCENE) == ROWS


def test_parse_textures_reads_all_four():
    textures = parse_textures(SCENE)
    assert textures == {
        "north": "./textures/north.xpm",
        "south": "./textures/south.xpm",
        "west": "./textures/west.xpm",
        "east": "./textures/east.xpm",
    }


def test_parse_textures_missing_entry_is_none():
    textures = parse_textures(["NO ./a.xpm\n"])
    assert textures["north"] == "./a.xpm"
    assert textures["south"] is None


def test_parse_color_reads_components():
    assert parse_color("F 220,100,0\n") == (220, 100, 0)


def test_parse_color_with_too_few_parts_is_none():
    assert parse_color("C 225,30\n") is None


def test_parse_colors_reads_floor_and_ceiling():
    assert parse_colors(SCENE) == ((220, 100, 0), (225, 30, 0))


def test_parse_colors_defaults_when_missing():
    floor, ceiling = parse_colors(["NO ./a.xpm\n", "F 1,2\n"])
    assert floor == (-1, -1, -1)
    assert ceiling == (-1, -1, -1)


def test_facing_north():
    assert facing("N") == (-1.0, 0.0, 0.0, 0.66)


@pytest.mark.parametrize("direction", ["N", "S", "E", "W"])
def test_facing_plane_is_perpendicular(direction):
    dir_x, dir_y, plane_x, plane_y = facing(direction)
    assert math.hypot(dir_x, dir_y) == pytest.approx(1.0)
    assert dir_x * plane_x + dir_y * plane_y == pytest.approx(0.0)
    assert math.hypot(plane_x, plane_y) == pytest.approx(0.66)


def test_facing_unknown_raises():
    with pytest.raises(ValueError):
        facing("X")


def test_find_player_locates_mark_at_cell_centre():
    found = find_player(ROWS)
    assert found is not None
    x, y, mark = found
    assert mark == "N"
    assert ROWS[int(x)][int(y)] == "N"
    assert x % 1 == 0.5 and y % 1 == 0.5


def test_find_player_without_mark_is_none():
    assert find_player(["111", "101", "111"]) is None


def test_fill_details_collects_everything():
    details = fill_details(SCENE)
    assert details.north == "./textures/north.xpm"
    assert details.east == "./textures/east.xpm"
    assert details.floor == (220, 100, 0)
    assert details.ceiling == (225, 30, 0)
    assert details.rows == ROWS
    assert (details.width, details.height) == map_size(ROWS)
    assert (details.dir_x, details.dir_y, details.plane_x, details.plane_y) == facing("N")
    assert details.rows[int(details.pos_x)][int(details.pos_y)] == "N"


def test_fill_details_defaults_screen_and_texture_sizes():
    details = fill_details(SCENE)
    assert (details.screen_w, details.screen_h) == (640, 480)
    assert (details.texture_w, details.texture_h) == (32, 32)


def test_describe_lists_fields_and_rows():
    details = fill_details(SCENE)
    text = details.describe()
    assert "NO:./textures/north.xpm" in text
    assert "Floor:R=220 G=100 B=0" in text
    assert f"Map({details.height} x {details.width}):" in text
    assert text.splitlines()[-len(ROWS):] == [f"'{row}'" for row in ROWS]


def test_empty_details_describe_unset_colours():
    text = SceneDetails().describe()
    assert "Ceiling:R=-1 G=-1 B=-1" in text
    assert "NO:None" in text