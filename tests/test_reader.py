import pytest

from cubcaster.reader import load_scene, read_lines, valid_extension
from cubcaster.validate import SceneError


def write_scene(tmp_path, rows):
    paths = {}
    for tag in ("NO", "SO", "WE", "EA"):
        path = tmp_path / f"{tag.lower()}.xpm"
        path.write_text("xpm")
        paths[tag] = str(path)
    text = "".join(f"{tag} {paths[tag]}\n" for tag in ("NO", "SO", "WE", "EA"))
    text += "F 220,100,0\nC 225,30,0\n\n" + "".join(rows)
    scene = tmp_path / "level.cub"
    scene.write_text(text)
    return scene, paths


def test_valid_extension():
    assert valid_extension("map.cub") == "map.cub"
    assert valid_extension("a.cub") == "a.cub"
    with pytest.raises(SceneError):
        valid_extension(".cub")
    with pytest.raises(SceneError):
        valid_extension("map.txt")


def test_read_lines_keeps_newlines(tmp_path):
    path = tmp_path / "f.cub"
    path.write_text("a\nb\n\nc")
    assert read_lines(path) == ["a\n", "b\n", "\n", "c"]


def test_read_lines_trailing_newline_and_empty(tmp_path):
    path = tmp_path / "f.cub"
    path.write_text("x\n")
    assert read_lines(path) == ["x\n"]
    path.write_text("")
    assert read_lines(path) == []


def test_read_lines_round_trip(tmp_path):
    path = tmp_path / "f.cub"
    content = "NO a\r\nmid\n\nlast line"
    path.write_bytes(content.encode())
    assert "".join(read_lines(path)) == content


def test_read_lines_missing_file(tmp_path):
    with pytest.raises(SceneError):
        read_lines(tmp_path / "absent.cub")


def test_load_scene(tmp_path):
    rows = ["111111\n", "100001\n", "10N001\n", "111111\n"]
    scene, paths = write_scene(tmp_path, rows)
    details = load_scene(scene)
    assert details.north == paths["NO"]
    assert details.east == paths["EA"]
    assert details.floor == (220, 100, 0)
    assert details.ceiling == (225, 30, 0)
    assert details.rows == [row.rstrip("\n") for row in rows]
    assert (details.pos_x, details.pos_y) == (2.5, 2.5)
    assert (details.dir_x, details.dir_y) == (-1.0, 0.0)
    assert details.plane_y == 0.66


def test_load_scene_rejects_open_map(tmp_path):
    scene, _ = write_scene(tmp_path, ["111111\n", "10N00 \n", "111111\n"])
    with pytest.raises(SceneError, match="Map invalid"):
        load_scene(scene)


def test_load_scene_rejects_wrong_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text("1\n")
    with pytest.raises(SceneError, match="Wrong file name"):
        load_scene(path)