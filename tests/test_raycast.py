import pytest

from cubrender.parsing import parse_scene
from cubrender.raycast import Caster, Face, Hit, caster_from_scene, sign


def _box():
    grid = [[1, 1, 1], [1, 0, 1], [1, 1, 1]]
    return Caster(grid=grid, width=100, height=80, x=96, y=96, rotation=0)


def _corridor():
    # 5 columns by 3 rows, sprite at (2, 1)
    rows = ["11111", "10201", "11111"]
    grid = [[int(rows[y][x]) for y in range(3)] for x in range(5)]
    return Caster(grid=grid, width=100, height=80, x=96, y=96, rotation=90)


@pytest.mark.parametrize("value,expected", [(-0.5, -1), (0.0, 1), (2.0, 1)])
def test_sign(value, expected):
    assert sign(value) == expected


def test_is_free():
    caster = _box()
    assert caster.is_free(96, 96)
    assert not caster.is_free(10, 10)
    assert not caster.is_free(-1, 96)


@pytest.mark.parametrize(
    "x,y,face",
    [(64, 96, Face.EAST), (128, 96, Face.WEST), (96, 64, Face.SOUTH), (96, 128, Face.NORTH)],
)
def test_check_hit_faces(x, y, face):
    assert _box().check_hit(x, y, 0) == face


def test_check_hit_off_grid_line():
    assert _box().check_hit(96, 96, 0) is None


def test_cast_hits_wall_on_grid_line():
    caster = _box()
    for column in (0, 50, 99):
        hit = caster.cast(column)
        assert isinstance(hit, Hit)
        assert hit.x % 64 == 0 or hit.y % 64 == 0
        assert 64 <= hit.x <= 128 and 64 <= hit.y <= 128


def test_trace_towards_east_wall():
    hit = _box().trace(96, 96, 300, 96, 0)
    assert hit == Hit(128, 96, Face.WEST)


def test_sprite_collected():
    caster = _corridor()
    hit = caster.cast(50)
    assert hit is not None and hit.face == Face.WEST
    assert len(caster.sprites) == 1
    sprite = caster.sprites[0]
    assert (sprite.cell_x, sprite.cell_y, sprite.column) == (2, 1, 50)
    assert 0.0 <= sprite.offset < 1.0
    assert sprite.distance > 0


def test_sprite_not_duplicated():
    caster = _corridor()
    caster.cast(50)
    caster.cast(50)
    assert len(caster.sprites) == 1


def test_caster_from_scene():
    lines = ["R 100 80", "NO n", "SO s", "WE w", "EA e", "S sp",
             "F 1,2,3", "C 4,5,6", "111", "1N1", "111"]
    caster = caster_from_scene(parse_scene(lines))
    assert (caster.x, caster.y, caster.rotation) == (96, 96, 180)
    assert caster.width == 100 and caster.height == 80