import pytest

from cubrender.image import Image
from cubrender.parsing import Scene, SceneError, parse_scene
from cubrender.raycast import Face, Hit, SpriteSlice, caster_from_scene
from cubrender.render import TRANSPARENT, Renderer, Textures, load_textures

WEST, EAST, NORTH, SOUTH, SPRITE = 0x111111, 0x222222, 0x333333, 0x444444, 0x555555


def _textures(sprite_fill=SPRITE):
    return Textures(
        west=Image(64, 64, WEST),
        east=Image(64, 64, EAST),
        north=Image(64, 64, NORTH),
        south=Image(64, 64, SOUTH),
        sprite=Image(64, 64, sprite_fill),
    )


def _scene(second_row="10001"):
    lines = [
        "R 320 48",
        "NO n.xpm",
        "SO s.xpm",
        "WE w.xpm",
        "EA e.xpm",
        "S sp.xpm",
        "F 10,20,30",
        "C 40,50,60",
        "11111",
        second_row,
        "10N01",
        "10001",
        "11111",
    ]
    return parse_scene(lines)


def _renderer(scene, sprite_fill=SPRITE):
    caster = caster_from_scene(scene)
    return Renderer(caster, _textures(sprite_fill), scene.floor, scene.ceiling)


def test_frame_size_and_background():
    scene = _scene()
    image = _renderer(scene).frame()
    assert (image.width, image.height) == (320, 48)
    assert image.get_pixel(0, 0) == scene.floor
    assert image.get_pixel(0, 47) == scene.ceiling
    assert image.get_pixel(160, 47) == scene.ceiling


def test_frame_draws_wall_ahead():
    image = _renderer(_scene()).frame()
    assert image.get_pixel(160, 24) == SOUTH


def test_frame_draws_sprite_and_clears_list():
    renderer = _renderer(_scene("10201"))
    image = renderer.frame()
    assert image.get_pixel(160, 24) == SPRITE
    assert renderer.caster.sprites == []


def test_draw_wall_none_leaves_image():
    renderer = _renderer(_scene())
    before = list(renderer.image.pixels)
    renderer.draw_wall(5, None)
    assert renderer.image.pixels == before


def test_draw_wall_paints_only_its_column():
    renderer = _renderer(_scene())
    renderer.draw_wall(7, Hit(64, 100, Face.WEST))
    column = [renderer.image.get_pixel(7, y) for y in range(48)]
    assert WEST in column
    assert set(column) <= {WEST, 0}
    assert all(renderer.image.get_pixel(8, y) == 0 for y in range(48))


def test_draw_wall_uses_face_texture():
    renderer = _renderer(_scene())
    renderer.draw_wall(3, Hit(100, 64, Face.NORTH))
    assert NORTH in {renderer.image.get_pixel(3, y) for y in range(48)}


def test_draw_sprite_column():
    renderer = _renderer(_scene())
    sprite = SpriteSlice(10, 20, 2, 1, 5, 0.5, 50)
    assert renderer.draw_sprite(sprite) is True
    assert renderer.image.get_pixel(5, 10) == SPRITE
    assert renderer.image.get_pixel(5, 29) == SPRITE
    assert renderer.image.get_pixel(5, 30) == 0
    assert renderer.image.get_pixel(5, 9) == 0


def test_draw_sprite_offset_outside_texture():
    renderer = _renderer(_scene())
    sprite = SpriteSlice(10, 20, 2, 1, 5, 1.5, 50)
    assert renderer.draw_sprite(sprite) is False
    assert all(p == 0 for p in renderer.image.pixels)


def test_draw_sprite_transparent_pixels_skipped():
    renderer = _renderer(_scene(), sprite_fill=TRANSPARENT)
    sprite = SpriteSlice(0, 48, 2, 1, 5, 0.5, 50)
    assert renderer.draw_sprite(sprite) is True
    assert all(p == 0 for p in renderer.image.pixels)


XPM = '/* XPM */\nstatic char *t[] = {\n"2 2 1 1",\n"a c #FF0000",\n"aa",\n"aa"\n};\n'


def _file_scene(tmp_path, missing=False):
    path = tmp_path / "tex.xpm"
    path.write_text(XPM)
    sprite = str(tmp_path / "nope.xpm") if missing else str(path)
    return Scene(
        width=10, height=10, north=str(path), south=str(path), west=str(path),
        east=str(path), sprite=sprite, floor=1, ceiling=2, grid=[[1]],
    )


def test_load_textures(tmp_path):
    textures = load_textures(_file_scene(tmp_path))
    assert textures.west.width == 2
    assert textures.sprite.get_pixel(1, 1) == 0xFF0000


def test_load_textures_missing_file(tmp_path):
    with pytest.raises(SceneError):
        load_textures(_file_scene(tmp_path, missing=True))