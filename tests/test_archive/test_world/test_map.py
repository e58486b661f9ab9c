import json
import pytest
from archive.config import ArchiveConfig
from archive.world import ArchiveMap, MapFormatError

def test_dimensions(tiled_map_data):
    game_map = ArchiveMap.from_dict(tiled_map_data)
    assert (game_map.width, game_map.height) == (10, 10)
    assert (game_map.pixel_width, game_map.pixel_height) == (320, 320)
    assert game_map.bounds.right == 320

def test_triggers_in_authored_order(tiled_map_data):
    game_map = ArchiveMap.from_dict(tiled_map_data)

    bench, statue = game_map.triggers
    assert (bench.id, bench.name) == (7, "Bench")
    assert (bench.bounds.x, bench.bounds.y, bench.bounds.width) == (32, 32, 64)
    assert bench.text == "Hello"
    assert bench.url == "https://example.org/bench"
    assert statue.image == "statue"
    assert statue.url is None

def test_non_string_properties_are_stringified(tiled_map_data):
    objects = tiled_map_data["layers"][2]["objects"]
    objects[0]["properties"].append({"name": "year", "type": "int", "value": 1887})

    game_map = ArchiveMap.from_dict(tiled_map_data)
    assert game_map.triggers[0].get_property("year") == "1887"

def test_spawn_from_first_object(tiled_map_data):
    game_map = ArchiveMap.from_dict(tiled_map_data)
    assert game_map.spawn == (64, 250)

def test_default_spawn_without_spawn_layer(tiled_map_data):
    tiled_map_data["layers"] = tiled_map_data["layers"][:3]
    game_map = ArchiveMap.from_dict(tiled_map_data)
    assert game_map.spawn == (400, 1000)

def test_no_trigger_layer_means_no_triggers(tiled_map_data):
    del tiled_map_data["layers"][2]
    assert ArchiveMap.from_dict(tiled_map_data).triggers == []

def test_layer_names_come_from_config(tiled_map_data):
    tiled_map_data["layers"][2]["name"] = "Stories"
    config = ArchiveConfig(trigger_layer="Stories")

    assert len(ArchiveMap.from_dict(tiled_map_data, config).triggers) == 2

def test_collision_from_named_layer(tiled_map_data):
    game_map = ArchiveMap.from_dict(tiled_map_data)

    assert game_map.is_solid(5, 0)
    assert game_map.is_solid(5, 9)
    assert not game_map.is_solid(4, 0)
    # Outside the map is open
    assert not game_map.is_solid(-1, 0)
    assert not game_map.is_solid(10, 10)

def test_collision_from_layer_property(tiled_map_data):
    walls = tiled_map_data["layers"][1]
    walls["name"] = "Walls"
    walls["properties"] = [{"name": "collision", "type": "bool", "value": True}]

    assert ArchiveMap.from_dict(tiled_map_data).is_solid(5, 3)

def test_flip_flags_stripped(tiled_map_data):
    data = tiled_map_data["layers"][1]["data"]
    data[0] = 0x80000001

    game_map = ArchiveMap.from_dict(tiled_map_data)
    assert game_map.get_layer("Collision").data[0] == 1
    assert game_map.is_solid(0, 0)

def test_solid_rect(tiled_map_data):
    game_map = ArchiveMap.from_dict(tiled_map_data)

    # Column 5 spans x 160..192
    assert game_map.get_solid_rect(150, 0, 20, 20)
    assert not game_map.get_solid_rect(130, 0, 30, 20)
    assert not game_map.get_solid_rect(192, 0, 20, 20)

def test_tilesets(tiled_map_data):
    game_map = ArchiveMap.from_dict(tiled_map_data)

    tileset, local_id = game_map.get_tile_local_id(6)
    assert tileset.name == "terrain"
    assert local_id == 5
    assert tileset.get_tile_region(local_id) == (32, 32, 32, 32)
    assert game_map.get_tile_local_id(0) == (None, 0)

def test_external_tileset(tmp_path, tiled_map_data):
    (tmp_path / "terrain.tsj").write_text(json.dumps({
        "name": "terrain", "tilewidth": 32, "tileheight": 32, "columns": 8, "image": "terrain.png",
    }))
    tiled_map_data["tilesets"] = [{"firstgid": 1, "source": "terrain.tsj"}]
    path = tmp_path / "park.json"
    path.write_text(json.dumps(tiled_map_data))

    game_map = ArchiveMap.load(path)

    assert game_map.tilesets[0].columns == 8
    assert game_map.tilesets[0].image_path == "terrain.png"

@pytest.mark.parametrize("mutate", [
    lambda d: d.pop("layers"),
    lambda d: d.update(width="ten"),
    lambda d: d["layers"][0].pop("type"),
    lambda d: d["layers"][2]["objects"][0]["properties"].append({"value": "no name"}),
])
def test_schema_errors(tiled_map_data, mutate):
    mutate(tiled_map_data)
    with pytest.raises(MapFormatError):
        ArchiveMap.from_dict(tiled_map_data)

def test_load_from_file(tmp_path, tiled_map_data):
    path = tmp_path / "gregson.json"
    path.write_text(json.dumps(tiled_map_data))

    game_map = ArchiveMap.load(path)

    assert game_map.name == "gregson"
    assert game_map.file_path == path
    assert len(game_map.triggers) == 2

def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ArchiveMap.load(tmp_path / "missing.json")

def test_drawable_layers_skip_collision_and_split_overhead(tiled_map_data):
    tiled_map_data["layers"].append(
        {"name": "Top Level", "type": "tilelayer", "width": 10, "height": 10, "data": [0] * 100}
    )
    game_map = ArchiveMap.from_dict(tiled_map_data)

    assert [l.name for l in game_map.drawable_layers()] == ["Ground"]
    assert [l.name for l in game_map.drawable_layers(overhead=True)] == ["Top Level"]

def test_collision_property_layer_not_drawn(tiled_map_data):
    walls = tiled_map_data["layers"][1]
    walls["name"] = "Walls"
    walls["properties"] = [{"name": "collision", "type": "bool", "value": True}]

    game_map = ArchiveMap.from_dict(tiled_map_data)

    assert game_map.is_collision_layer(game_map.get_layer("Walls"))
    assert [l.name for l in game_map.drawable_layers()] == ["Ground"]

def test_overhead_layers_from_config(tiled_map_data):
    config = ArchiveConfig(overhead_layers=["Ground"])
    game_map = ArchiveMap.from_dict(tiled_map_data, config)

    assert game_map.drawable_layers() == []
    assert [l.name for l in game_map.drawable_layers(overhead=True)] == ["Ground"]
