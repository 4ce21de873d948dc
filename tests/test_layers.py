"""Тесты для разрешения слоёв"""

import pytest

from map_to_image.domain.settings import TileLayer
from map_to_image.errors import InvalidInputError
from map_to_image.layers import resolve_layer, tile_url

OSM = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"


class TestTileUrl:
    """Тесты для подстановки в шаблон"""

    def test_substitutes_placeholders(self):
        assert tile_url(OSM, 5, 17, 10) == "https://tile.openstreetmap.org/5/17/10.png"

    def test_yx_order_template(self):
        tpl = "https://server.arcgisonline.com/tile/{z}/{y}/{x}"
        assert tile_url(tpl, 3, 1, 2) == "https://server.arcgisonline.com/tile/3/2/1"

    def test_every_occurrence_replaced(self):
        assert tile_url("{z}-{z}/{x}/{y}", 4, 1, 2) == "4-4/1/2"

    def test_no_other_placeholders(self):
        assert tile_url("https://t/{s}/{z}/{x}/{y}?k={apikey}", 1, 0, 1) == "https://t/{s}/1/0/1?k={apikey}"


class TestResolveLayer:
    """Тесты для resolve_layer"""

    def test_string_layer(self):
        source, opacity = resolve_layer(OSM, 5, 17.9, 10.2, {})
        assert source.url == "https://tile.openstreetmap.org/5/17/10.png"
        assert source.key == "url:" + source.url
        assert source.generator is None
        assert opacity == 1.0

    def test_floor_not_truncation(self):
        """Отрицательные дробные координаты усекаются вниз"""
        source, _ = resolve_layer("{z}/{x}/{y}", 2, -0.5, -1.2, {})
        assert source.url == "2/-1/-2"

    def test_tile_layer_opacity(self):
        source, opacity = resolve_layer(TileLayer(url=OSM, opacity=0.5), 1, 0, 1, {})
        assert source.url == "https://tile.openstreetmap.org/1/0/1.png"
        assert opacity == 0.5

    def test_dict_layer_defaults_opacity(self):
        _, opacity = resolve_layer({"url": OSM}, 1, 0, 0, {})
        assert opacity == 1.0

    def test_dict_layer_with_opacity(self):
        _, opacity = resolve_layer({"url": OSM, "opacity": 0.3}, 1, 0, 0, {})
        assert opacity == 0.3

    @pytest.mark.parametrize("layer", [
        {"url": OSM, "opacity": 0},
        {"url": OSM, "opacity": -0.2},
        {"url": OSM, "opacity": 1.5},
        {"opacity": 0.5},
        42,
        None,
    ])
    def test_malformed_layer(self, layer):
        with pytest.raises(InvalidInputError):
            resolve_layer(layer, 1, 0, 0, {})

    def test_generator_not_called_on_resolve(self):
        calls = []

        def gen(z, x, y):
            calls.append((z, x, y))
            return b"tile"

        source, opacity = resolve_layer(gen, 7, 3.9, 4.1, {})
        assert calls == []
        assert opacity == 1.0
        assert source.url is None
        assert source.generator() == b"tile"
        assert calls == [(7, 3, 4)]

    def test_generator_keys_are_stable(self):
        def gen_a(z, x, y):
            return b"a"

        def gen_b(z, x, y):
            return b"b"

        ids = {}
        a1, _ = resolve_layer(gen_a, 3, 1, 2, ids)
        b1, _ = resolve_layer(gen_b, 3, 1, 2, ids)
        a2, _ = resolve_layer(gen_a, 3, 1.7, 2.2, ids)
        assert a1.key == "generator:0/3/1/2"
        assert b1.key == "generator:1/3/1/2"
        assert a1 == a2
        assert a1 != b1
        assert hash(a1) == hash(a2)

    def test_url_and_generator_keys_never_collide(self):
        """URL, совпадающий по тексту с ключом функции, остаётся отдельным источником"""
        def gen(z, x, y):
            return b""

        ids = {}
        from_gen, _ = resolve_layer(gen, 3, 1, 2, ids)
        from_url, _ = resolve_layer("generator:0/{z}/{x}/{y}", 3, 1, 2, ids)
        assert from_url.url == "generator:0/3/1/2"
        assert from_url != from_gen
