"""Тесты для CLI"""

import argparse
import json

import pytest
from PIL import Image

from map_to_image import cli
from map_to_image.domain.settings import TileLayer
from map_to_image.errors import TileFetchError
from map_to_image.services import render


class TestParseArgs:
    """Тесты для разбора аргументов"""

    def test_parse_size(self):
        assert cli.parse_size("1280x720") == (1280, 720)
        assert cli.parse_size(" 640X480 ") == (640, 480)

    def test_parse_size_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_size("big")

    def test_parse_layer_plain(self):
        tpl = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
        assert cli.parse_layer(tpl) == tpl

    def test_parse_layer_with_opacity(self):
        layer = cli.parse_layer("https://t.example/{z}/{x}/{y}.png@0.5")
        assert layer == TileLayer(url="https://t.example/{z}/{x}/{y}.png", opacity=0.5)

    def test_parse_layer_userinfo_not_opacity(self):
        tpl = "https://user@t.example/{z}/{x}/{y}.png"
        assert cli.parse_layer(tpl) == tpl

    def test_parse_layer_bad_opacity(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_layer("https://t.example/{z}/{x}/{y}.png@2")


class TestMain:
    """Тесты для cli.main"""

    def test_writes_png(self, monkeypatch, tmp_path, capsys):
        captured = {}

        def fake_render(settings):
            captured.update(settings)
            return Image.new("RGBA", (320, 200), (1, 2, 3, 255))

        monkeypatch.setattr(cli, "render_map_image", fake_render)
        out = tmp_path / "maps" / "spb.png"
        rc = cli.main([
            "--lat", "59.93", "--lng", "30.31", "--zoom", "11", "--size", "320x200",
            "--layer", "https://a.example/{z}/{x}/{y}.png",
            "--layer", "https://b.example/{z}/{x}/{y}.png@0.7",
            "--out", str(out),
        ])

        assert rc == 0
        assert out.exists()
        assert Image.open(out).size == (320, 200)
        assert captured["map"]["zoom"] == 11
        assert captured["image"]["dimensions"] == {"width": 320, "height": 200}
        assert captured["map"]["layers"][1].opacity == 0.7
        assert json.loads(capsys.readouterr().out)["generated"] == str(out)

    def test_default_layer_from_config(self, monkeypatch, tmp_path):
        captured = {}

        def fake_render(settings):
            captured.update(settings)
            return Image.new("RGBA", (10, 10))

        monkeypatch.setattr(cli, "render_map_image", fake_render)
        cli.main(["--lat", "0", "--lng", "0", "--out", str(tmp_path / "m.png")])
        assert captured["map"]["layers"] == [cli.MAP_PROVIDER]

    def test_render_error_exit_code(self, monkeypatch, tmp_path):
        def failing_render(settings):
            raise TileFetchError("https://a.example/1/0/0.png", "500 Error")

        monkeypatch.setattr(cli, "render_map_image", failing_render)
        out = tmp_path / "m.png"
        assert cli.main(["--lat", "0", "--lng", "0", "--out", str(out)]) == 1
        assert not out.exists()

    def test_non_image_tile_exit_code(self, monkeypatch, tmp_path):
        """Сервер отдал HTML вместо тайла — код возврата 1, без трейсбека"""
        class HtmlResponse:
            content = b"<html>rate limited</html>"

            def raise_for_status(self):
                pass

        class HtmlSession:
            def get(self, url, timeout=None):
                return HtmlResponse()

            def close(self):
                pass

        monkeypatch.setattr(render, "make_session", lambda headers=None: HtmlSession())
        out = tmp_path / "m.png"
        rc = cli.main([
            "--lat", "0", "--lng", "0", "--zoom", "2", "--size", "64x64",
            "--layer", "https://a.example/{z}/{x}/{y}.png", "--out", str(out),
        ])
        assert rc == 1
        assert not out.exists()
