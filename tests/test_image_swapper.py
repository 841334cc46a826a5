"""Tests for swapping module images with data set images."""

import logging
from pathlib import Path

import pytest
from PIL import Image

from vmodreskin.services.image_swapper import replace_image, replace_images


def _write_image(path: Path, size: tuple[int, int], color: str, mode: str = "RGB") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new(mode, size, color).save(path)
    return path


@pytest.fixture
def module_dir(tmp_path: Path) -> Path:
    root = tmp_path / "module"
    _write_image(root / "images" / "Pilot-Luke_Skywalker.jpg", (10, 10), "black")
    _write_image(root / "images" / "Hit-Console_Fire.png", (10, 10), "black")
    return root


@pytest.fixture
def xwing_data_dir(tmp_path: Path) -> Path:
    root = tmp_path / "xwing-data"
    _write_image(root / "images" / "pilots" / "luke.png", (40, 60), "white", mode="RGBA")
    _write_image(root / "images" / "damage" / "console.png", (300, 450), "red")
    return root


class TestReplaceImage:
    def test_keeps_target_format(self, module_dir: Path, xwing_data_dir: Path) -> None:
        """RGBA sources are written as JPEG when the module expects .jpg."""
        target = module_dir / "images" / "Pilot-Luke_Skywalker.jpg"

        replace_image(target, xwing_data_dir / "images" / "pilots" / "luke.png")

        with Image.open(target) as im:
            assert im.format == "JPEG"
            assert im.size == (40, 60)

    def test_resizes_when_asked(self, module_dir: Path, xwing_data_dir: Path) -> None:
        target = module_dir / "images" / "Hit-Console_Fire.png"

        replace_image(target, xwing_data_dir / "images" / "damage" / "console.png", (108, 162))

        with Image.open(target) as im:
            assert im.format == "PNG"
            assert im.size == (108, 162)


class TestReplaceImages:
    @pytest.mark.asyncio
    async def test_swaps_all_pairs(self, module_dir: Path, xwing_data_dir: Path) -> None:
        swapped = await replace_images(
            [
                ("Pilot-Luke_Skywalker.jpg", "pilots/luke.png"),
                ("Hit-Console_Fire.png", "damage/console.png"),
            ],
            module_dir,
            xwing_data_dir,
            workers=2,
        )

        assert swapped == 2
        with Image.open(module_dir / "images" / "Pilot-Luke_Skywalker.jpg") as im:
            assert im.size == (40, 60)

    @pytest.mark.asyncio
    async def test_missing_source_left_alone(
        self, module_dir: Path, xwing_data_dir: Path
    ) -> None:
        swapped = await replace_images(
            [("Pilot-Luke_Skywalker.jpg", "pilots/missing.png")],
            module_dir,
            xwing_data_dir,
        )

        assert swapped == 0
        with Image.open(module_dir / "images" / "Pilot-Luke_Skywalker.jpg") as im:
            assert im.size == (10, 10)

    @pytest.mark.asyncio
    async def test_unreadable_source_skipped(
        self, module_dir: Path, xwing_data_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A corrupt data set image does not stop the other swaps."""
        (xwing_data_dir / "images" / "pilots" / "broken.png").write_bytes(b"not an image")

        with caplog.at_level(logging.WARNING, logger="vmodreskin.services.image_swapper"):
            swapped = await replace_images(
                [
                    ("Pilot-Luke_Skywalker.jpg", "pilots/broken.png"),
                    ("Hit-Console_Fire.png", "damage/console.png"),
                ],
                module_dir,
                xwing_data_dir,
            )

        assert swapped == 1
        assert "Could not swap Pilot-Luke_Skywalker.jpg" in caplog.text
        with Image.open(module_dir / "images" / "Pilot-Luke_Skywalker.jpg") as im:
            assert im.size == (10, 10)
        with Image.open(module_dir / "images" / "Hit-Console_Fire.png") as im:
            assert im.size == (300, 450)

    @pytest.mark.asyncio
    async def test_no_pairs(self, module_dir: Path, xwing_data_dir: Path) -> None:
        assert await replace_images([], module_dir, xwing_data_dir) == 0
