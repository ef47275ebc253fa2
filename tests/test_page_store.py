"""
Unit tests for page_store module.

Tests record conversion, page file saving, loading, listing and deletion.
"""

import json

import pytest

from SB_Libs.CanvasLib.canvas_items import (
    CanvasItem,
    DoodlePayload,
    ImagePayload,
    ItemKind,
    TextPayload,
    create_item,
)
from SB_Libs.CanvasLib.page_models import ScrapbookPage
from SB_Libs.constants import SCHEMA_VERSION
from SB_Libs.ProjStoreLib.page_store import (
    PageStore,
    delete_page,
    get_pages_dir,
    item_from_record,
    item_to_record,
    list_page_files,
    load_all_pages,
    load_page,
    page_count,
    page_from_record,
    page_to_record,
    save_page,
)


def _mixed_page():
    image = CanvasItem(
        payload=ImagePayload(image_path="/photos/beach día.jpg"),
        x=12.5,
        y=40.25,
        width=300.0,
        height=220.0,
        rotation=-12.75,
        scale=1.35,
        has_border=True,
        border_color=0xFF112233,
        border_width=4.5,
        corner_radius=8.0,
    )
    text = CanvasItem(
        payload=TextPayload(
            text="Summer \"18\"\nline two",
            text_color=0x80FFFFFF,
            text_size=22.0,
            font_family="monospace",
            is_bold=True,
            is_italic=True,
        ),
        x=0.1,
        y=0.2,
        width=150.0,
        height=50.0,
        background_color=0xFFFAF8F5,
    )
    doodle = CanvasItem(
        payload=DoodlePayload(doodle_path="doodles/loop.png", stroke_color=0xFF8B6914, stroke_width=6.0),
        x=100.0,
        y=300.0,
        width=100.0,
        height=100.0,
        rotation=270.0,
    )
    return ScrapbookPage(
        title="Trip Journal",
        created_date=1700000000123,
        last_modified=1700000000456,
        items=[image, text, doodle],
        background_image_path="/backgrounds/paper.png",
        background_color=0xFFEEDDCC,
    )


def _assert_items_equal(actual, expected):
    assert len(actual) == len(expected)
    for got, want in zip(actual, expected):
        assert got.item_id == want.item_id
        assert got.kind is want.kind
        assert got.payload == want.payload
        for name in ("x", "y", "width", "height", "rotation", "scale", "border_width", "corner_radius"):
            assert getattr(got, name) == pytest.approx(getattr(want, name), abs=1e-6)
        assert got.background_color == want.background_color
        assert got.has_border == want.has_border
        assert got.border_color == want.border_color


class TestItemRecords:
    """Tests for item_to_record / item_from_record."""

    def test_image_record_fields(self):
        item = create_item(ItemKind.IMAGE, 5, 6)
        item.payload.image_path = "a.jpg"

        record = item_to_record(item)

        assert record["type"] == "image"
        assert record["imagePath"] == "a.jpg"
        assert record["x"] == 5
        assert record["cornerRadius"] == 8
        assert "text" not in record

    def test_text_record_fields(self):
        record = item_to_record(create_item(ItemKind.TEXT))

        assert record["type"] == "text"
        assert record["text"] == "Add your text here..."
        assert record["textColor"] == 0xFF6B4423
        assert record["isBold"] is False

    def test_doodle_record_fields(self):
        record = item_to_record(create_item(ItemKind.DOODLE))

        assert record["type"] == "doodle"
        assert record["doodlePath"] is None
        assert record["strokeWidth"] == 3

    @pytest.mark.parametrize("kind", list(ItemKind))
    def test_round_trip_each_kind(self, kind):
        item = create_item(kind, 3, 4)
        _assert_items_equal([item_from_record(item_to_record(item))], [item])

    def test_missing_optional_fields_use_defaults(self):
        item = item_from_record({"type": "text", "x": 1, "y": 2, "width": 30, "height": 40})

        assert item.payload.text is None
        assert item.payload.text_size == 16
        assert item.payload.font_family == "serif"
        assert item.scale == 1
        assert item.rotation == 0
        assert item.border_color == 0xFF8B6914
        assert item.item_id

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            item_from_record({"type": "sticker", "x": 0, "y": 0, "width": 1, "height": 1})

    def test_missing_geometry(self):
        with pytest.raises(ValueError):
            item_from_record({"type": "image", "x": 0})

    def test_non_positive_scale_falls_back(self):
        item = item_from_record({"type": "image", "x": 0, "y": 0, "width": 20, "height": 20, "scale": 0})
        assert item.scale == 1


class TestPageRecords:
    """Tests for page_to_record / page_from_record."""

    def test_page_record_fields(self):
        record = page_to_record(_mixed_page())

        assert record["schema_version"] == SCHEMA_VERSION
        assert record["title"] == "Trip Journal"
        assert record["createdDate"] == 1700000000123
        assert record["backgroundImagePath"] == "/backgrounds/paper.png"
        assert [item["type"] for item in record["items"]] == ["image", "text", "doodle"]

    def test_round_trip_through_json(self):
        page = _mixed_page()

        restored = page_from_record(json.loads(json.dumps(page_to_record(page))))

        assert restored.title == page.title
        assert restored.created_date == page.created_date
        assert restored.last_modified == page.last_modified
        assert restored.background_image_path == page.background_image_path
        assert restored.background_color == page.background_color
        _assert_items_equal(restored.items, page.items)

    def test_signed_colors_round_trip(self):
        note = create_item(ItemKind.TEXT, 5, 5)
        note.payload.text_color = -16777216
        note.border_color = -1
        note.background_color = -8355712
        page = ScrapbookPage(title="Signed", items=[note], background_color=-1)

        restored = page_from_record(json.loads(json.dumps(page_to_record(page))))

        assert restored.background_color == -1
        assert restored.items[0].payload.text_color == -16777216
        assert restored.items[0].border_color == -1
        assert restored.items[0].background_color == -8355712

    def test_malformed_items_are_skipped(self, caplog):
        record = page_to_record(_mixed_page())
        record["items"].insert(1, {"type": "sticker"})
        record["items"].append("not an item")

        restored = page_from_record(record)

        assert [item.kind for item in restored.items] == [ItemKind.IMAGE, ItemKind.TEXT, ItemKind.DOODLE]
        assert "Skipping item" in caplog.text

    def test_empty_record_defaults(self):
        page = page_from_record({})

        assert page.title == "Untitled Page"
        assert page.items == []
        assert page.background_color == 0xFFFAF8F5
        assert page.background_image_path is None


class TestPageFiles:
    """Tests for saving and loading page files."""

    def test_get_pages_dir(self, temp_pages_dir):
        pages_dir = get_pages_dir(temp_pages_dir)

        assert pages_dir.is_dir()
        assert pages_dir.name == "Pages"

    def test_save_assigns_sequential_ids(self, temp_pages_dir):
        first = ScrapbookPage(title="One")
        second = ScrapbookPage(title="Two")

        assert save_page(temp_pages_dir, first) == 1
        assert save_page(temp_pages_dir, second) == 2
        assert first.page_id == 1
        assert [path.name for path in list_page_files(temp_pages_dir)] == ["page_1.sbpage", "page_2.sbpage"]

    def test_save_refreshes_last_modified(self, temp_pages_dir):
        page = ScrapbookPage(title="Old", last_modified=5)
        save_page(temp_pages_dir, page)
        assert page.last_modified > 5

    def test_save_existing_page_overwrites(self, temp_pages_dir):
        page = ScrapbookPage(title="Draft")
        page_id = save_page(temp_pages_dir, page)

        page.title = "Final"
        assert save_page(temp_pages_dir, page) == page_id

        assert page_count(temp_pages_dir) == 1
        assert load_page(temp_pages_dir, page_id).title == "Final"

    def test_saved_file_is_json(self, temp_pages_dir):
        page_id = save_page(temp_pages_dir, _mixed_page())

        data = json.loads((get_pages_dir(temp_pages_dir) / f"page_{page_id}.sbpage").read_text(encoding="utf-8"))

        assert data["id"] == page_id
        assert len(data["items"]) == 3

    def test_load_round_trip(self, temp_pages_dir):
        page = _mixed_page()
        page_id = save_page(temp_pages_dir, page)

        loaded = load_page(temp_pages_dir, page_id)

        assert loaded.page_id == page_id
        assert loaded.title == page.title
        assert loaded.last_modified == page.last_modified
        _assert_items_equal(loaded.items, page.items)

    def test_load_missing_page(self, temp_pages_dir):
        assert load_page(temp_pages_dir, 42) is None

    def test_load_unreadable_page(self, temp_pages_dir):
        (get_pages_dir(temp_pages_dir) / "page_7.sbpage").write_text("not valid json")
        assert load_page(temp_pages_dir, 7) is None

    def test_load_all_newest_first(self, temp_pages_dir):
        for title in ("A", "B", "C"):
            save_page(temp_pages_dir, ScrapbookPage(title=title))

        pages_dir = get_pages_dir(temp_pages_dir)
        for page_id, modified in ((1, 300), (2, 100), (3, 200)):
            path = pages_dir / f"page_{page_id}.sbpage"
            data = json.loads(path.read_text(encoding="utf-8"))
            data["lastModified"] = modified
            path.write_text(json.dumps(data), encoding="utf-8")

        titles = [page.title for page in load_all_pages(temp_pages_dir)]

        assert titles == ["A", "C", "B"]

    def test_load_all_skips_unreadable(self, temp_pages_dir):
        save_page(temp_pages_dir, ScrapbookPage(title="Good"))
        (get_pages_dir(temp_pages_dir) / "page_9.sbpage").write_text("{broken")

        assert [page.title for page in load_all_pages(temp_pages_dir)] == ["Good"]

    def test_ignores_other_files(self, temp_pages_dir):
        pages_dir = get_pages_dir(temp_pages_dir)
        (pages_dir / "notes.txt").touch()
        (pages_dir / "page_1.json").touch()

        assert page_count(temp_pages_dir) == 0

    def test_delete_page(self, temp_pages_dir):
        page_id = save_page(temp_pages_dir, ScrapbookPage(title="Gone"))

        assert delete_page(temp_pages_dir, page_id)
        assert not delete_page(temp_pages_dir, page_id)
        assert load_page(temp_pages_dir, page_id) is None
        assert page_count(temp_pages_dir) == 0

    def test_ids_continue_after_delete(self, temp_pages_dir):
        save_page(temp_pages_dir, ScrapbookPage(title="One"))
        save_page(temp_pages_dir, ScrapbookPage(title="Two"))
        delete_page(temp_pages_dir, 1)

        assert save_page(temp_pages_dir, ScrapbookPage(title="Three")) == 3


class TestPageStore:
    """Tests for the PageStore wrapper."""

    def test_store_operations(self, temp_pages_dir):
        store = PageStore(temp_pages_dir)
        page = ScrapbookPage(title="Stored")

        page_id = store.save(page)

        assert store.pages_dir == temp_pages_dir / "Pages"
        assert store.count() == 1
        assert store.load(page_id).title == "Stored"
        assert [p.page_id for p in store.load_all()] == [page_id]
        assert store.delete(page_id)
        assert store.count() == 0
