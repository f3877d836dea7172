"""
Tests for list, grid and inline grid layouts.
"""
import pytest

from collectionkit.collection.keyboard import (
    GridKeyboardDelegate,
    ListKeyboardDelegate,
    SpatialKeyboardDelegate,
)
from collectionkit.collection.layout import (
    GridLayout,
    InlineGridLayout,
    LayoutKind,
    ListLayout,
    MeasurementError,
    MeasurementMode,
    column_count_for_width,
    create_layout,
)
from collectionkit.collection.models import Padding, Rect, Size


class TestListLayout:
    def test_positions_with_gap_and_padding(self, collection_of):
        layout = ListLayout(gap=10, padding=20)
        layout.set_items(collection_of(["a", "b"]))
        layout.update(400)

        first = layout.get_layout_info("a").rect
        assert (first.x, first.y, first.width) == (20, 20, 360)
        # Unmeasured items have zero height
        assert layout.get_layout_info("b").rect.y == 30

    def test_measured_heights(self, collection_of):
        layout = ListLayout(gap=10, padding=20)
        layout.set_items(collection_of(["a", "b"]))
        layout.update(400)
        layout.update_with_measurements({"a": 40, "b": Size(360, 60)})

        assert layout.get_item_rect("b") == Rect(20, 70, 360, 60)
        rows = layout.get_rows()
        assert [row.item_keys for row in rows] == [["a"], ["b"]]
        assert rows[1].y_end == 130
        assert layout.get_content_size().height == 150

    def test_empty_collection(self, collection_of):
        layout = ListLayout(padding=20)
        layout.set_items(collection_of([]))
        layout.update(400)
        assert layout.get_rows() == []
        assert layout.get_content_size().height == 0

    def test_no_info_before_update(self, collection_of):
        layout = ListLayout()
        layout.set_items(collection_of(["a"]))
        assert layout.get_layout_info("a") is None

    def test_measurement_info(self):
        layout = ListLayout(padding=Padding(0, 10, 0, 30))
        info = layout.get_measurement_info(400)
        assert info.mode == MeasurementMode.HEIGHT_ONLY
        assert info.constrained_width == 360

    def test_invalidate_forgets_heights(self, collection_of):
        layout = ListLayout()
        layout.set_items(collection_of(["a"]))
        layout.update(100)
        layout.update_with_measurements({"a": 40})
        layout.invalidate_measurements()
        layout.update(100)
        assert layout.get_item_rect("a").height == 0

    def test_keyboard_delegate(self, letters):
        assert isinstance(ListLayout().get_keyboard_delegate(letters), ListKeyboardDelegate)


class TestGridLayout:
    @pytest.mark.parametrize("width,expected", [(600, 2), (250, 1), (100, 1), (1000, 4), (648, 3)])
    def test_auto_column_count(self, width, expected):
        assert column_count_for_width(width, 200, 16) == expected

    def test_auto_columns_follow_width(self, collection_of):
        layout = GridLayout(min_item_width=200, gap=16)
        layout.set_items(collection_of(["a", "b", "c"]))
        layout.update(600)
        assert layout.columns == 2
        assert layout.item_width == 292
        layout.update(250)
        assert layout.columns == 1

    def test_unknown_width_keeps_current_columns(self, collection_of):
        layout = GridLayout(min_item_width=200, gap=16)
        layout.update(600)
        assert layout.column_count(None) == 2
        assert layout.column_count(0) == 2

    def test_fixed_columns(self, collection_of):
        layout = GridLayout(columns=3, gap=0)
        layout.set_items(collection_of([str(i) for i in range(7)]))
        layout.update(300)
        assert [row.item_keys for row in layout.get_rows()] == [["0", "1", "2"], ["3", "4", "5"], ["6"]]
        assert layout.get_item_rect("4").x == 100

    def test_row_height_is_tallest_member(self, collection_of):
        layout = GridLayout(columns=2, gap=10)
        layout.set_items(collection_of(["a", "b", "c"]))
        layout.update(210)
        layout.update_with_measurements({"a": 40, "b": 80, "c": 30})

        rows = layout.get_rows()
        assert [row.height for row in rows] == [80, 30]
        assert rows[1].y_start == 90
        assert layout.get_item_rect("c") == Rect(0, 90, 100, 30)
        assert layout.get_content_size().height == 120

    def test_keyboard_delegate_uses_width(self, collection_of):
        layout = GridLayout(min_item_width=200, gap=16)
        delegate = layout.get_keyboard_delegate(collection_of(["a"]), container_width=1000)
        assert isinstance(delegate, GridKeyboardDelegate)
        assert delegate.columns == 4


class TestInlineGridLayout:
    @pytest.fixture
    def six(self, collection_of):
        layout = InlineGridLayout(gap=16, item_width=100, item_height=50)
        layout.set_items(collection_of(["1", "2", "3", "4", "5", "6"]))
        return layout

    def test_rows_empty_before_measurements(self, six):
        six.update(348)
        assert six.get_rows() == []
        # Placeholder positions are still available
        assert six.get_item_rect("4") == Rect(0, 66, 100, 50)

    def test_wraps_measured_items(self, six):
        six.update(348)
        six.update_with_measurements({key: Size(100, 50) for key in "123456"})

        rows = six.get_rows()
        assert [row.item_keys for row in rows] == [["1", "2", "3"], ["4", "5", "6"]]
        assert rows[1].y_start == 66
        assert six.get_item_rect("3").x == 232

    def test_variable_sizes(self, six):
        six.update(348)
        six.update_with_measurements({
            "1": Size(200, 40), "2": Size(100, 60), "3": Size(300, 20),
            "4": Size(50, 50), "5": Size(50, 50), "6": Size(50, 50),
        })
        rows = six.get_rows()
        assert [row.item_keys for row in rows] == [["1", "2"], ["3"], ["4", "5", "6"]]
        assert [row.height for row in rows] == [60, 20, 50]

    def test_oversized_item_gets_own_row(self, six):
        six.update(348)
        six.update_with_measurements({"1": Size(500, 50), "2": Size(100, 50)})
        assert [row.item_keys for row in six.get_rows()] == [["1"], ["2"]]

    @pytest.mark.parametrize("size", [Size(0, 50), Size(100, 0)])
    def test_zero_size_is_rejected(self, six, size):
        six.update(348)
        with pytest.raises(MeasurementError):
            six.update_with_measurements({"1": size})

    def test_height_only_measurement_spans_width(self, six):
        six.update(348)
        six.update_with_measurements({"1": 30, "2": 30})
        assert [row.item_keys for row in six.get_rows()] == [["1"], ["2"]]

    def test_measurement_mode(self, six):
        assert six.get_measurement_info().mode == MeasurementMode.INTRINSIC

    def test_spatial_navigation_over_own_rects(self, six):
        six.update(348)
        six.update_with_measurements({key: Size(100, 50) for key in "123456"})
        delegate = six.get_keyboard_delegate(six.collection)
        assert isinstance(delegate, SpatialKeyboardDelegate)
        assert delegate.get_key_below("2") == "5"


class TestCreateLayout:
    @pytest.mark.parametrize("kind,cls", [
        ("list", ListLayout),
        (LayoutKind.GRID, GridLayout),
        ("inline_grid", InlineGridLayout),
    ])
    def test_kinds(self, kind, cls):
        assert isinstance(create_layout(kind), cls)

    def test_options_are_forwarded(self):
        layout = create_layout("grid", columns=3, gap=8)
        assert layout.columns == 3
        assert layout.get_gap() == 8

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            create_layout("masonry")
