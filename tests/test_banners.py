"""
Tests for tag-driven advisory banners.
"""

from notebook_cells.banners import BannerKind, banners_for
from notebook_cells.notebook import Cell, CellType


class TestBannersFor:
    def test_parameters(self):
        assert banners_for({"parameters"}) == [BannerKind.PARAMETRIZED]

    def test_default_parameters(self):
        assert banners_for({"default parameters"}) == [BannerKind.DEFAULT_PARAMETERS]

    def test_both_in_fixed_order(self):
        assert banners_for({"default parameters", "parameters"}) == [
            BannerKind.PARAMETRIZED,
            BannerKind.DEFAULT_PARAMETERS,
        ]

    def test_empty(self):
        assert banners_for(set()) == []

    def test_other_tags_ignored(self):
        assert banners_for({"slow", "skip", "parameter"}) == []

    def test_accepts_any_iterable(self):
        assert banners_for(["parameters", "parameters"]) == [BannerKind.PARAMETRIZED]

    def test_independent_of_cell_type(self):
        for cell_type in CellType:
            cell = Cell(type=cell_type, metadata={"tags": ["parameters"]})
            assert banners_for(cell.tags) == [BannerKind.PARAMETRIZED]

    def test_banner_text(self):
        assert BannerKind.PARAMETRIZED.text == "Papermill - Parametrized"
        assert BannerKind.DEFAULT_PARAMETERS.text == "Papermill - Default Parameters"
