"""Tests for settings and paper profiles."""

import pytest
from pydantic import ValidationError

from promptslip.config import (
    PAPER_58MM,
    PAPER_80MM,
    PaperProfile,
    Settings,
    get_paper_profile,
    get_settings,
)
from promptslip.errors import UnknownPaperProfile


class TestPaperProfile:
    """Tests for paper profiles."""

    @pytest.mark.parametrize("paper", [PAPER_58MM, PAPER_80MM])
    def test_columns_span_width(self, paper):
        assert paper.name_width + paper.qty_width + paper.total_width == paper.columns

    def test_58mm_layout(self):
        assert (PAPER_58MM.columns, PAPER_58MM.name_width, PAPER_58MM.qty_width, PAPER_58MM.total_width) == (32, 16, 8, 8)
        assert PAPER_58MM.label_width == 24
        assert PAPER_58MM.half == 16

    def test_lookup(self):
        assert get_paper_profile("80mm") is PAPER_80MM

    def test_unknown(self):
        with pytest.raises(UnknownPaperProfile) as exc_info:
            get_paper_profile("110mm")
        assert isinstance(exc_info.value, KeyError)
        assert "110mm" in str(exc_info.value)

    def test_inconsistent_widths(self):
        with pytest.raises(ValueError):
            PaperProfile(name="bad", columns=32, name_width=20, qty_width=8, total_width=8)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.paper == "58mm"
        assert settings.codec == "cp874"
        assert settings.feed_lines == 3
        assert settings.qr.error_correction == "M"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("PROMPTSLIP_PAPER", "80mm")
        monkeypatch.setenv("PROMPTSLIP_FEED_LINES", "5")
        settings = Settings(_env_file=None)
        assert settings.paper == "80mm"
        assert settings.feed_lines == 5

    def test_feed_lines_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, feed_lines=0)

    def test_unknown_paper(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, paper="110mm")

    def test_cached(self):
        assert get_settings() is get_settings()
