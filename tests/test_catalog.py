"""Tests for the catalog."""

import pytest

from vidscore.catalog import Catalog, CatalogFilter, sort_records
from vidscore.config import FilterConfig, ScoringSettings
from vidscore.errors import FetchError, ValidationError

WATCH_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


class TestAddUrl:
    """Test adding videos by URL."""

    def test_add_url_fetches_and_appends(self, fetcher):
        catalog = Catalog()
        record = catalog.add_url(WATCH_URL + "&t=42s", fetcher)

        assert len(catalog) == 1
        assert record.url == WATCH_URL
        assert record.views == 1_500_000
        assert record.title == "Never Gonna Give You Up"
        assert record.is_scored is False
        assert fetcher.calls == ["dQw4w9WgXcQ"]

    def test_duplicate_url_rejected(self, fetcher):
        """The same video under another URL form leaves the catalog at length 1."""
        catalog = Catalog()
        catalog.add_url(WATCH_URL, fetcher)

        with pytest.raises(ValidationError, match="already"):
            catalog.add_url("https://youtu.be/dQw4w9WgXcQ?t=10", fetcher)
        with pytest.raises(ValidationError, match="already"):
            catalog.add_url(WATCH_URL, fetcher)

        assert len(catalog) == 1
        assert fetcher.calls == ["dQw4w9WgXcQ"]

    def test_invalid_url_rejected_without_fetch(self, fetcher):
        catalog = Catalog()
        with pytest.raises(ValidationError, match="Invalid YouTube URL"):
            catalog.add_url("https://vimeo.com/1234", fetcher)
        assert len(catalog) == 0
        assert fetcher.calls == []

    def test_fetch_failure_leaves_catalog_unchanged(self, fetcher, failing_fetcher):
        catalog = Catalog()
        catalog.add_url(WATCH_URL, fetcher)
        before = catalog.records

        with pytest.raises(FetchError):
            catalog.add_url("https://www.youtube.com/shorts/aqz-KE-bpKQ", failing_fetcher)

        assert catalog.records == before

    def test_unknown_video(self, fetcher):
        catalog = Catalog()
        with pytest.raises(FetchError, match="not found"):
            catalog.add_url("https://youtu.be/AAAAAAAAAAA", fetcher)
        assert len(catalog) == 0


class TestAddManual:
    """Test manual entries."""

    def test_add_manual(self, now):
        catalog = Catalog()
        record = catalog.add_manual("Launch trailer", 12_000, 300, 40, 2023, now=now)
        assert record.publish_year == 2023
        assert record.url is None
        assert len(catalog) == 1

    def test_negative_counters_rejected(self, now):
        catalog = Catalog()
        with pytest.raises(ValidationError, match="Invalid manual entry"):
            catalog.add_manual("Bad", -5, 0, 0, 2023, now=now)
        assert len(catalog) == 0

    def test_blank_title_rejected(self, now):
        with pytest.raises(ValidationError, match="title"):
            Catalog().add_manual("   ", 1, 0, 0, 2023, now=now)

    def test_future_year_rejected(self, now):
        with pytest.raises(ValidationError, match="future"):
            Catalog().add_manual("Soon", 1, 0, 0, now.year + 1, now=now)

    @pytest.mark.parametrize("year", [0, -1])
    def test_year_out_of_range_rejected(self, now, year):
        catalog = Catalog()
        with pytest.raises(ValidationError, match="out of range"):
            catalog.add_manual("Old clip", 100, 1, 0, year, now=now)
        assert len(catalog) == 0

    def test_duplicate_title_rejected(self, now):
        catalog = Catalog()
        catalog.add_manual("Trailer", 1, 0, 0, 2023, now=now)
        with pytest.raises(ValidationError):
            catalog.add_manual("trailer ", 2, 0, 0, 2023, now=now)
        assert len(catalog) == 1


class TestMutation:
    """Test remove, replace, clear and compute."""

    def test_remove(self, make_record):
        record = make_record()
        catalog = Catalog([record])
        assert catalog.remove(record.id) is True
        assert catalog.remove(record.id) is False
        assert len(catalog) == 0

    def test_replace_and_clear(self, make_record):
        catalog = Catalog([make_record()])
        replacement = [make_record(views=1), make_record(views=2)]
        catalog.replace(replacement, show_results=True)
        assert catalog.records == replacement
        assert catalog.show_results is True

        catalog.clear()
        assert len(catalog) == 0
        assert catalog.show_results is False

    def test_compute_scores_everything(self, make_record, now):
        catalog = Catalog([make_record(), make_record(views=50)])
        catalog.compute(now=now)
        assert catalog.show_results is True
        assert all(r.is_scored for r in catalog)
        assert catalog.policy_name == "feqt"

    def test_compute_empty_catalog(self, now):
        with pytest.raises(ValidationError, match="at least one"):
            Catalog().compute(now=now)

    def test_compute_with_settings(self, make_record, now):
        catalog = Catalog([make_record()])
        catalog.compute(now=now, config=ScoringSettings(policy="bayesian"))
        assert catalog.policy_name == "bayesian"

    def test_records_is_a_copy(self, make_record):
        catalog = Catalog([make_record()])
        catalog.records.clear()
        assert len(catalog) == 1


class TestFilterAndSort:
    """Test filtered, sorted and ranked views."""

    def _scored_catalog(self, make_record, now):
        catalog = Catalog(
            [
                make_record(views=100_000, likes=5_000, comments=400, days=5, title="great"),
                make_record(views=300, likes=30, comments=3, days=5, title="tiny"),
                make_record(views=80_000, likes=100, comments=2, days=5, title="unloved"),
                make_record(views=20_000, likes=600, comments=40, days=300, title="old"),
            ]
        )
        catalog.compute(now=now)
        return catalog

    def test_low_engagement_filter(self, make_record, now):
        catalog = self._scored_catalog(make_record, now)
        titles = [r.title for r in catalog.filtered(CatalogFilter(low_engagement=True))]
        assert "unloved" not in titles
        assert {"great", "tiny", "old"} <= set(titles)

    def test_low_views_filter(self, make_record, now):
        catalog = self._scored_catalog(make_record, now)
        titles = [r.title for r in catalog.filtered(CatalogFilter(low_views=True))]
        assert "tiny" not in titles
        assert len(titles) == 3

    def test_custom_thresholds(self, make_record, now):
        catalog = self._scored_catalog(make_record, now)
        strict = CatalogFilter(low_views=True, thresholds=FilterConfig(min_views=50_000))
        assert {r.title for r in catalog.filtered(strict)} == {"great", "unloved"}

    def test_unscored_records_pass_filters(self, make_record):
        catalog = Catalog([make_record(views=1, likes=0, comments=0)])
        assert len(catalog.filtered(CatalogFilter(low_engagement=True, low_views=True))) == 1

    def test_sort_desc_is_reverse_of_asc(self, make_record, now):
        catalog = self._scored_catalog(make_record, now)
        ascending = catalog.sorted(ascending=True)
        descending = catalog.sorted(ascending=False)

        assert descending == list(reversed(ascending))
        scores = [r.normalized_score for r in ascending]
        assert scores == sorted(scores)

    def test_sort_with_ties(self, make_record, now):
        """Equal scores keep insertion order ascending and reverse it descending."""
        first = make_record(title="first")
        second = make_record(title="second")
        catalog = Catalog([first, second])
        catalog.compute(now=now)

        ascending = [r.title for r in catalog.sorted(ascending=True)]
        descending = [r.title for r in catalog.sorted(ascending=False)]
        assert ascending == ["first", "second"]
        assert descending == ["second", "first"]

    def test_unscored_sort_below_scored(self, make_record, now):
        catalog = Catalog([make_record(title="scored")])
        catalog.compute(now=now)
        catalog.add(make_record(title="late", views=3))

        assert [r.title for r in catalog.sorted(ascending=True)] == ["late", "scored"]
        assert [r.title for r in catalog.sorted()] == ["scored", "late"]

    def test_ranked_honors_policy_direction(self, now):
        catalog = Catalog()
        catalog.add_manual("Niche", 1_000, 80, 20, 2024, now=now)
        catalog.add_manual("Viral", 2_000_000, 10_000, 500, 2024, now=now)
        catalog.compute(now=now, config=ScoringSettings(policy="bayesian"))

        ranked = catalog.ranked()
        assert ranked[0].normalized_score <= ranked[-1].normalized_score
        assert ranked == catalog.sorted(ascending=True)

    def test_sort_records_function(self, make_record, now):
        catalog = self._scored_catalog(make_record, now)
        assert sort_records(catalog.records) == catalog.sorted()
