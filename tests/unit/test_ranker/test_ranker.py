"""Unit tests for ranking and digest assembly."""

import pytest
from pydantic import ValidationError

from src.classifier.models import ClassifiedItem, InclusionReason, Tier
from src.heat.aggregator import aggregate_heat
from src.heat.models import HeatEntry
from src.intake.models import RawItem, SourceKind
from src.ranker.models import Digest
from src.ranker.ranker import build_digest, build_histogram, rank_items, truncate


def _make_classified(
    identifier: str,
    quality: float,
    tier: Tier | None = Tier.SECONDARY,
    tags: tuple[str, ...] = ("TECH",),
    signal_tags: tuple[str, ...] = (),
    topics: tuple[str, ...] = (),
) -> ClassifiedItem:
    """Create a ClassifiedItem; a None tier means excluded."""
    included = tier is not None
    if not included:
        reason = InclusionReason.EXCLUDED
    elif tier == Tier.PRIMARY:
        reason = InclusionReason.QUALITY_THRESHOLD
    else:
        reason = InclusionReason.HEURISTIC_VELOCITY
    return ClassifiedItem(
        item=RawItem(
            identifier=identifier,
            quality_metric=quality,
            source_kind=SourceKind.REPOSITORY,
        ),
        tags=tags,
        signal_tags=signal_tags,
        topics=topics,
        tier=tier,
        inclusion_reason=reason,
        included=included,
    )


class TestRankItems:
    """Tests for rank_items."""

    @pytest.mark.unit
    def test_primary_before_secondary(self) -> None:
        """PRIMARY items precede SECONDARY regardless of quality."""
        ranked = rank_items(
            [
                _make_classified("s", 1000),
                _make_classified("p", 0, tier=Tier.PRIMARY),
            ]
        )

        assert [c.identifier for c in ranked] == ["p", "s"]

    @pytest.mark.unit
    def test_descending_quality_within_tier(self) -> None:
        """Quality is non-increasing within a tier."""
        ranked = rank_items(
            [
                _make_classified("a", 5),
                _make_classified("b", 50),
                _make_classified("c", 20),
            ]
        )

        assert [c.identifier for c in ranked] == ["b", "c", "a"]

    @pytest.mark.unit
    def test_stable_for_equal_keys(self) -> None:
        """Equal keys keep input order."""
        ranked = rank_items([_make_classified(x, 7) for x in "xyz"])

        assert [c.identifier for c in ranked] == ["x", "y", "z"]


class TestTruncate:
    """Tests for truncate."""

    @pytest.mark.unit
    def test_prefix_cut(self) -> None:
        """Truncation keeps the prefix in order."""
        items = [_make_classified(str(i), 10 - i) for i in range(5)]

        assert [c.identifier for c in truncate(items, 3)] == ["0", "1", "2"]

    @pytest.mark.unit
    def test_limit_larger_than_input(self) -> None:
        """A large limit keeps everything."""
        items = [_make_classified("a", 1)]

        assert truncate(items, 20) == items

    @pytest.mark.unit
    def test_zero_limit(self) -> None:
        """A zero limit keeps nothing."""
        assert truncate([_make_classified("a", 1)], 0) == []


class TestBuildHistogram:
    """Tests for the strategy histogram."""

    @pytest.mark.unit
    def test_counts_keeper_and_signal_tags_of_all_items(self) -> None:
        """Excluded items and signal-only tags are counted."""
        histogram = build_histogram(
            [
                _make_classified("a", 10, tags=("TECH",), signal_tags=("SKILLS",)),
                _make_classified("b", 1, tier=None, tags=("TECH",)),
                _make_classified("c", 1, tier=None, tags=(), signal_tags=("JOBS",)),
            ]
        )

        assert histogram == {"TECH": 2, "SKILLS": 1, "JOBS": 1}
        assert list(histogram) == ["TECH", "SKILLS", "JOBS"]

    @pytest.mark.unit
    def test_untagged_items_counted_as_uncategorized(self) -> None:
        """Items no rule matched land in the uncategorized bucket."""
        items = [
            _make_classified("a", 10, tags=("TECH",)),
            _make_classified("b", 1, tier=None, tags=()),
            _make_classified("c", 1, tier=None, tags=(), signal_tags=("JOBS",)),
            _make_classified("d", 0, tier=None, tags=()),
        ]

        histogram = build_histogram(items, uncategorized_tag="VIRAL_UNCATEGORIZED")

        assert histogram == {"TECH": 1, "VIRAL_UNCATEGORIZED": 2, "JOBS": 1}
        assert list(histogram) == ["TECH", "VIRAL_UNCATEGORIZED", "JOBS"]

    @pytest.mark.unit
    def test_no_bucket_when_disabled(self) -> None:
        """Without an uncategorized tag, untagged items add nothing."""
        histogram = build_histogram([_make_classified("b", 1, tier=None, tags=())])

        assert histogram == {}


class TestBuildDigest:
    """Tests for build_digest."""

    @pytest.mark.unit
    def test_counts_before_truncation(self) -> None:
        """included_count reflects acceptance, not the retained size."""
        classified = [_make_classified(str(i), i) for i in range(5)] + [
            _make_classified("x", 0, tier=None)
        ]

        digest = build_digest(classified, aggregate_heat(classified), max_items=2, max_top_tags=10)

        assert digest.scanned_count == 6
        assert digest.included_count == 5
        assert [c.identifier for c in digest.items] == ["4", "3"]

    @pytest.mark.unit
    def test_heat_rankings(self) -> None:
        """Topic and strategy heat are both bounded."""
        classified = [
            _make_classified("a", 9, topics=("Rust", "Zig")),
            _make_classified("b", 1, topics=("Zig",)),
        ]

        digest = build_digest(classified, aggregate_heat(classified), max_items=20, max_top_tags=1)

        assert digest.top_tags == (HeatEntry(tag="Zig", accumulated_score=12, occurrences=2),)
        assert digest.top_strategy_tags == (HeatEntry(tag="TECH", accumulated_score=12, occurrences=2),)

    @pytest.mark.unit
    def test_empty(self) -> None:
        """No items produce an empty digest."""
        digest = build_digest([], aggregate_heat([]), max_items=20, max_top_tags=10)

        assert digest == Digest()


class TestDigest:
    """Tests for Digest invariants and checksum."""

    @pytest.mark.unit
    def test_checksum_stable(self) -> None:
        """Equal digests have equal checksums."""
        classified = [_make_classified("a", 3, topics=("X",))]

        first = build_digest(classified, aggregate_heat(classified), 20, 10)
        second = build_digest(classified, aggregate_heat(classified), 20, 10)

        assert first.checksum() == second.checksum()
        assert len(first.checksum()) == 64

    @pytest.mark.unit
    def test_duplicate_identifiers_rejected(self) -> None:
        """Digest items are unique by identifier."""
        item = _make_classified("a", 3)

        with pytest.raises(ValidationError):
            Digest(included_count=2, items=(item, item))

    @pytest.mark.unit
    def test_excluded_item_rejected(self) -> None:
        """Only included items may appear."""
        with pytest.raises(ValidationError):
            Digest(included_count=1, items=(_make_classified("a", 3, tier=None),))

    @pytest.mark.unit
    def test_unsorted_heat_rejected(self) -> None:
        """Heat entries must be in descending order."""
        with pytest.raises(ValidationError):
            Digest(
                top_tags=(
                    HeatEntry(tag="a", accumulated_score=1, occurrences=1),
                    HeatEntry(tag="b", accumulated_score=2, occurrences=1),
                )
            )
