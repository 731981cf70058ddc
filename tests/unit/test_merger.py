"""Tests for merging, validation and de-duplication."""

from datetime import datetime, timezone

from projectfolio.core.merger import merge
from projectfolio.core.normalizer import RemoteNormalizer
from projectfolio.models import BuildStats, CanonicalProject, RawRemoteRecord


def project(slug, source="local", **overrides):
    data = dict(
        slug=slug,
        title=slug.title(),
        source=source,
        status="in-progress",
        tier="mvp",
        visibility="ventures",
        pushed_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    data.update(overrides)
    return CanonicalProject(**data)


def remote(name, **overrides):
    data = dict(name=name, pushed_at="2024-02-01T00:00:00Z", url=f"https://github.com/o/{name}")
    data.update(overrides)
    return RemoteNormalizer().normalize(RawRemoteRecord(**data))


class TestMerge:
    """Test merge behaviour."""

    def test_concatenates_remote_first(self):
        result = merge([remote("r1"), remote("r2")], [project("l1")])
        assert [p.slug for p in result] == ["r1", "r2", "l1"]

    def test_remote_wins_slug_collision(self):
        stats = BuildStats()
        result = merge([remote("dup")], [project("dup", title="Local Dup")], stats)

        assert len(result) == 1
        assert result[0].source == "remote"
        assert result[0].title == "dup"
        assert stats.duplicates == 1

    def test_first_local_wins_among_locals(self):
        result = merge([], [project("x", title="First"), project("x", title="Second")])
        assert [p.title for p in result] == ["First"]

    def test_invalid_record_dropped(self):
        stats = BuildStats()
        broken = remote("broken").model_copy(update={"tier": "legendary"})
        result = merge([remote("ok"), broken], [], stats)

        assert [p.slug for p in result] == ["ok"]
        assert stats.invalid_records == 1
        assert stats.validation_errors[0].startswith("broken:")

    def test_record_without_push_time_kept(self):
        stats = BuildStats()
        result = merge([remote("empty", pushed_at=None)], [], stats)

        assert [p.slug for p in result] == ["empty"]
        assert result[0].pushed_at == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert stats.invalid_records == 0

    def test_nameless_remote_dropped(self):
        stats = BuildStats()
        result = merge([remote("")], [], stats)

        assert result == []
        assert stats.invalid_records == 1
        assert stats.validation_errors[0].startswith("<unnamed>:")

    def test_invalid_record_does_not_shadow_valid_duplicate(self):
        result = merge(
            [remote("dup").model_copy(update={"status": "shipped"})], [project("dup")]
        )
        assert len(result) == 1
        assert result[0].source == "local"

    def test_output_is_validated(self):
        result = merge([remote("r")], [])
        assert isinstance(result[0].pushed_at, datetime)

    def test_slugs_unique(self):
        remotes = [remote(n) for n in ["a", "b", "c"]]
        locals_ = [project(n) for n in ["b", "c", "d", "d"]]
        slugs = [p.slug for p in merge(remotes, locals_)]
        assert len(slugs) == len(set(slugs))
        assert slugs == ["a", "b", "c", "d"]
