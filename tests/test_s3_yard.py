"""Tests for the S3 yard."""

from datetime import timedelta

import pytest

from scrapyard.adapters import S3Yard
from scrapyard.adapters.s3_yard import parse_s3_url
from scrapyard.core.errors import InvalidYardError


class TestParseS3Url:
    """Tests for parse_s3_url."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("s3://bucket", ("bucket", "")),
            ("s3://bucket/", ("bucket", "")),
            ("s3://bucket/cache", ("bucket", "cache/")),
            ("s3://bucket/ci/cache/", ("bucket", "ci/cache/")),
        ],
    )
    def test_splits_bucket_and_prefix(self, url, expected):
        assert parse_s3_url(url) == expected

    @pytest.mark.parametrize("url", ["/tmp/yard", "s3://", "s3:///prefix"])
    def test_rejects_invalid_urls(self, url):
        with pytest.raises(InvalidYardError):
            parse_s3_url(url)


class TestSearch:
    """Tests for S3Yard.search."""

    def test_locator_is_an_s3_url(self, s3_yard):
        assert s3_yard.locator("build", ".tgz") == "s3://builds/cache/build.tgz"

    def test_no_match_returns_none(self, s3_yard, transport):
        transport.put("builds", "cache/other.tgz", b"x")

        assert s3_yard.search([s3_yard.locator("build", "*")]) is None

    def test_newest_listing_timestamp_wins(self, s3_yard, transport, clock):
        transport.put("builds", "cache/build-a.tgz", b"a", clock.now() - timedelta(hours=3))
        transport.put("builds", "cache/build-b.tgz", b"bb", clock.now() - timedelta(hours=1))
        transport.put("builds", "cache/build-c.tgz", b"c", clock.now() - timedelta(hours=2))

        entry = s3_yard.search([s3_yard.locator("build-", "*")])

        assert entry.locator == "s3://builds/cache/build-b.tgz"
        assert entry.size == 2

    def test_first_key_with_matches_shadows_newer_later_key(self, s3_yard, transport, clock):
        transport.put("builds", "cache/first.tgz", b"1", clock.now() - timedelta(days=5))
        transport.put("builds", "cache/second.tgz", b"2", clock.now())

        entry = s3_yard.search([s3_yard.locator("first", "*"), s3_yard.locator("second", "*")])

        assert entry.locator == "s3://builds/cache/first.tgz"

    def test_falls_through_to_later_key(self, s3_yard, transport):
        transport.put("builds", "cache/second.tgz", b"2")

        entry = s3_yard.search([s3_yard.locator("first", "*"), s3_yard.locator("second", "*")])

        assert entry.locator == "s3://builds/cache/second.tgz"

    def test_lists_the_bucket_once(self, s3_yard, transport):
        s3_yard.search([s3_yard.locator("a", "*"), s3_yard.locator("b", "*")])

        assert transport.calls == [("list", "builds", "cache/")]

    def test_ignores_objects_outside_the_yard_prefix(self, s3_yard, transport):
        transport.put("builds", "other/build.tgz", b"x")

        assert s3_yard.search([s3_yard.locator("build", "*")]) is None

    def test_fetch_downloads_into_staging(self, s3_yard, transport):
        transport.put("builds", "cache/build.tgz", b"payload")
        entry = s3_yard.search([s3_yard.locator("build", "*")])

        local = s3_yard.fetch(entry)

        assert local.parent == s3_yard.stage()
        assert local.read_bytes() == b"payload"


class TestCommit:
    """Tests for S3Yard.commit."""

    def test_uploads_staged_archive(self, s3_yard, transport):
        locator = s3_yard.locator("build", ".tgz")
        archive = s3_yard.staging_path(locator)
        archive.write_bytes(b"packed")

        entry = s3_yard.commit(archive, locator)

        assert entry.locator == "s3://builds/cache/build.tgz"
        assert entry.size == 6
        assert transport.objects[("builds", "cache/build.tgz")][0] == b"packed"

    def test_close_removes_staging(self, transport, logger, clock):
        yard = S3Yard("s3://builds", transport, logger, clock)
        staging = yard.stage()

        yard.close()

        assert not staging.exists()


class TestDelete:
    """Tests for S3Yard.delete."""

    def test_missing_object_is_a_no_op(self, s3_yard, transport):
        assert s3_yard.delete([s3_yard.locator("ghost", ".tgz")]) == 0
        assert not any(call[0] == "delete" for call in transport.calls)

    def test_removes_exactly_the_named_object(self, s3_yard, transport):
        transport.put("builds", "cache/build.tgz", b"x")
        transport.put("builds", "cache/build-extra.tgz", b"y")

        assert s3_yard.delete([s3_yard.locator("build", ".tgz")]) == 1
        assert list(transport.objects) == [("builds", "cache/build-extra.tgz")]


class TestEvict:
    """Tests for S3Yard.evict."""

    def test_removes_objects_older_than_max_age(self, s3_yard, transport, clock):
        transport.put("builds", "cache/old.tgz", b"x", clock.now() - timedelta(days=21))
        transport.put("builds", "cache/new.tgz", b"y", clock.now() - timedelta(days=1))

        removed = s3_yard.evict(timedelta(days=20))

        assert removed == ["s3://builds/cache/old.tgz"]
        assert list(transport.objects) == [("builds", "cache/new.tgz")]

    def test_is_idempotent(self, s3_yard, transport, clock):
        transport.put("builds", "cache/old.tgz", b"x", clock.now() - timedelta(days=21))

        s3_yard.evict(timedelta(days=20))

        assert s3_yard.evict(timedelta(days=20)) == []
