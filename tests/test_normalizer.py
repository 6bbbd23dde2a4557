import random
from datetime import datetime, timedelta, timezone

from newsagg.ingestion.models import FeedItem, MediaRef
from newsagg.ingestion.normalizer import (
    ArticleNormalizer,
    parse_published,
    resolve_content,
    resolve_image_url,
    resolve_summary,
)
from newsagg.models import Category, Language


def make_item(**overrides):
    fields = {
        "title": "Election results announced",
        "link": "https://example.com/story",
        "description": "Short description",
        "pub_date": "Mon, 19 Oct 2026 10:00:00 GMT",
    }
    fields.update(overrides)
    return FeedItem(**fields)


def test_media_content_wins_over_enclosure():
    item = make_item(
        media_content=[MediaRef(url="https://img.example.com/media.jpg")],
        enclosure_url="https://img.example.com/enclosure.jpg",
        media_thumbnail=[MediaRef(url="https://img.example.com/thumb.jpg")],
    )

    assert resolve_image_url(item) == "https://img.example.com/media.jpg"


def test_enclosure_wins_over_thumbnail():
    item = make_item(
        enclosure_url="https://img.example.com/enclosure.jpg",
        media_thumbnail=[MediaRef(url="https://img.example.com/thumb.jpg")],
    )

    assert resolve_image_url(item) == "https://img.example.com/enclosure.jpg"


def test_thumbnail_used_last():
    item = make_item(media_thumbnail=[MediaRef(url="https://img.example.com/thumb.jpg")])

    assert resolve_image_url(item) == "https://img.example.com/thumb.jpg"


def test_media_content_without_url_falls_through():
    item = make_item(
        media_content=[MediaRef(url=None, medium="video")],
        enclosure_url="https://img.example.com/enclosure.jpg",
    )

    assert resolve_image_url(item) == "https://img.example.com/enclosure.jpg"


def test_no_image():
    assert resolve_image_url(make_item()) is None


def test_summary_falls_back_to_snippet():
    assert resolve_summary(make_item(description=None, snippet="Snippet")) == "Snippet"
    assert resolve_summary(make_item(description=None)) == ""


def test_content_resolution_order():
    item = make_item(content_encoded="<p>Encoded</p>", content="Content")
    assert resolve_content(item) == "<p>Encoded</p>"
    assert resolve_content(make_item(content="Content")) == "Content"
    assert resolve_content(make_item()) == "Short description"
    assert resolve_content(make_item(description=None)) == ""


def test_parse_rfc822_date():
    parsed = parse_published("Mon, 19 Oct 2026 10:00:00 +0300")
    assert parsed == datetime(2026, 10, 19, 7, 0, tzinfo=timezone.utc)


def test_parse_iso_date():
    parsed = parse_published("2026-10-19T10:00:00Z")
    assert parsed == datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)


def test_parse_bad_date():
    assert parse_published("not a date") is None
    assert parse_published("") is None
    assert parse_published(None) is None


def test_normalize_builds_draft(english_feed, now):
    item = make_item(media_content=[MediaRef(url="https://img.example.com/m.jpg")])

    draft = ArticleNormalizer(rng=random.Random(7)).normalize(item, english_feed, now)

    assert draft.title == "Election results announced"
    assert draft.url == "https://example.com/story"
    assert draft.summary == "Short description"
    assert draft.content == "Short description"
    assert draft.image_url == "https://img.example.com/m.jpg"
    assert draft.source == "Example News"
    assert draft.language == Language.EN
    assert draft.category == Category.POLITICS
    assert draft.published_at == datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)


def test_language_and_source_come_from_feed(arabic_feed, now):
    draft = ArticleNormalizer().normalize(make_item(title="Hello"), arabic_feed, now)

    assert draft.language == Language.AR
    assert draft.source == "Example Arabic"


def test_missing_title_uses_placeholder(english_feed, now):
    draft = ArticleNormalizer().normalize(make_item(title=None), english_feed, now)

    assert draft.title == "Untitled"


def test_missing_link_discards_item(english_feed, now):
    assert ArticleNormalizer().normalize(make_item(link=None), english_feed, now) is None
    assert ArticleNormalizer().normalize(make_item(link="   "), english_feed, now) is None


def test_unparseable_date_falls_back_to_sync_time(english_feed, now):
    draft = ArticleNormalizer().normalize(make_item(pub_date="yesterday-ish"), english_feed, now)

    assert draft.published_at == now


def test_missing_date_falls_back_to_sync_time(english_feed, now):
    draft = ArticleNormalizer().normalize(make_item(pub_date=None), english_feed, now)

    assert draft.published_at == now


def test_location_is_within_display_bounds(english_feed, now):
    normalizer = ArticleNormalizer(rng=random.Random(42))

    for _ in range(50):
        location = normalizer.normalize(make_item(), english_feed, now).location
        assert -80 <= location.lat <= 80
        assert -180 <= location.lng <= 180
        assert location.label == "News Location"


def test_seeded_rng_is_deterministic(english_feed, now):
    first = ArticleNormalizer(rng=random.Random(1)).normalize(make_item(), english_feed, now)
    second = ArticleNormalizer(rng=random.Random(1)).normalize(make_item(), english_feed, now)

    assert first.location == second.location


def test_old_item_keeps_its_own_date(english_feed, now):
    old = now - timedelta(days=3)
    item = make_item(pub_date=old.strftime("%a, %d %b %Y %H:%M:%S +0000"))

    assert ArticleNormalizer().normalize(item, english_feed, now).published_at == old


def test_parse_colon_offset_date():
    parsed = parse_published("Sun, 18 Oct 2026 14:00:00 +03:00")
    assert parsed == datetime(2026, 10, 18, 11, 0, tzinfo=timezone.utc)


def test_parse_space_separated_date_with_offset():
    parsed = parse_published("2026-10-19 10:00:00 +0300")
    assert parsed == datetime(2026, 10, 19, 7, 0, tzinfo=timezone.utc)


def test_parsed_date_wins_over_raw_string(english_feed, now):
    published = now - timedelta(hours=5)
    item = make_item(published=published, pub_date="not a date")

    assert ArticleNormalizer().normalize(item, english_feed, now).published_at == published


def test_nul_characters_are_scrubbed(english_feed, now):
    item = make_item(
        title="Bad \x00 title",
        link="https://example.com/\x00story",
        description="Desc \x00",
        content="Body \x00",
    )

    draft = ArticleNormalizer().normalize(item, english_feed, now)

    assert draft.title == "Bad  title"
    assert draft.url == "https://example.com/story"
    assert draft.summary == "Desc "
    assert draft.content == "Body "


def test_title_of_only_nul_uses_placeholder(english_feed, now):
    draft = ArticleNormalizer().normalize(make_item(title="\x00"), english_feed, now)

    assert draft.title == "Untitled"
