import pytest

from spinn3r.exceptions import ParseError
from spinn3r.feed import Page, RSSFeedParser


@pytest.fixture
def parser():
    return RSSFeedParser()


def test_parse_items_and_continuation(parser, page1_xml):
    page = parser.parse(page1_xml)

    assert isinstance(page, Page)
    assert len(page) == 2
    assert page.items[0]["title"] == "First post"
    assert page.items[0]["link"] == "http://example.org/blog/first-post"
    assert page.items[1]["title"] == "Second post"
    assert page.next_request_url == (
        "http://api.spinn3r.com/rss/permalink.getDelta"
        "?version=2.1.3&vendor=acme&limit=2&after_id=1002"
    )
    assert page.channel["title"] == "Spinn3r permalink.getDelta"


def test_parse_without_continuation(parser, page2_xml):
    page = parser.parse(page2_xml)

    assert len(page) == 1
    assert page.items[0]["title"] == "Third post"
    assert page.next_request_url is None


def test_parse_empty_page(parser, empty_xml):
    page = parser.parse(empty_xml)

    assert page.items == []
    assert page.next_request_url is not None


def test_parse_continuation_under_other_prefix(parser):
    content = b"""<?xml version="1.0"?>
<rss version="2.0" xmlns:tr="http://tailrank.com/ns/#api">
  <channel>
    <title>t</title>
    <tr:next_request_url>http://x/rss/m?version=2.1.3&amp;after_id=7</tr:next_request_url>
  </channel>
</rss>"""
    page = parser.parse(content)

    assert page.next_request_url == "http://x/rss/m?version=2.1.3&after_id=7"


def test_parse_garbage_raises(parser):
    with pytest.raises(ParseError):
        parser.parse(b"this is not a feed")
