#!/usr/bin/env python
"""Step 1: Aggregate - unit tests"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from feedwatch.errors import ParseFailure
from feedwatch.S1_aggregate import rss


RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:jobs="http://jobs.perl.org/rss/">
  <channel>
    <title>  jobs.perl.org  </title>
    <link>http://jobs.perl.org/</link>
    <description>Perl jobs</description>
    <item>
      <title>Part Time Perl</title>
      <link>http://jobs.perl.org/job/950</link>
      <description>Brian Koontz - Dallas</description>
      <jobs:company_name>Brian Koontz</jobs:company_name>
    </item>
    <item>
      <link>http://jobs.perl.org/job/949</link>
      <description>Only a description here</description>
    </item>
  </channel>
</rss>
"""


class TestParsePayload:
    """Parsing raw feed text"""

    def test_entries_in_feed_order(self):
        """Entries keep document order"""
        parsed = rss.parse_payload(RSS)
        assert [e.link for e in parsed.entries] == [
            "http://jobs.perl.org/job/950",
            "http://jobs.perl.org/job/949",
        ]

    def test_core_fields(self):
        """title/link/description are mapped"""
        entry = rss.parse_payload(RSS).entries[0]
        assert entry.title == "Part Time Perl"
        assert entry.description == "Brian Koontz - Dallas"

    def test_missing_title_is_none(self):
        """Items without a title get None"""
        entry = rss.parse_payload(RSS).entries[1]
        assert entry.title is None
        assert entry.description == "Only a description here"

    def test_extensions_keep_other_fields(self):
        """Namespaced elements end up in extensions"""
        entry = rss.parse_payload(RSS).entries[0]
        assert "title" not in entry.extensions
        assert any("company_name" in key for key in entry.extensions)

    def test_channel_metadata(self):
        """Channel title and link are exposed"""
        parsed = rss.parse_payload(RSS)
        assert parsed.title.strip() == "jobs.perl.org"
        assert parsed.link == "http://jobs.perl.org/"

    def test_atom(self):
        """Atom feeds parse too"""
        atom = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example</title>
  <id>urn:example</id>
  <updated>2024-01-01T00:00:00Z</updated>
  <entry>
    <title>Atom entry</title>
    <link href="http://example.com/1"/>
    <id>urn:example:1</id>
    <updated>2024-01-01T00:00:00Z</updated>
    <summary>Summary</summary>
  </entry>
</feed>
"""
        parsed = rss.parse_payload(atom)
        assert parsed.entries[0].title == "Atom entry"
        assert parsed.entries[0].link == "http://example.com/1"

    def test_empty_channel_is_not_a_failure(self):
        """A valid feed with no items parses to zero entries"""
        parsed = rss.parse_payload(
            '<rss version="2.0"><channel><title>Empty</title></channel></rss>'
        )
        assert parsed.entries == []

    def test_garbage_fails(self):
        """Non-feed text raises ParseFailure"""
        with pytest.raises(ParseFailure):
            rss.parse_payload("this is not a feed")

    def test_truncated_xml_fails(self):
        """Broken XML raises ParseFailure"""
        with pytest.raises(ParseFailure):
            rss.parse_payload(RSS[: len(RSS) // 2])

    def test_empty_payload_fails(self):
        """Empty or missing payload raises ParseFailure"""
        with pytest.raises(ParseFailure):
            rss.parse_payload("")
        with pytest.raises(ParseFailure):
            rss.parse_payload(None)

    def test_payload_is_never_treated_as_url(self):
        """A URL-looking payload is parsed as text, not fetched"""
        with patch.object(rss.httpx, "get") as mock_get:
            with pytest.raises(ParseFailure):
                rss.parse_payload("http://example.com/feed.xml")
        mock_get.assert_not_called()


class TestFetch:
    """Downloading a feed"""

    def test_returns_body(self):
        """200 responses return the text"""
        resp = MagicMock(status_code=200, text=RSS)
        with patch.object(rss.httpx, "get", return_value=resp) as mock_get:
            assert rss.fetch("http://jobs.perl.org/rss", timeout=5) == RSS
        assert mock_get.call_args.kwargs["timeout"] == 5
        assert mock_get.call_args.kwargs["follow_redirects"] is True

    def test_http_error_status(self):
        """Non-200 responses return None"""
        resp = MagicMock(status_code=503, text="")
        with patch.object(rss.httpx, "get", return_value=resp):
            assert rss.fetch("http://jobs.perl.org/rss") is None

    def test_transport_error(self):
        """Transport errors return None"""
        with patch.object(rss.httpx, "get", side_effect=httpx.ConnectError("boom")):
            assert rss.fetch("http://jobs.perl.org/rss") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
