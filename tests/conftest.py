from __future__ import annotations

import pytest

SAMPLE_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:dc="http://purl.org/dc/elements/1.1/"
     xmlns:georss="http://www.georss.org/georss">
  <channel>
    <title>News Feed</title>
    <link>http://x/</link>
    <description>Latest stories</description>
    <item>
      <title>Breaking News</title>
      <dc:creator>J. Doe</dc:creator>
      <description>Full story</description>
      <link>http://x/1</link>
      <pubDate>Fri, 01 Mar 2024 10:00:00 GMT</pubDate>
      <source url="http://wire/rss">Wire Service</source>
      <category>world</category>
      <category>politics</category>
      <enclosure url="http://x/1.mp3" type="audio/mpeg" length="12345"/>
      <georss:point>48.8 2.3</georss:point>
    </item>
    <item>
      <title>Short note</title>
      <link>http://x/2</link>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def sample_rss() -> str:
    return SAMPLE_RSS
