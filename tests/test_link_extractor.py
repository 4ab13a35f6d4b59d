# File: tests/test_link_extractor.py
from docs_to_pdf.crawler.link_extractor import extract_links, normalize_url


def test_relative_links_resolved_against_page_url():
    html = '<a href="intro">Intro</a><a href="/api/">API</a><a href="../up">Up</a>'
    links = extract_links(html, "https://docs.example.com/guide/start")
    assert links == [
        "https://docs.example.com/guide/intro",
        "https://docs.example.com/api/",
        "https://docs.example.com/up",
    ]


def test_anchor_mailto_and_javascript_skipped():
    html = (
        '<a href="#top">Top</a>'
        '<a href="mailto:a@b.c">Mail</a>'
        '<a href="javascript:void(0)">JS</a>'
        '<a href="">Empty</a>'
        '<a>No href</a>'
        '<a href="/ok">OK</a>'
    )
    assert extract_links(html, "https://docs.example.com/") == ["https://docs.example.com/ok"]


def test_fragments_stripped_and_duplicates_removed():
    html = '<a href="/guide">1</a><a href="/guide#anchor">2</a><a href="https://DOCS.example.com/guide">3</a>'
    assert extract_links(html, "https://docs.example.com/") == ["https://docs.example.com/guide"]


def test_external_links_kept_for_the_filter():
    html = '<a href="https://other.com/x">X</a><a href="ftp://docs.example.com/f">F</a>'
    assert extract_links(html, "https://docs.example.com/") == ["https://other.com/x"]


def test_normalize_url_keeps_path_and_query():
    assert normalize_url("HTTPS://Docs.Example.com/Guide/?b=2&a=1#sec") == "https://docs.example.com/Guide/?b=2&a=1"
