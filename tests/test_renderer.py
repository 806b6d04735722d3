from feed_collector.core.types import DigestPage, Entry
from feed_collector.output.renderer import MarkdownRenderer, md_link_text, oneline


def _sample_entry(*, title: str, link: str = "https://example.com", description: str = "") -> Entry:
    return Entry(title=title, link=link, description=description, published="2025-02-28T10:00:00Z")


def test_render_weekly_page_lists_items() -> None:
    page = DigestPage(
        title="2025-09",
        user_name="juev",
        items=[
            _sample_entry(title="Article One", link="https://example.com/one", description="First desc"),
            _sample_entry(title="Article Two", link="https://example.com/two"),
        ],
        count=2,
    )

    text = MarkdownRenderer()(page)

    assert text.startswith("# 2025-09\n")
    assert "2 items saved by juev this week." in text
    assert "- [Article One](https://example.com/one) (2025-02-28)" in text
    assert "  > First desc" in text
    assert "- [Article Two](https://example.com/two) (2025-02-28)" in text


def test_render_summary_page_shows_total_count() -> None:
    page = DigestPage(
        title="Instapaper: Unread",
        user_name="juev",
        items=[_sample_entry(title="Latest")],
        count=7,
        updated="2025-03-01T00:00:00Z",
    )

    text = MarkdownRenderer(weekly_dir="weeks")(page, True)

    assert text.startswith("# Instapaper: Unread\n")
    assert "(1/7 items)" in text
    assert "Last updated 2025-03-01T00:00:00Z." in text
    assert "[weeks/](weeks/)" in text
    assert "[Latest]" in text


def test_render_does_not_html_escape_markdown() -> None:
    page = DigestPage(
        title="2025-09",
        user_name="",
        items=[_sample_entry(title="A & B <c>", link="https://example.com/?a=1&b=2")],
        count=1,
    )

    text = MarkdownRenderer()(page)

    assert "A & B <c>" in text
    assert "https://example.com/?a=1&b=2" in text
    assert "&amp;" not in text
    assert "anonymous" in text


def test_md_link_text_escapes_brackets() -> None:
    assert md_link_text("[PDF] Report") == "\\[PDF\\] Report"


def test_oneline_collapses_whitespace() -> None:
    assert oneline("  first line\n\n  second\tline ") == "first line second line"
