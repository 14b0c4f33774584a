from __future__ import annotations

from fakes import server_page

from aniembed.models import ServerEntry
from aniembed.parser import PageParser


def test_parse_reads_servers_sorted_by_index() -> None:
    html = server_page(
        (2, "Streamtape", "https://st.test/e/2"),
        (0, "Filemoon", "https://fm.test/e/0"),
        (1, "Voe", "//voe.test/e/1"),
    )
    servers = PageParser().parse(html, "https://anime.test/episode/x-1x1/")

    assert [s.index for s in servers] == [0, 1, 2]
    assert [s.name for s in servers] == ["Filemoon", "Voe", "Streamtape"]
    assert servers[1].url == "//voe.test/e/1"


def test_parse_without_option_blocks_returns_empty_list() -> None:
    assert PageParser().parse("<html><body><p>Coming soon</p></body></html>") == []
    assert PageParser().parse("") == []


def test_parse_defaults_blank_names() -> None:
    html = """
    <a href="#options-4"><span class="server">   </span></a>
    <div id="options-4"><iframe src="https://a.test/4"></iframe></div>
    <div id="options-7"><iframe src="https://a.test/7"></iframe></div>
    """
    servers = PageParser().parse(html)
    assert [s.name for s in servers] == ["Server 4", "Server 7"]


def test_parse_falls_back_to_data_src_and_skips_empty_frames() -> None:
    html = """
    <div id="options-0"><iframe data-src="https://lazy.test/0"></iframe></div>
    <div id="options-1"><iframe></iframe></div>
    <div id="options-2"><p>no frame</p></div>
    <div id="options-x"><iframe src="https://bad.test"></iframe></div>
    """
    servers = PageParser().parse(html)
    assert len(servers) == 1
    assert servers[0].index == 0
    assert servers[0].url == "https://lazy.test/0"


def test_parse_keeps_document_order_for_duplicate_indices() -> None:
    html = """
    <div id="options-3"><iframe src="https://first.test"></iframe></div>
    <div id="options-1"><iframe src="https://one.test"></iframe></div>
    <div id="options-3"><iframe src="https://second.test"></iframe></div>
    """
    servers = PageParser().parse(html)
    assert [s.url for s in servers] == ["https://one.test", "https://first.test", "https://second.test"]


def test_server_entry_serializes_index_as_server() -> None:
    entry = ServerEntry(index=2, name="", url="https://a.test")
    assert entry.name == "Server 2"
    assert entry.model_dump(by_alias=True) == {"server": 2, "name": "Server 2", "url": "https://a.test"}


def test_parse_skips_option_ids_with_trailing_junk() -> None:
    html = """
    <div id='options-1"x'><iframe src="https://a.test/1"></iframe></div>
    <a href="#options-2"><span class="server">Voe</span></a>
    <div id="options-2"><iframe src="https://a.test/2"></iframe></div>
    """
    servers = PageParser().parse(html)
    assert [(s.index, s.name) for s in servers] == [(2, "Voe")]
