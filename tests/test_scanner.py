from clashview.parsing.scanner import SectionScanner


def scan(text):
    return SectionScanner().scan(text)


def test_no_header_yields_nothing():
    text = "rules:\n  - { name: a, type: ss, server: s, port: 1 }\n"
    assert scan(text) == []


def test_header_line_is_not_emitted():
    records = scan("proxies:\n  - { name: a, type: ss, server: s, port: 1 }\n")
    assert len(records) == 1
    assert records[0].body == "name: a, type: ss, server: s, port: 1"
    assert records[0].line_no == 2


def test_header_must_match_exactly():
    scanner = SectionScanner()
    assert scanner.scan("proxies: []\n  - { name: a }\n") == []
    assert scanner.entered_section is False


def test_body_is_trimmed_inside_braces():
    records = scan("proxies:\n- {   name: a, port: 1   }\n")
    assert records[0].body == "name: a, port: 1"


def test_comments_blanks_and_multiline_items_are_skipped():
    text = (
        "proxies:\n"
        "  # a comment: with colon\n"
        "\n"
        "  - name: multi\n"
        "    type: ss\n"
        "  stray-token\n"
        "  - { name: ok, type: ss, server: s, port: 1 }\n"
    )
    records = scan(text)
    assert [r.body for r in records] == ["name: ok, type: ss, server: s, port: 1"]


def test_flush_left_key_closes_section():
    text = (
        "proxies:\n"
        "  - { name: a, type: ss, server: s, port: 1 }\n"
        "proxy-groups:\n"
        "  - { name: g, type: select, server: x, port: 2 }\n"
        "- { name: late, type: ss, server: s, port: 3 }\n"
    )
    scanner = SectionScanner()
    records = scanner.scan(text)
    assert [r.line_no for r in records] == [2]
    assert scanner.in_section is False


def test_indented_key_does_not_close_section():
    text = (
        "proxies:\n"
        "  extra: value\n"
        "  - { name: a, type: ss, server: s, port: 1 }\n"
    )
    assert len(scan(text)) == 1


def test_flush_left_line_without_colon_keeps_section_open():
    text = (
        "proxies:\n"
        "garbage\n"
        "- { name: a, type: ss, server: s, port: 1 }\n"
    )
    assert len(scan(text)) == 1


def test_body_with_closing_brace_is_not_a_record():
    assert scan("proxies:\n  - { name: a}b, port: 1 }\n") == []


def test_empty_braces_are_not_a_record():
    assert scan("proxies:\n  - {}\n") == []


def test_repeated_header_does_not_crash():
    text = (
        "proxies:\n"
        "  - { name: a, type: ss, server: s, port: 1 }\n"
        "rules:\n"
        "proxies:\n"
        "  - { name: b, type: ss, server: s, port: 2 }\n"
    )
    records = scan(text)
    assert [r.line_no for r in records] == [2, 5]
    assert records[0].body.startswith("name: a")
    assert records[1].body.startswith("name: b")


def test_only_newline_separates_lines():
    text = (
        "proxies:\n"
        '  - { name: "HK\u2028A", type: ss, server: s, port: 1 }\n'
        '  - { name: "B\x0cC", type: ss, server: s, port: 2 }\n'
    )
    records = scan(text)
    assert [r.line_no for r in records] == [2, 3]
    assert "HK\u2028A" in records[0].body
    assert "B\x0cC" in records[1].body


def test_state_resets_between_scans():
    scanner = SectionScanner()
    scanner.scan("proxies:\n")
    assert scanner.in_section is True
    assert scanner.scan("- { name: a, type: ss, server: s, port: 1 }\n") == []
    assert scanner.entered_section is False
