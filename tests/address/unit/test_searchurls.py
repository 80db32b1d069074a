from tabnav.address.searchurls import encode_uri_component, interpolate_search_item


def test_encode_uri_component_matches_browser_unreserved_set():
    assert encode_uri_component("a b&c/d") == "a%20b%26c%2Fd"
    assert encode_uri_component("it's (ok)!*~") == "it's%20(ok)!*~"
    assert encode_uri_component("100%") == "100%25"
    assert encode_uri_component("ü") == "%C3%BC"


def test_template_without_placeholder_appends_query():
    out = interpolate_search_item("https://www.google.com/search?q=", "hello world")

    assert out == "https://www.google.com/search?q=hello%20world"


def test_plain_placeholder_is_replaced_with_whole_query():
    out = interpolate_search_item("https://example.com/search?q=%s&lang=en", "a b")

    assert out == "https://example.com/search?q=a%20b&lang=en"


def test_positional_placeholders_take_individual_words():
    out = interpolate_search_item("https://example.com/%s1/%s2?all=%s", "foo bar")

    assert out == "https://example.com/foo/bar?all=foo%20bar"


def test_missing_positional_words_expand_to_empty():
    out = interpolate_search_item("https://example.com/?a=%s1&b=%s3", "one two")

    assert out == "https://example.com/?a=one&b="


def test_unparseable_template_is_a_miss():
    assert interpolate_search_item("not a url", "x") is None


def test_expansion_is_idempotent():
    template = "https://duckduckgo.com/?q=%s"

    first = interpolate_search_item(template, "tabs & windows")
    second = interpolate_search_item(template, "tabs & windows")

    assert first == second == "https://duckduckgo.com/?q=tabs%20%26%20windows"
