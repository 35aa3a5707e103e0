"""Tests for fenced listing extraction."""

from folio.markdown.listings import extract_listings, find_unclosed_fence


def test_backtick_and_tilde_fences():
    body = "intro\n```java\nclass A {}\n```\n\n~~~\nplain\n~~~\n"

    listings = extract_listings(body)

    assert [(item.language, item.code, item.line) for item in listings] == [
        ("java", "class A {}", 2),
        (None, "plain", 6),
    ]


def test_longer_fence_can_contain_shorter_one():
    body = "````md\n```java\nx\n```\n````\n"

    (listing,) = extract_listings(body)

    assert listing.language == "md"
    assert listing.code == "```java\nx\n```"


def test_closing_fence_must_use_same_character():
    body = "```\ncode\n~~~\n```\n"

    (listing,) = extract_listings(body)

    assert listing.code == "code\n~~~"


def test_liquid_highlight_block():
    body = "{% highlight java linenos %}\npublic class Builder {}\n{% endhighlight %}\n"

    (listing,) = extract_listings(body)

    assert listing.language == "java"
    assert listing.code == "public class Builder {}"
    assert listing.line_count == 1


def test_unclosed_fence_is_reported_not_extracted():
    body = "text\n\n```log\nINFO started\nINFO still running\n"

    assert extract_listings(body) == []
    assert find_unclosed_fence(body) == 3


def test_unclosed_highlight_block():
    assert find_unclosed_fence("{% highlight ruby %}\nputs 1\n") == 1


def test_no_listings():
    assert extract_listings("Just prose.\n\n- a list\n") == []
    assert find_unclosed_fence("Just prose.\n") is None


def test_inline_code_at_line_start_is_not_a_fence():
    body = "```mvn verify``` runs the integration suite.\n\nMore prose.\n"

    assert extract_listings(body) == []
    assert find_unclosed_fence(body) is None


def test_fences_in_blockquotes_and_list_items():
    body = "> ```java\n> class A {}\n> ```\n\n1. Step\n\n    ```yaml\n    a: 1\n    ```\n"

    listings = extract_listings(body)

    assert [(item.language, item.code, item.line) for item in listings] == [
        ("java", "class A {}", 1),
        ("yaml", "a: 1", 7),
    ]
    assert find_unclosed_fence(body) is None


def test_fence_left_open_inside_blockquote():
    body = "> ```java\n> class A {}\n\nAfter the quote.\n"

    assert extract_listings(body) == []
    assert find_unclosed_fence(body) == 1


def test_highlight_tag_quoted_inside_a_fence_is_code():
    body = "```liquid\n{% highlight ruby %}\n```\n"

    (listing,) = extract_listings(body)

    assert listing.language == "liquid"
    assert find_unclosed_fence(body) is None
