"""Tests for HTML comment sanitization."""

from feedbackflow.utils import sanitize


class TestSanitize:
    """Test suite for sanitize."""

    def test_empty_input(self):
        """Test that empty and missing bodies become empty strings."""
        assert sanitize(None) == ""
        assert sanitize("") == ""

    def test_plain_text_unchanged(self):
        """Test that text without markup passes through."""
        assert sanitize("Just a comment.") == "Just a comment."

    def test_decode_entities(self):
        """Test decoding of the supported HTML entities."""
        assert sanitize("Tom &amp; Jerry") == "Tom & Jerry"
        assert sanitize("it&#x27;s &quot;fine&quot;") == 'it\'s "fine"'
        assert sanitize("a&#x2F;b") == "a/b"

    def test_escaped_markup_is_converted(self):
        """Test that entity-escaped tags are decoded and then converted."""
        assert sanitize("&lt;b&gt;hi&lt;/b&gt;") == "**hi**"

    def test_inline_formatting(self):
        """Test bold, italics and inline code."""
        assert sanitize("<b>bold</b> and <strong>strong</strong>") == "**bold** and **strong**"
        assert sanitize("<i>one</i> <em>two</em>") == "*one* *two*"
        assert sanitize("run <code>make test</code>") == "run `make test`"

    def test_code_block(self):
        """Test that preformatted code becomes a fenced block."""
        result = sanitize("<pre><code>x = 1\ny = 2</code></pre>")
        assert result == "```\nx = 1\ny = 2\n```"

    def test_paragraphs_and_line_breaks(self):
        """Test paragraph and line break handling."""
        assert sanitize("<p>First</p><p>Second</p>") == "First\n\nSecond"
        assert sanitize("line<br>next<br/>last") == "line\nnext\nlast"
        assert sanitize("First<p>Second") == "First\n\nSecond"

    def test_links(self):
        """Test that anchors are rewritten as text followed by the url."""
        assert sanitize('<a href="https://example.com">docs</a>') == "docs (https://example.com)"
        assert sanitize('<a href="https://example.com" rel="nofollow">https://example.com</a>') == (
            "https://example.com"
        )

    def test_unknown_tags_removed(self):
        """Test that other tags are dropped and their text kept."""
        assert sanitize("<span class='x'>hi</span> <div>there</div>") == "hi there"

    def test_literal_angle_brackets_kept(self):
        """Test that comparisons are not mistaken for tags."""
        assert sanitize("a < b and c > d") == "a < b and c > d"

    def test_blank_lines_collapsed(self):
        """Test that runs of blank lines collapse to one."""
        assert sanitize("<p>a</p>\n\n\n<p>b</p>") == "a\n\nb"

    def test_idempotent(self):
        """Test that sanitizing twice gives the same result as once."""
        samples = [
            "&lt;b&gt;hi&lt;/b&gt;",
            "&amp;lt;i&amp;gt;nested&amp;lt;/i&amp;gt;",
            "<p>Hello <a href=\"https://x.io\">x</a></p><pre>code</pre>",
            "5 &lt; 6 &amp;&amp; 7 &gt; 3",
            "plain",
        ]
        for sample in samples:
            once = sanitize(sample)
            assert sanitize(once) == once

    def test_generics_in_code_kept(self):
        """Test that escaped angle brackets inside code survive as text."""
        assert sanitize("use <code>List&lt;String&gt;</code> here") == "use `List<String>` here"

    def test_html_sample_in_code_kept(self):
        """Test that markup shown inside code is not parsed as markup."""
        result = sanitize("try <code>&lt;b&gt;bold&lt;/b&gt;</code>")

        assert result == "try `<b>bold</b>`"
        assert sanitize(result) == result

    def test_escaped_autolink_kept(self):
        """Test that an escaped URL in angle brackets is kept as literal text."""
        assert sanitize("see &lt;https://example.com&gt; ok") == "see <https://example.com> ok"

    def test_script_and_style_dropped(self):
        """Test that script and style contents are removed."""
        assert sanitize("<p>text</p><script>alert(1)</script><style>p {}</style>") == "text"

    def test_deeply_escaped_entity(self):
        """Test that many layers of escaping settle and stay settled."""
        raw = "&" + "amp;" * 12 + "quot;quoted"
        once = sanitize(raw)

        assert once == '"quoted'
        assert sanitize(once) == once
