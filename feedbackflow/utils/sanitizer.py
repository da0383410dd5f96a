"""Conversion of inline HTML in comment bodies to lightly formatted text."""

import html
import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

# Bodies are fragments; one that happens to be a bare URL is still a body
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

# Element names parsed as markup; any other "<" is literal text such as
# "List<String>" or "<https://example.com>"
_HTML_TAGS = (
    "a abbr address article aside audio b big blockquote br button caption center cite code col colgroup "
    "dd del details dfn div dl dt em figcaption figure font footer form h1 h2 h3 h4 h5 h6 header hr i "
    "iframe img input ins kbd label li main mark nav ol p picture pre q s samp script section small "
    "source span strike strong style sub summary sup svg table tbody td tfoot th thead tr tt u ul var "
    "video wbr"
).split()

_STRAY_LT = re.compile(rf"<(?!/?(?:{'|'.join(_HTML_TAGS)})(?=[\s/>]))", re.IGNORECASE)
_CODE_SPAN = re.compile(r"```.*?```|`[^`\n]*`", re.DOTALL)
_BLANK_LINES = re.compile(r"\n{3,}")

_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)
_DROPPED_TAGS = ("script", "style")


def _protect(text: str) -> str:
    """Escape everything the parser must read as literal text."""
    parts = []
    position = 0
    for match in _CODE_SPAN.finditer(text):
        parts.append(_STRAY_LT.sub("&lt;", text[position : match.start()]))
        parts.append(html.escape(match.group(0), quote=False))
        position = match.end()
    parts.append(_STRAY_LT.sub("&lt;", text[position:]))
    return "".join(parts)


def _render_children(tag: Tag) -> str:
    return "".join(_render(child) for child in tag.children)


def _wrap(marker: str, inner: str) -> str:
    if not inner.strip():
        return inner
    return f"{marker}{inner}{marker}"


def _render(node) -> str:
    if isinstance(node, _SKIPPED_STRINGS):
        return ""
    if isinstance(node, NavigableString):
        return str(node)
    if not isinstance(node, Tag):
        return ""

    name = node.name
    if name in _DROPPED_TAGS:
        return ""
    if name == "pre":
        return f"\n```\n{node.get_text().strip(chr(10))}\n```\n"
    if name == "code":
        return f"`{node.get_text()}`"
    if name == "a":
        url = node.get("href") or ""
        text = _render_children(node).strip()
        if not url:
            return text
        if not text or text == url:
            return url
        return f"{text} ({url})"
    if name in ("b", "strong"):
        return _wrap("**", _render_children(node))
    if name in ("i", "em"):
        return _wrap("*", _render_children(node))
    if name == "p":
        return f"\n\n{_render_children(node)}\n\n"
    if name == "br":
        return "\n"
    return _render_children(node)


def _sanitize_once(text: str) -> str:
    soup = BeautifulSoup(_protect(text), "html.parser")
    rendered = "".join(_render(child) for child in soup.children)
    return _BLANK_LINES.sub("\n\n", rendered).strip()


def sanitize(raw: str | None) -> str:
    """
    Convert an HTML comment body into plain, lightly marked-up text.

    The body is parsed with BeautifulSoup, entities are decoded inside text
    nodes, paragraphs, line breaks, bold, italics, inline code and code
    blocks map to markdown-like equivalents, links become ``text (url)``
    and any other tag is dropped. A ``<`` that does not open an HTML
    element is kept as literal text, and code spans in the output are
    never parsed again.

    Bodies that were escaped more than once (``&lt;b&gt;hi&lt;/b&gt;``)
    are unwrapped one layer per pass until the output stops changing,
    which makes ``sanitize(sanitize(x)) == sanitize(x)``.

    Args:
        raw: Comment body as delivered by the platform

    Returns:
        Sanitized text, empty string for empty input
    """
    if not raw:
        return ""

    # Each pass unwraps at least one layer of markup or escaping, which is
    # bounded by the length of the body
    max_passes = len(raw) + 1

    text = raw
    for _ in range(max_passes):
        cleaned = _sanitize_once(text)
        if cleaned == text:
            break
        text = cleaned
    return text
