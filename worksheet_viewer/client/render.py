"""Отображение HTML-содержимого рабочего листа в терминале.

Содержимое считается недоверенным: разметка разбирается ``lxml`` и
переводится в ``rich.text.Text`` по фиксированной таблице стилей.
Скрипты, стили, фреймы и прочие активные элементы отбрасываются вместе с
содержимым, ссылки выводятся обычным текстом. ``Text`` не интерпретирует
разметку rich, поэтому текст документа попадает на экран как есть.
"""
import re
from typing import List, Optional

from lxml import etree
from lxml import html as lxml_html
from rich.console import Group
from rich.style import Style
from rich.text import Text

STYLES = {
    "h1": Style(color="blue", bold=True),
    "h2": Style(color="blue", bold=True),
    "h3": Style(color="bright_blue", bold=True),
    "strong": Style(color="blue", bold=True),
    "b": Style(bold=True),
    "em": Style(color="bright_blue", italic=True),
    "i": Style(italic=True),
    "u": Style(underline=True),
    "code": Style(color="magenta"),
}

# Блоки, после которых оставляется пустая строка
SPACED_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6", "p", "ul", "ol", "table", "blockquote", "pre"}
BLOCK_TAGS = SPACED_TAGS | {"div", "section", "article", "header", "footer", "li", "tr", "hr", "body"}

DROPPED_TAGS = {
    "script", "style", "iframe", "frame", "frameset", "object", "embed", "applet",
    "form", "input", "button", "select", "textarea", "head", "title", "meta", "link",
    "base", "noscript", "template", "svg", "math", "audio", "video", "canvas",
}

_WHITESPACE = re.compile(r"\s+")
_COMMENTS = re.compile(r"<!--.*?(?:-->|$)", re.S)
_DROPPED_BLOCKS = re.compile(
    r"<(%s)\b.*?</\1\s*>" % "|".join(sorted(DROPPED_TAGS)), re.S | re.I
)
_TAGS = re.compile(r"<[^>]*>")

_ENTER, _EXIT = 0, 1


class _BlockBuilder:
    def __init__(self):
        self.blocks: List[Text] = []
        self.current = Text()

    def append(self, value: Optional[str], style: Optional[Style]) -> None:
        if not value:
            return
        value = _WHITESPACE.sub(" ", value)
        if not self.current.plain or self.current.plain.endswith(" "):
            value = value.lstrip()
        if value:
            self.current.append(value, style=style)

    def break_block(self, spaced: bool = False) -> None:
        if self.current.plain.strip():
            self.current.rstrip()
            self.blocks.append(self.current)
            self.current = Text()
        if spaced and self.blocks and self.blocks[-1].plain:
            self.blocks.append(Text())

    def finish(self) -> List[Text]:
        self.break_block()
        while self.blocks and not self.blocks[-1].plain:
            self.blocks.pop()
        return self.blocks


def _combine(parent: Optional[Style], own: Optional[Style]) -> Optional[Style]:
    if parent is None:
        return own
    if own is None:
        return parent
    return parent + own


def _enter(element, builder: _BlockBuilder, style: Optional[Style], depth: int, counter: Optional[List[int]], stack: list) -> None:
    tag = element.tag
    # Комментарии и инструкции обработки: только хвостовой текст
    if not isinstance(tag, str):
        builder.append(element.tail, style)
        return

    tag = tag.lower()
    if tag in DROPPED_TAGS:
        builder.append(element.tail, style)
        return

    own_style = _combine(style, STYLES.get(tag))
    is_block = tag in BLOCK_TAGS

    if tag == "br":
        builder.break_block()
    elif is_block:
        builder.break_block()

    child_depth, child_counter = depth, counter
    if tag in ("ul", "ol"):
        child_depth, child_counter = depth + 1, ([0] if tag == "ol" else None)
    elif tag == "li":
        if counter is not None:
            counter[0] += 1
            marker = f"{counter[0]}. "
        else:
            marker = "• "
        builder.current.append("  " * max(depth - 1, 0) + marker)
    elif tag == "img":
        alt = element.get("alt")
        if alt:
            builder.append(f"[{alt}]", own_style)

    builder.append(element.text, own_style)

    stack.append((_EXIT, element, tag, style))
    for child in reversed(element):
        stack.append((_ENTER, child, own_style, child_depth, child_counter))


def _walk(root, builder: _BlockBuilder) -> None:
    # Явный стек вместо рекурсии: глубина вложенности не ограничена стеком Python
    stack = [(_ENTER, root, None, 0, None)]
    while stack:
        frame = stack.pop()
        if frame[0] == _ENTER:
            _, element, style, depth, counter = frame
            _enter(element, builder, style, depth, counter, stack)
            continue

        _, element, tag, style = frame
        if tag in BLOCK_TAGS:
            builder.break_block(spaced=tag in SPACED_TAGS)
        builder.append(element.tail, style)


def _visible_text(content: str) -> str:
    """Текст без тегов, комментариев и отбрасываемых блоков"""
    text = _COMMENTS.sub(" ", content)
    text = _DROPPED_BLOCKS.sub(" ", text)
    text = _TAGS.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def render_blocks(content: str) -> List[Text]:
    """Разбор HTML в список строк-блоков rich"""
    parser = lxml_html.HTMLParser(huge_tree=True)
    try:
        document = lxml_html.document_fromstring(f"<html><body>{content}</body></html>", parser=parser)
    except (etree.ParserError, ValueError):
        return [Text(content)]

    root = document.find("body")
    if root is None:
        root = document

    builder = _BlockBuilder()
    _walk(root, builder)
    blocks = builder.finish()
    if blocks:
        return blocks

    # libxml2 обрывает разбор на слишком глубокой вложенности
    visible = _visible_text(content)
    if visible:
        return [Text(visible)]
    return [Text("No content available", style="dim")]


def render_content(content: str) -> Group:
    """Готовый к выводу rich-объект для содержимого рабочего листа"""
    return Group(*render_blocks(content))
