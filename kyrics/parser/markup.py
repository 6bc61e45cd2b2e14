from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
import re
from typing import Mapping

# A deliberately narrow, regex-based reader for TTML lyric files. It knows how
# to pull out named elements with their attributes and inner markup, nothing
# more: no entities, no namespaces beyond keeping "prefix:name" keys, no DTD.
#
# Known limitation: find_elements ends an element at the first closing tag of
# the same name, so same-named elements nested inside each other are not
# matched as a tree. find_top_level_elements balances open and close tags and
# is what callers use for direct children that may nest (TTML background vocal
# containers hold their own <span>s).

_TAG_RE = re.compile(r"<[^>]+>")
_NEWLINE_WS_RE = re.compile(r"\s*\n+\s*")
# name="value" | name='value' | name=value
_ATTR_RE = re.compile(r"""([\w:.-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>/]+))""")


@lru_cache(maxsize=32)
def _element_re(tag: str) -> re.Pattern[str]:
    t = re.escape(tag)
    return re.compile(
        rf"<{t}(?P<attrs>\s[^>]*?)?/>"
        rf"|<{t}(?P<attrs2>\s[^>]*)?>(?P<inner>[^<]*(?:<(?!/{t}\s*>)[^<]*)*)</{t}\s*>",
        re.DOTALL,
    )


@lru_cache(maxsize=32)
def _tag_token_re(tag: str) -> re.Pattern[str]:
    t = re.escape(tag)
    return re.compile(rf"<{t}(?P<attrs>\s[^>]*?)?(?P<closed>/)?>|</{t}\s*>")


@dataclass(frozen=True, slots=True)
class Element:
    tag: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    inner_markup: str = ""
    text_content: str = ""

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def get_attribute_ns(self, prefix: str, name: str) -> str | None:
        """Look up "prefix:name" first, then the bare name."""
        value = self.attributes.get(f"{prefix}:{name}")
        if value is None:
            value = self.attributes.get(name)
        return value

    def has_attribute(self, name: str, value: str) -> bool:
        return self.attributes.get(name) == value


def parse_attributes(attr_string: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(attr_string):
        name = m.group(1)
        for g in (2, 3, 4):
            if m.group(g) is not None:
                attrs[name] = m.group(g)
                break
    return attrs


def extract_text_content(markup: str) -> str:
    """
    Strip tags and indentation newlines. Leading whitespace is trimmed but
    trailing spaces are kept: in lyrics they separate words ("Hello ").
    """
    text = _TAG_RE.sub("", markup)
    text = _NEWLINE_WS_RE.sub("", text)
    return text.lstrip()


def is_likely_ttml(content: str) -> bool:
    # heuristic, not validation
    trimmed = content.lstrip()
    return trimmed.startswith("<?xml") or trimmed.startswith("<tt") or "<tt " in trimmed


class MarkupReader:
    def __init__(self, content: str):
        self.content = content

    def find_elements(self, tag: str) -> list[Element]:
        return _find(self.content, tag)

    def find_child_elements(self, inner_markup: str, tag: str) -> list[Element]:
        return _find(inner_markup, tag)

    def find_top_level_elements(self, markup: str, tag: str) -> list[tuple[Element, tuple[int, int]]]:
        """
        Direct `tag` children of `markup` with nesting balanced, each with its
        (start, end) offsets in `markup`. Unclosed elements are dropped.
        """
        out: list[tuple[Element, tuple[int, int]]] = []
        depth = 0
        opening: re.Match[str] | None = None
        for m in _tag_token_re(tag).finditer(markup):
            if m.group(0).startswith("</"):
                if depth == 0:
                    continue  # stray close
                depth -= 1
                if depth == 0 and opening is not None:
                    inner = markup[opening.end() : m.start()]
                    el = Element(
                        tag=tag,
                        attributes=parse_attributes(opening.group("attrs") or ""),
                        inner_markup=inner,
                        text_content=extract_text_content(inner),
                    )
                    out.append((el, (opening.start(), m.end())))
            elif m.group("closed"):
                if depth == 0:
                    el = Element(tag=tag, attributes=parse_attributes(m.group("attrs") or ""))
                    out.append((el, (m.start(), m.end())))
            else:
                if depth == 0:
                    opening = m
                depth += 1
        return out

    def find_elements_by_attribute(self, tag: str, name: str, value: str) -> list[Element]:
        out: list[Element] = []
        for el in self.find_elements(tag):
            for k, v in el.attributes.items():
                if (k == name or k.endswith(f":{name}")) and v == value:
                    out.append(el)
                    break
        return out


def _find(markup: str, tag: str) -> list[Element]:
    out: list[Element] = []
    for m in _element_re(tag).finditer(markup):
        inner = m.group("inner")
        if inner is None:
            # self-closing
            out.append(Element(tag=tag, attributes=parse_attributes(m.group("attrs") or "")))
            continue
        out.append(
            Element(
                tag=tag,
                attributes=parse_attributes(m.group("attrs2") or ""),
                inner_markup=inner,
                text_content=extract_text_content(inner),
            )
        )
    return out
