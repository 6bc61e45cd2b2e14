from __future__ import annotations

import pytest

from kyrics.builder import build_line
from kyrics.model import Line


def make_line(start: int, end: int, text: str = "line", accompaniment: bool = False) -> Line:
    return build_line(start, end, [(text, start, end)], is_accompaniment=accompaniment)


@pytest.fixture
def simple_lines() -> list[Line]:
    # [0,2000] [2500,4500] [5000,7000] [7500,9500] [10000,12000]
    return [make_line(i * 2500, i * 2500 + 2000, f"line {i}") for i in range(5)]


TTML_TWO_PARAGRAPHS = """<?xml version="1.0" encoding="UTF-8"?>
<tt xmlns="http://www.w3.org/ns/ttml">
  <body>
    <div>
      <p begin="0ms" end="5000ms">
        <span begin="0ms" end="2500ms">Hello </span>
        <span begin="2500ms" end="5000ms">World</span>
      </p>
      <p begin="5000ms" end="10000ms">
        <span begin="5000ms" end="7500ms">Test </span>
        <span begin="7500ms" end="10000ms">Line</span>
      </p>
    </div>
  </body>
</tt>
"""


@pytest.fixture
def ttml_two_paragraphs() -> str:
    return TTML_TWO_PARAGRAPHS
