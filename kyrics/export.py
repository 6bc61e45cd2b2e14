from __future__ import annotations

import json
from typing import Sequence

from kyrics.model import Line
from kyrics.parser.result import LyricsMetadata

_LRC_TAGS = (("ti", "title"), ("ar", "artist"), ("al", "album"))


def export_json(lines: Sequence[Line], metadata: LyricsMetadata | None = None) -> str:
    meta = metadata or LyricsMetadata()
    return json.dumps(
        {
            "metadata": {
                "title": meta.title,
                "artist": meta.artist,
                "album": meta.album,
                "duration_ms": meta.duration_ms,
                "offset_ms": meta.offset_ms,
            },
            "lines": [
                {
                    "start": ln.start,
                    "end": ln.end,
                    "is_accompaniment": ln.is_accompaniment,
                    "content": ln.content,
                    "syllables": [
                        {"content": s.content, "start": s.start, "end": s.end} for s in ln.syllables
                    ],
                }
                for ln in lines
            ],
        },
        ensure_ascii=False,
        indent=2,
    )


def _fmt_lrc_time(ms: int) -> str:
    ms = max(ms, 0)
    m, rem = divmod(ms, 60_000)
    s, ms2 = divmod(rem, 1_000)
    # keep 2 decimals for compatibility
    return f"{m:02d}:{s:02d}.{ms2 // 10:02d}"


def export_lrc(
    lines: Sequence[Line],
    metadata: LyricsMetadata | None = None,
    enhanced: bool = False,
) -> str:
    """
    Timings are written as-is; no offset tag is emitted since parsed lines
    already include it.
    """
    out: list[str] = []
    if metadata is not None:
        for tag, attr in _LRC_TAGS:
            value = getattr(metadata, attr)
            if value:
                out.append(f"[{tag}:{value}]")
        if metadata.duration_ms:
            out.append(f"[length:{_fmt_lrc_time(metadata.duration_ms)}]")

    for ln in lines:
        if enhanced and ln.syllables:
            sep = " " if ln.text != ln.content else ""
            words = sep.join(f"<{_fmt_lrc_time(s.start)}>{s.content}" for s in ln.syllables)
            out.append(f"[{_fmt_lrc_time(ln.start)}]{words}<{_fmt_lrc_time(ln.end)}>")
        else:
            out.append(f"[{_fmt_lrc_time(ln.start)}]{ln.text}")
    return "\n".join(out) + ("\n" if out else "")


def _fmt_srt_time(ms: int) -> str:
    # HH:MM:SS,mmm
    ms = max(ms, 0)
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{h:02d}:{m:02d}:{s:02d},{ms2:03d}"


def export_srt(lines: Sequence[Line]) -> str:
    if not lines:
        return ""
    out: list[str] = []
    for i, ln in enumerate(lines, start=1):
        end = max(ln.end, ln.start + 1)
        out.append(str(i))
        out.append(f"{_fmt_srt_time(ln.start)} --> {_fmt_srt_time(end)}")
        out.append(ln.text)
        out.append("")
    return "\n".join(out)
