from __future__ import annotations

# Both parsers are total: anything unparseable becomes 0 ms rather than raising.


def _to_int(s: str) -> int:
    try:
        return int(s)
    except ValueError:
        return 0


def _parse_fraction(frac: str) -> int:
    # "5" -> 500ms, "50" -> 500ms, "500" -> 500ms, "5009" -> 500ms
    if len(frac) == 1:
        return _to_int(frac) * 100
    if len(frac) == 2:
        return _to_int(frac) * 10
    return _to_int(frac[:3])


def _parse_sec_ms(seconds: str) -> tuple[int, int]:
    sec, _, frac = seconds.partition(".")
    return _to_int(sec), _parse_fraction(frac) if frac else 0


def _parse_clock(text: str) -> int:
    parts = text.split(":")
    if len(parts) == 2:
        sec, ms = _parse_sec_ms(parts[1])
        return _to_int(parts[0]) * 60_000 + sec * 1_000 + ms
    if len(parts) == 3:
        sec, ms = _parse_sec_ms(parts[2])
        return _to_int(parts[0]) * 3_600_000 + _to_int(parts[1]) * 60_000 + sec * 1_000 + ms
    return 0


def parse_time(text: str) -> int:
    """
    TTML time expression -> milliseconds.

    Supported:
    - "100ms"
    - "1.5s"
    - "01:30.500" (mm:ss.fff) and "00:01:30.500" (hh:mm:ss.fff)
    - "1000" (bare integer, taken as ms)
    """
    text = text.strip()
    if text.endswith("ms"):
        return _to_int(text[:-2])
    if text.endswith("s"):
        try:
            return int(float(text[:-1]) * 1000)
        except (ValueError, OverflowError):
            return 0
    if ":" in text:
        return _parse_clock(text)
    return _to_int(text)


def parse_lrc_time(text: str) -> int:
    """
    LRC tag time -> milliseconds. Accepts mm:ss, mm:ss.xx and mm:ss:xx.
    """
    parts = text.strip().replace(".", ":").split(":")
    if len(parts) == 2:
        return _to_int(parts[0]) * 60_000 + _to_int(parts[1]) * 1_000
    if len(parts) == 3:
        return _to_int(parts[0]) * 60_000 + _to_int(parts[1]) * 1_000 + _parse_fraction(parts[2])
    return 0
