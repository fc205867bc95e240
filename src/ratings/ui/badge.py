from __future__ import annotations

from dataclasses import dataclass
import math

LOW_COLOR = "#9b9b9b"
HIGH_COLOR = "#ffd54a"
HIGH_SCORE = 9.0


@dataclass(frozen=True)
class BadgeStyle:
    color: str
    number_rem: float
    star_rem: float
    badge_px: float
    is_high: bool
    stars: int
    text: str

    def css_vars(self) -> str:
        return (
            f"--score-color:{self.color};"
            f"--score-size:{self.number_rem:.3f}rem;"
            f"--star-size:{self.star_rem:.3f}rem;"
            f"--badge-size:{self.badge_px:.2f}px"
        )


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_color_hex(hex_a: str, hex_b: str, t: float) -> str:
    a = hex_a.lstrip("#")
    b = hex_b.lstrip("#")
    channels = []
    for i in (0, 2, 4):
        ca = int(a[i:i + 2], 16)
        cb = int(b[i:i + 2], 16)
        channels.append(int(math.floor(lerp(ca, cb, t) + 0.5)))
    return "#" + "".join(f"{c:02x}" for c in channels)


def format_score(score: float) -> str:
    if not math.isfinite(score):
        return "0"
    if float(score).is_integer():
        return str(int(score))
    return f"{score:.1f}"


def score_badge(score: float) -> BadgeStyle:
    """Colour / size of the score badge, all monotonic in score over [1, 10]."""
    s = score if math.isfinite(score) else 0.0
    t = clamp((s - 1) / 9, 0, 1)
    return BadgeStyle(
        color=lerp_color_hex(LOW_COLOR, HIGH_COLOR, t),
        number_rem=lerp(0.85, 1.35, t ** 0.9),
        star_rem=lerp(0.75, 1.05, t ** 0.9),
        badge_px=lerp(38, 58, t ** 0.85),
        is_high=s >= HIGH_SCORE,
        stars=1,
        text=format_score(s),
    )
