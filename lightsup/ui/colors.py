"""Theme colors and color utilities for the UI."""


class GameColors:
    """Dark slate palette with yellow/cyan accents."""

    BG = "#0f172a"
    PANEL_BG = "#1e293b"
    PANEL_BORDER = "#334155"

    LIT = "#facc15"
    UNLIT = "#334155"
    TARGET_LIT = "#22d3ee"
    SOLVED_BORDER = "#4ade80"
    FLASH = "#ffffff"
    FAILED = "#ef4444"

    TEXT_PRIMARY = "#f1f5f9"
    TEXT_SECONDARY = "#94a3b8"
    TEXT_MUTED = "#64748b"
    USER_SEED = "#fde047"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"
