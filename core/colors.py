"""
Chart colour table and CSS colour parsing
"""
import re
from typing import Dict, Optional, Tuple

# Named chart colours, matching the theme's button palette
DEFAULT_COLORS: Dict[str, str] = {
    "wpb_button": "rgba(247, 247, 247, 1)",
    "btn-primary": "rgba(0, 136, 204, 1)",
    "btn-info": "rgba(88, 185, 218, 1)",
    "btn-success": "rgba(106, 177, 101, 1)",
    "btn-warning": "rgba(255, 153, 0, 1)",
    "btn-danger": "rgba(255, 103, 91, 1)",
    "btn-inverse": "rgba(85, 85, 85, 1)",
}

DEFAULT_FILL = "rgba(247, 247, 247, 0.2)"

_RGB_RE = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)


def resolve_color(color: Optional[str], palette: Optional[Dict[str, str]] = None) -> str:
    """Palette name -> its value; any other colour as given; nothing -> DEFAULT_FILL"""
    if palette is None:
        palette = DEFAULT_COLORS
    if not color:
        return DEFAULT_FILL
    return palette.get(color, color)


def parse_css_color(text: str) -> Tuple[int, int, int, int]:
    """Parse #rgb, #rrggbb, rgb() or rgba() into 0-255 RGBA components"""
    value = text.strip()
    if value.startswith("#"):
        digits = value[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        if len(digits) != 6:
            raise ValueError(f"Invalid hex colour: {text}")
        try:
            r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise ValueError(f"Invalid hex colour: {text}")
        return r, g, b, 255

    match = _RGB_RE.match(value)
    if not match:
        raise ValueError(f"Unsupported colour: {text}")
    parts = [p.strip() for p in match.group(1).split(",")]
    if len(parts) not in (3, 4):
        raise ValueError(f"Invalid colour components: {text}")
    try:
        r, g, b = (max(0, min(255, int(float(p)))) for p in parts[:3])
        alpha = float(parts[3]) if len(parts) == 4 else 1.0
    except ValueError:
        raise ValueError(f"Invalid colour components: {text}")
    a = int(round(max(0.0, min(1.0, alpha)) * 255))
    return r, g, b, a
