# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Color constants and the rich theme used when Flagline renders errors and help.

`OneColors` exposes plain hex colors plus bold variants (suffix `_b`) so they can
be dropped directly into rich markup, e.g. `f"[{OneColors.DARK_RED}]error[/]"`.
"""
from rich.style import Style
from rich.theme import Theme


class OneColors:
    """One Dark inspired palette."""

    BLACK = "#282C34"
    GUTTER_GREY = "#4B5263"
    COMMENT_GREY = "#5C6370"
    WHITE = "#ABB2BF"
    DARK_RED = "#BE5046"
    LIGHT_RED = "#E06C75"
    DARK_YELLOW = "#D19A66"
    LIGHT_YELLOW = "#E5C07B"
    GREEN = "#98C379"
    CYAN = "#56B6C2"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"

    WHITE_b = f"bold {WHITE}"
    DARK_RED_b = f"bold {DARK_RED}"
    LIGHT_RED_b = f"bold {LIGHT_RED}"
    DARK_YELLOW_b = f"bold {DARK_YELLOW}"
    GREEN_b = f"bold {GREEN}"
    CYAN_b = f"bold {CYAN}"
    BLUE_b = f"bold {BLUE}"
    MAGENTA_b = f"bold {MAGENTA}"


def get_flagline_theme() -> Theme:
    """Theme with the named styles used by `flagline.render`."""
    return Theme(
        {
            "command": Style.parse(OneColors.BLUE_b),
            "flag": Style.parse(OneColors.CYAN),
            "variable": Style.parse(OneColors.MAGENTA),
            "error.code": Style.parse(OneColors.CYAN_b),
            "error.title": Style.parse(OneColors.LIGHT_RED_b),
            "error.caret": Style.parse(OneColors.DARK_RED_b),
            "hint": Style.parse(f"italic {OneColors.GREEN}"),
            "muted": Style.parse(OneColors.COMMENT_GREY),
        }
    )
