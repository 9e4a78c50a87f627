"""Static SVG artwork written by the ``affinity.draw_pikachu`` tool."""

YELLOW = "#FFD700"
WHITE = "#FFFFFF"
BLACK = "#000000"
PINK = "#FF69B4"
RED = "#FF4040"


def _num(value: float) -> str:
    return f"{value:.1f}"


def generate_pikachu_svg(width: int, height: int) -> str:
    """Render the character centred on a ``width`` x ``height`` canvas.

    Shapes are laid out on an 800x800 reference grid and scaled to the smaller
    canvas side.
    """
    cx = width / 2
    cy = height / 2
    s = min(width, height) / 800
    stroke = _num(3 * s)

    def pt(dx: float, dy: float) -> str:
        return f"{_num(cx + dx * s)},{_num(cy + dy * s)}"

    def circle(dx: float, dy: float, r: float, fill: str, outlined: bool = True) -> str:
        outline = f' stroke="{BLACK}" stroke-width="{stroke}"' if outlined else ""
        return (
            f'  <circle cx="{_num(cx + dx * s)}" cy="{_num(cy + dy * s)}" r="{_num(r * s)}" fill="{fill}"{outline}/>'
        )

    def ellipse(dx: float, dy: float, rx: float, ry: float, fill: str) -> str:
        return (
            f'  <ellipse cx="{_num(cx + dx * s)}" cy="{_num(cy + dy * s)}" rx="{_num(rx * s)}" ry="{_num(ry * s)}"'
            f' fill="{fill}" stroke="{BLACK}" stroke-width="{stroke}"/>'
        )

    def polygon(points: list[tuple[float, float]], fill: str, outlined: bool = True) -> str:
        outline = f' stroke="{BLACK}" stroke-width="{stroke}"' if outlined else ""
        coords = " ".join(pt(dx, dy) for dx, dy in points)
        return f'  <polygon points="{coords}" fill="{fill}"{outline}/>'

    shapes = [
        f'  <rect width="{width}" height="{height}" fill="{WHITE}"/>',
        # tail
        polygon([(150, 120), (290, -20), (250, -60), (330, -160), (220, -40), (260, 0), (130, 90)], YELLOW),
        # body and head
        ellipse(0, 140, 160, 150, YELLOW),
        circle(0, -60, 150, YELLOW),
        # ears with black tips
        polygon([(-110, -150), (-230, -330), (-60, -200)], YELLOW),
        polygon([(-190, -270), (-230, -330), (-165, -290)], BLACK, outlined=False),
        polygon([(110, -150), (230, -330), (60, -200)], YELLOW),
        polygon([(190, -270), (230, -330), (165, -290)], BLACK, outlined=False),
        # eyes
        circle(-60, -90, 22, BLACK),
        circle(-52, -98, 8, WHITE, outlined=False),
        circle(60, -90, 22, BLACK),
        circle(68, -98, 8, WHITE, outlined=False),
        # cheeks
        circle(-105, -20, 30, RED, outlined=False),
        circle(105, -20, 30, RED, outlined=False),
        # nose and mouth
        circle(0, -50, 5, BLACK, outlined=False),
        ellipse(0, -5, 28, 20, PINK),
    ]

    body = "\n".join(shapes)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg">\n'
        f"{body}\n"
        "</svg>\n"
    )
