from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from curveview.raster.canvas import RGBA, blend_mask


DEFAULT_FONT_FAMILY = "Arial"
DEFAULT_FONT_SIZE_PX = 12.0
SANS_FONT_FALLBACK_PATTERNS = (
    "arial",
    "helvetica",
    "liberationsans",
    "dejavusans",
    "notosans",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path("C:/Windows/Fonts"),
)


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    bold: bool = False,
    font_family: str = DEFAULT_FONT_FAMILY,
) -> None:
    """Draw ``text`` with the top-left of its ink box at (x, y)."""
    if not text:
        return
    mask = _render_mask(text, _load_font(font_family, font_size_px))
    if bold:
        mask = _embolden(mask)
    blend_mask(dst, int(round(x)), int(round(y)), mask, color)


def text_size(
    text: str,
    *,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    bold: bool = False,
    font_family: str = DEFAULT_FONT_FAMILY,
) -> tuple[int, int]:
    font = _load_font(font_family, font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left)) + (1 if bold else 0)
    h = max(1, int(bottom - top))
    return (w, h)


def _embolden(mask: np.ndarray) -> np.ndarray:
    out = np.zeros((mask.shape[0], mask.shape[1] + 1), dtype=np.uint8)
    out[:, :-1] = mask
    np.maximum(out[:, 1:], mask, out=out[:, 1:])
    return out


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=32)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    path = _resolve_font_path(font_family)
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=size)
        except OSError:
            pass
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=8)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower().replace(" ", "") or DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        for path in candidates:
            stem = path.stem.lower().replace(" ", "").replace("-", "")
            # Prefer the regular face; bold is synthesised.
            if stem == pattern or stem == pattern + "regular":
                return path
        for path in candidates:
            if pattern in path.stem.lower().replace(" ", "").replace("-", ""):
                return path
    return None
