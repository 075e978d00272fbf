import functools
import io
import logging

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .common import round_half_up


_logger = logging.getLogger('calibtarget.surface')

# Monospaced fonts are preferred to match the SVG footer (Roboto Mono)
FONT_CANDIDATES = ('RobotoMono-Regular.ttf', 'DejaVuSansMono.ttf', 'DejaVuSans.ttf', 'LiberationMono-Regular.ttf')


@functools.lru_cache(maxsize=32)
def load_font(size_px: int) -> ImageFont.FreeTypeFont:
    """Returns a TrueType font of the given pixel size."""
    for name in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size_px)
        except OSError:
            continue
    _logger.warning(f'None of the fonts {FONT_CANDIDATES} is installed, using the default font.')
    return ImageFont.load_default(size=size_px)


class RasterSurface(object):
    """An RGB image to draw calibration patterns onto.

    Drawing commands are given in logical coordinates, which are mapped to
    device pixels by a uniform scale transform (see :meth:`set_transform`).
    This allows drawing a full resolution pattern onto a smaller preview.
    Rectangle edges are rounded to the nearest device pixel.
    """
    def __init__(self, width: int, height: int, background: str = 'white'):
        self._image = Image.new('RGB', (max(0, int(width)), max(0, int(height))), background)
        self._draw = ImageDraw.Draw(self._image)
        self._scale = 1.0

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def image(self) -> Image.Image:
        return self._image

    def set_transform(self, scale: float) -> None:
        """Sets the logical-to-device scale factor."""
        self._scale = float(scale)

    def reset_transform(self) -> None:
        self._scale = 1.0

    def _px(self, v: float) -> int:
        return round_half_up(v * self._scale)

    def clear(self, color: str = 'white') -> None:
        """Fills the whole surface (in device coordinates, ignoring the transform)."""
        if self.width > 0 and self.height > 0:
            self._draw.rectangle([0, 0, self.width - 1, self.height - 1], fill=color)

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str = 'black') -> None:
        x0, y0 = self._px(x), self._px(y)
        x1, y1 = self._px(x + width), self._px(y + height)
        if x1 <= x0 or y1 <= y0:
            return
        # Pillow includes the lower right corner
        self._draw.rectangle([x0, y0, x1 - 1, y1 - 1], fill=color)

    def fill_circle(self, cx: float, cy: float, radius: float, color: str = 'black') -> None:
        s = self._scale
        r = radius * s
        if r <= 0:
            return
        self._draw.ellipse([cx * s - r, cy * s - r, cx * s + r, cy * s + r], fill=color)

    def line(self, x0: float, y0: float, x1: float, y1: float, width: float = 1, color: str = 'black') -> None:
        s = self._scale
        self._draw.line([(x0 * s, y0 * s), (x1 * s, y1 * s)], fill=color,
                        width=max(1, round_half_up(width * s)))

    def text(self, x: float, y: float, text: str, size: float, color: str = 'black', anchor: str = 'ls') -> None:
        """Draws the text at the given position.

        `anchor` follows Pillow's text anchor convention, e.g. 'ls' (left,
        baseline), 'rs' (right, baseline) or 'mm' (centered).
        """
        size_px = max(1, round_half_up(size * self._scale))
        self._draw.text((x * self._scale, y * self._scale), text, fill=color,
                        font=load_font(size_px), anchor=anchor)

    def draw_image(self, image: np.ndarray, x: float, y: float, width: float, height: float) -> None:
        """Pastes the (grayscale or RGB) image into the given rectangle using
        nearest neighbor interpolation, so that marker modules stay crisp."""
        x0, y0 = self._px(x), self._px(y)
        x1, y1 = self._px(x + width), self._px(y + height)
        if x1 <= x0 or y1 <= y0:
            return
        tile = Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).convert('RGB')
        tile = tile.resize((x1 - x0, y1 - y0), Image.Resampling.NEAREST)
        self._image.paste(tile, (x0, y0))

    def to_ndarray(self) -> np.ndarray:
        """Returns a copy of the surface as HxWx3 uint8 RGB array."""
        return np.array(self._image, dtype=np.uint8)

    def to_png(self) -> bytes:
        """Encodes the surface as PNG."""
        buffer = io.BytesIO()
        self._image.save(buffer, format='PNG')
        return buffer.getvalue()
