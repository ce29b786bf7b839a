"""
Privilege card image generation.

Draws the customer name in the middle of the card and a Code128 barcode of
the card number in the bottom-right corner, then halves the resolution to
keep the PNG small enough to send over chat or email.
"""
from __future__ import annotations

import io
from typing import Optional

import barcode
from barcode.writer import ImageWriter
from PIL import Image, ImageDraw, ImageFont

from ..config import get_config
from ..logging import get_logger

# CR80 card at 300 dpi
CARD_SIZE = (1012, 638)
CARD_BACKGROUND = (18, 38, 74)
NAME_COLOR = (255, 255, 255)
BARCODE_MARGIN = 20


def generate_barcode_image(code: str) -> Image.Image:
    """Render ``code`` as a Code128 barcode image."""
    barcode_class = barcode.get_barcode_class("code128")
    barcode_instance = barcode_class(code, writer=ImageWriter())

    buffer = io.BytesIO()
    barcode_instance.write(
        buffer,
        options={
            "module_width": 0.3,
            "module_height": 15.0,
            "quiet_zone": 6.5,
            "font_size": 10,
            "text_distance": 5.0,
            "background": "white",
            "foreground": "black",
        },
    )
    buffer.seek(0)
    return Image.open(buffer).convert("RGB")


def _load_background(template_path: Optional[str]) -> Image.Image:
    if template_path:
        return Image.open(template_path).convert("RGB")
    return Image.new("RGB", CARD_SIZE, color=CARD_BACKGROUND)


def generate_card_with_barcode(pc_number: str, name: str, template_path: Optional[str] = None) -> bytes:
    """
    Generate a printable privilege card.

    Args:
        pc_number: Card number, encoded in the barcode
        name: Customer name printed on the card
        template_path: Background image; defaults to config.card_template_path,
            then to a plain card

    Returns:
        PNG image as bytes

    Raises:
        ValueError: If the card number is empty
    """
    if not pc_number:
        raise ValueError("pc_number is required to generate a privilege card")

    logger = get_logger(__name__)
    card = _load_background(template_path or get_config().card_template_path)
    width, height = card.size
    draw = ImageDraw.Draw(card)

    font = ImageFont.load_default(size=max(height // 10, 12))
    draw.text((width / 2, height / 2), name or "", fill=NAME_COLOR, font=font, anchor="mm")

    code_image = generate_barcode_image(pc_number)
    code_size = (int(width * 0.45), int(height * 0.3))
    code_image = code_image.resize(code_size)
    card.paste(
        code_image,
        (width - code_size[0] - BARCODE_MARGIN, height - code_size[1] - BARCODE_MARGIN),
    )

    final = card.resize((width // 2, height // 2))

    buffer = io.BytesIO()
    final.save(buffer, format="PNG")
    logger.debug(f"Generated privilege card image for {pc_number}")
    return buffer.getvalue()
