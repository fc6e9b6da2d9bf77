"""User-selectable generation options and the parameters built from them."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ValidationError

ASPECT_RATIOS = {
    "16:9": "Widescreen",
    "4:3": "Standard",
    "1:1": "Square",
}
STYLES = ("Vibrant", "Minimalist", "Cinematic", "Cartoonish")
VARIATION_COUNTS = (1, 2, 3)

DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_STYLE = "Vibrant"
DEFAULT_VARIATION_COUNT = 1


@dataclass(frozen=True)
class GenerationParameters:
    title: str
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    style: str = DEFAULT_STYLE
    variation_count: int = DEFAULT_VARIATION_COUNT

    def validate(self, reference_count: int | None = None) -> None:
        """Raise ``ValidationError`` unless the parameters can be dispatched.

        ``reference_count`` is checked right after the title when given.
        """

        if not self.title or not self.title.strip():
            raise ValidationError("missing title")
        if reference_count is not None and reference_count < 1:
            raise ValidationError("missing references")
        if type(self.variation_count) is not int or self.variation_count not in VARIATION_COUNTS:
            raise ValidationError("invalid variation count")
        if self.aspect_ratio not in ASPECT_RATIOS:
            raise ValidationError("invalid aspect ratio")
        if self.style not in STYLES:
            raise ValidationError("invalid style")
