"""Prompt template for Gemini-based thumbnail generation."""

from __future__ import annotations

from .options import GenerationParameters


def build_prompt(params: GenerationParameters, variation_index: int, variation_count: int) -> str:
    if not 0 <= variation_index < max(variation_count, 1):
        raise ValueError(f"variation_index {variation_index} out of range for {variation_count} variation(s)")

    prompt = (
        f"Create a highly engaging, click-worthy YouTube thumbnail with a {params.aspect_ratio} aspect ratio."
        f' The video title is: "{params.title}". The desired style is "{params.style}".'
        " This thumbnail should be vibrant, high-contrast, and eye-catching."
        " Incorporate the provided headshots of the YouTuber, making them the focal point with expressive looks."
        " Arrange the headshots creatively if there are multiple."
        " The background should be dynamic and relevant to the video's topic."
        " Add the video title as large, bold, and easily readable text on the image."
        " The overall style should look professional and designed to maximize click-through rates,"
        f' adhering to the "{params.style}" aesthetic.'
    )

    if variation_count > 1:
        prompt += (
            f" This is variation {variation_index + 1} of {variation_count}."
            " Please try a different layout, color scheme, or composition to provide a unique alternative."
        )
    return prompt
