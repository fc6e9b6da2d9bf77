"""Tests for prompt construction."""

import pytest

from thumbnail_generation import GenerationParameters, build_prompt


@pytest.fixture
def params():
    return GenerationParameters(title="My Trip", aspect_ratio="16:9", style="Vibrant", variation_count=1)


def test_single_prompt_embeds_inputs(params):
    prompt = build_prompt(params, 0, 1)
    assert "16:9" in prompt
    assert '"My Trip"' in prompt
    assert '"Vibrant"' in prompt
    assert "headshots" in prompt
    assert "large, bold, and easily readable text" in prompt
    assert "high-contrast" in prompt


def test_single_prompt_has_no_variation_clause(params):
    assert "variation" not in build_prompt(params, 0, 1).lower()


def test_three_variations_are_distinct():
    params = GenerationParameters(title="Cooking 101", aspect_ratio="1:1", style="Cartoonish", variation_count=3)
    prompts = [build_prompt(params, i, 3) for i in range(3)]

    assert len(set(prompts)) == 3
    for i, prompt in enumerate(prompts):
        assert f"variation {i + 1} of 3" in prompt
        assert "different layout, color scheme, or composition" in prompt


def test_deterministic(params):
    assert build_prompt(params, 0, 2) == build_prompt(params, 0, 2)


@pytest.mark.parametrize("index", [-1, 3])
def test_index_out_of_range(params, index):
    with pytest.raises(ValueError):
        build_prompt(params, index, 3)
