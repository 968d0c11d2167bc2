from prompt_renderer import render_prompt, sanitize_prompt_field


def _analysis_context(**overrides):
    context = {
        "full_context": "Kara rides north.",
        "short_memory": "(not provided)",
        "last_paragraph": "She stops.",
        "placeholder": "(not provided)",
        "omit_missing_sections": False,
        "max_entities": 8,
    }
    context.update(overrides)
    return context


def test_sanitize_prompt_field():
    assert sanitize_prompt_field(None, "(x)") == "(x)"
    assert sanitize_prompt_field("   ", "(x)") == "(x)"
    assert sanitize_prompt_field("text", "(x)") == "text"


def test_analysis_prompt_lists_json_contract():
    prompt = render_prompt("analysis.j2", _analysis_context())
    assert "STORY CONTEXT:\nKara rides north." in prompt
    assert "SHORT MEMORY:\n(not provided)" in prompt
    assert '"directions":[' in prompt
    assert "EXACTLY 3" in prompt


def test_analysis_prompt_can_omit_missing_short_memory():
    prompt = render_prompt("analysis.j2", _analysis_context(omit_missing_sections=True))
    assert "SHORT MEMORY" not in prompt
    assert "Kara rides north.\n\nLAST PARAGRAPH:\nShe stops." in prompt


def test_analysis_prompt_keeps_provided_short_memory_when_omitting():
    prompt = render_prompt(
        "analysis.j2",
        _analysis_context(omit_missing_sections=True, short_memory="Kara lost her map."),
    )
    assert "SHORT MEMORY:\nKara lost her map." in prompt


def test_expand_prompt_guidance_flag():
    context = {
        "story_context": "Kara rides north.",
        "path_name": "The Gate Path",
        "path_description": "Kara breaks the seal.",
    }
    detailed = render_prompt("expand_path.j2", dict(context, detailed_guidance=True))
    short = render_prompt("expand_path.j2", dict(context, detailed_guidance=False))
    assert "Do NOT write the actual story" in detailed
    assert "Do NOT write the actual story" not in short
    assert "no JSON, no markdown" in short
