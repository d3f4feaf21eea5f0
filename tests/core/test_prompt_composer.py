from core.prompts import (
    PRODUCTIVE_CHALLENGE_PROMPT,
    build_system_prompt,
    get_prompts,
    load_base_instructions,
    resolve_subject,
)


def test_base_passes_through_without_topic():
    assert build_system_prompt("BASE") == "BASE"
    assert build_system_prompt("BASE", None) == "BASE"
    assert build_system_prompt("BASE", "") == "BASE"


def test_topic_clause_appended():
    out = build_system_prompt("BASE", "Causes of WWI")
    assert out.startswith("BASE\n\nCurrent Assignment Context:")
    assert '"Causes of WWI"' in out
    assert out == build_system_prompt("BASE", "Causes of WWI")


def test_default_persona_mentions_framework():
    assert "Productive Challenge Framework" in PRODUCTIVE_CHALLENGE_PROMPT
    assert load_base_instructions(None) == PRODUCTIVE_CHALLENGE_PROMPT


def test_base_instructions_from_file(tmp_path):
    p = tmp_path / "persona.txt"
    p.write_text("Be Socratic.\n", encoding="utf-8")
    assert load_base_instructions(p) == "Be Socratic."


def test_prompt_library_lookup_and_fallback():
    history = get_prompts("History")
    assert any(p["title"] == "Historical Causation" for p in history)
    assert resolve_subject("unknownSubject") == "general"
    assert get_prompts("unknownSubject") == get_prompts("general")
    assert get_prompts(None) == get_prompts("general")


def test_topic_is_quoted_verbatim():
    out = build_system_prompt("BASE", "  Causes of WWI ")
    assert '"  Causes of WWI "' in out
