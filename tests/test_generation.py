"""
Tests for context building and prompt construction.
"""

from __future__ import annotations

import pytest

from conftest import make_passage
from src.generation import (
    EMPTY_CONTEXT_MARKER,
    NO_INFORMATION_RESPONSE,
    GenerationConfig,
    PromptBuilder,
    build_context,
    dedupe_passages,
    render_system_prompt,
)
from src.rag import RetrievedPassage


@pytest.fixture
def sample_results() -> list[RetrievedPassage]:
    """Vector hits followed by keyword hits, with one passage surfaced by both."""
    return [
        RetrievedPassage(passage=make_passage("a", "Light travels in straight lines."), source="vector"),
        RetrievedPassage(passage=make_passage("b", "Mirrors reflect light."), source="vector"),
        RetrievedPassage(passage=make_passage("a", "Light travels in straight lines."), source="keyword"),
        RetrievedPassage(passage=make_passage("c", "Lenses refract light."), source="keyword"),
    ]


def _conversation(n: int) -> list[dict]:
    turns = []
    for i in range(n):
        role = "user" if i % 2 == 0 else "assistant"
        turns.append({"role": role, "content": f"turn {i}"})
    if turns and turns[-1]["role"] != "user":
        turns.append({"role": "user", "content": f"turn {n}"})
    return turns


# --- Context builder ---


def test_dedupe_keeps_first_occurrence(sample_results: list[RetrievedPassage]):
    unique = dedupe_passages(sample_results)
    assert [r.id for r in unique] == ["a", "b", "c"]
    assert unique[0].source == "vector"


def test_build_context_joins_with_blank_line(sample_results: list[RetrievedPassage]):
    ctx = build_context(sample_results)
    assert ctx == "Light travels in straight lines.\n\nMirrors reflect light.\n\nLenses refract light."


def test_build_context_each_identity_once(sample_results: list[RetrievedPassage]):
    ctx = build_context(sample_results)
    assert ctx.count("Light travels in straight lines.") == 1


def test_build_context_dedupes_by_id_not_text():
    """Two passages with identical text but different ids are both kept."""
    results = [
        RetrievedPassage(passage=make_passage("x", "same text"), source="vector"),
        RetrievedPassage(passage=make_passage("y", "same text"), source="keyword"),
    ]
    assert build_context(results) == "same text\n\nsame text"


def test_build_context_empty_returns_empty():
    assert build_context([]) == ""


def test_build_context_does_not_truncate():
    long_text = "x" * 10_000
    results = [RetrievedPassage(passage=make_passage("long", long_text), source="vector")]
    assert build_context(results) == long_text


# --- Prompt builder ---


def test_system_prompt_embeds_context_and_question():
    system = render_system_prompt("Mirrors reflect light.", "What do mirrors do?")
    assert "Mirrors reflect light." in system
    assert "QUESTION: What do mirrors do?" in system
    assert system.index("----- CONTEXT START -----") < system.index("Mirrors reflect light.")
    assert system.index("Mirrors reflect light.") < system.index("----- CONTEXT END -----")


def test_system_prompt_mandates_no_information_response():
    system = render_system_prompt("anything", "q")
    assert NO_INFORMATION_RESPONSE in system


def test_empty_context_is_stated_explicitly():
    system = render_system_prompt("", "What is gravity?")
    start = system.index("----- CONTEXT START -----") + len("----- CONTEXT START -----")
    end = system.index("----- CONTEXT END -----")
    assert system[start:end].strip() == EMPTY_CONTEXT_MARKER
    assert NO_INFORMATION_RESPONSE in system


def test_system_prompt_is_static_apart_from_inputs():
    a = render_system_prompt("ctx", "q1")
    b = render_system_prompt("ctx", "q2")
    assert a.replace("q1", "") == b.replace("q2", "")


def test_prompt_forwards_last_six_turns_in_order():
    conversation = _conversation(9)
    prompt = PromptBuilder().build("ctx", conversation[-1]["content"], conversation)
    assert prompt.history == conversation[-6:]
    messages = prompt.messages()
    assert messages[0]["role"] == "system"
    assert messages[1:] == conversation[-6:]
    assert messages[-1]["role"] == "user"


def test_prompt_short_conversation_forwarded_whole():
    conversation = [{"role": "user", "content": "hi"}]
    prompt = PromptBuilder().build("", "hi", conversation)
    assert prompt.messages()[1:] == conversation
    assert len(prompt.messages()) == 2


def test_prompt_history_window_is_configurable():
    conversation = _conversation(9)
    prompt = PromptBuilder(GenerationConfig(history_window=2)).build("ctx", "q", conversation)
    assert prompt.history == conversation[-2:]


def test_prompt_history_drops_extra_keys():
    conversation = [{"role": "user", "content": "hi", "id": "123"}]
    prompt = PromptBuilder().build("", "hi", conversation)
    assert prompt.history == [{"role": "user", "content": "hi"}]


def test_prompt_build_is_pure():
    conversation = _conversation(4)
    builder = PromptBuilder()
    first = builder.build("ctx", "q", conversation)
    second = builder.build("ctx", "q", conversation)
    assert first == second
    assert conversation == _conversation(4)
