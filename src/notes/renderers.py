"""Renderers for the five note formats.

Each renderer takes ``(content, title)`` and returns a markup string using
``#`` headers, ``•`` / ``  -`` bullets, ``N.`` / ``A.`` markers and
``**bold**`` spans.  Every section has fallback text, so the output is never
empty.
"""

from __future__ import annotations

import re

from src.notes.analysis import (
    CAUSAL_RE,
    INTERROGATIVE_RE,
    extract_key_points,
    extract_keywords,
    extract_main_topics,
    find_cause_effect,
    find_definitions,
    find_numbered_items,
    generate_summary,
    split_sentences,
)

DEFAULT_TITLE = "Lecture Notes"
MAX_QA_PAIRS = 8
GENERIC_QUESTIONS = 2

_WORD_RE = re.compile(r"\w+")
_ROMAN = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"), (100, "C"), (90, "XC"),
    (50, "L"), (40, "XL"), (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _heading(title: str) -> str:
    return f"# {title.strip() or DEFAULT_TITLE}"


def _body_sentences(content: str) -> list[str]:
    return [s for s in split_sentences(content) if len(s) > 10]


def _as_sentence(text: str) -> str:
    return text if text[-1:] in ".!?" else f"{text}."


def _excerpt(content: str, length: int = 150) -> str:
    text = " ".join(content.split())
    if not text:
        return "No content was provided."
    return text if len(text) <= length else text[:length] + "..."


def _paragraph(sentences: list[str], content: str) -> str:
    if not sentences:
        return _excerpt(content)
    return ". ".join(sentences) + "."


def _lower_first(text: str) -> str:
    """Lowercase the first letter unless the first word looks like an acronym."""
    if len(text) > 1 and text[1].isupper():
        return text
    return text[:1].lower() + text[1:]


def to_roman(number: int) -> str:
    parts: list[str] = []
    for value, numeral in _ROMAN:
        count, number = divmod(number, value)
        parts.append(numeral * count)
    return "".join(parts)


def _letter(index: int) -> str:
    return chr(ord("A") + index) if index < 26 else str(index + 1)


def _long_words(text: str) -> set[str]:
    return {w for w in _WORD_RE.findall(text.lower()) if len(w) >= 4}


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def render_summary(content: str, title: str) -> str:
    sentences = _body_sentences(content)
    topics = extract_main_topics(content)
    points = extract_key_points(content)

    lines = [_heading(title), "", "## Executive Summary", "", _paragraph(sentences[:3], content)]

    lines += ["", "## Main Topics", ""]
    if topics:
        lines += [f"{i}. {_as_sentence(topic)}" for i, topic in enumerate(topics, 1)]
    else:
        lines.append("No distinct topics were identified.")

    lines += ["", "## Key Points", ""]
    if points:
        lines += [f"• {_as_sentence(point)}" for point in points]
    else:
        lines.append("• No key points were identified.")

    lines += ["", "## Conclusion", "", _paragraph(sentences[-2:], content)]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Bullets
# ---------------------------------------------------------------------------


def render_bullets(content: str, title: str) -> str:
    topics = extract_main_topics(content)
    points = extract_key_points(content)
    listed = find_numbered_items(content)

    lines = [_heading(title), "", "## Main Topics", ""]
    if topics:
        lines += [f"• **{topic}**" for topic in topics]
    else:
        lines += ["• **General Overview**", f"  - {_excerpt(content)}"]

    lines += ["", "## Key Points", ""]
    if points:
        lines += [f"• {_as_sentence(point)}" for point in points]
    else:
        lines.append("• No key points were identified.")

    if listed:
        lines += ["", "## Listed Items", "", "• **From the lecture**"]
        lines += [f"  - {item}" for item in listed]

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Concepts
# ---------------------------------------------------------------------------


def _concept_sentence(keyword: str, sentences: list[str]) -> str | None:
    pattern = re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)
    for sentence in sentences:
        if len(sentence) < 200 and pattern.search(sentence):
            return sentence
    return None


def render_concepts(content: str, title: str) -> str:
    keywords = extract_keywords(content)
    sentences = split_sentences(content)

    lines = [_heading(title), "", "## Key Concepts"]
    if keywords:
        for keyword in keywords:
            sentence = _concept_sentence(keyword, sentences)
            lines += ["", f"### {keyword}"]
            if sentence:
                lines.append(_as_sentence(sentence))
            else:
                lines.append(
                    "_Mentioned in the lecture; no concise explanation was found in the transcript._"
                )
    else:
        lines += ["", "No key concepts were identified."]

    lines += ["", "## Definitions", ""]
    definitions = find_definitions(content)
    if definitions:
        lines += [f"• {_as_sentence(s)}" for s in definitions]
    else:
        lines.append("• No explicit definitions were found.")

    lines += ["", "## Cause and Effect", ""]
    causal = find_cause_effect(content)
    if causal:
        lines += [f"• {_as_sentence(s)}" for s in causal]
    else:
        lines.append("• No cause-and-effect relationships were found.")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Q&A
# ---------------------------------------------------------------------------


def make_question(sentence: str) -> str:
    """Turn a key-point sentence into a question.

    The slicing is purely positional, so some questions come out clumsy;
    that is accepted behaviour.
    """
    if INTERROGATIVE_RE.search(sentence):
        return sentence if sentence.endswith("?") else f"{sentence}?"

    lower = sentence.lower()
    # First " is " / " are " wins, however long the lead-in before it.
    for verb in ("is", "are"):
        index = lower.find(f" {verb} ")
        if index > 0:
            subject = sentence[:index].strip()
            return f"What {verb} {_lower_first(subject)}?"

    cause = CAUSAL_RE.search(sentence)
    if cause and cause.start() > 0:
        clause = sentence[: cause.start()].strip().rstrip(",")
        return f"Why {_lower_first(clause)}?"

    lead = " ".join(sentence.split()[:6])
    return f"What can you tell me about {_lower_first(lead)}?"


def render_qna(content: str, title: str) -> str:
    points = extract_key_points(content)
    keywords = extract_keywords(content)

    pairs: list[tuple[str, str]] = [
        (make_question(point), _as_sentence(point))
        for point in points[: MAX_QA_PAIRS - GENERIC_QUESTIONS]
    ]

    pairs.append(("What is the main topic of this lecture?", generate_summary(content)))

    takeaways = " ".join(_as_sentence(p) for p in points[:3]) or _excerpt(content)
    if keywords:
        takeaways += f" Key terms to review: {', '.join(keywords[:5])}."
    pairs.append(("What are the key takeaways from this lecture?", takeaways))

    lines = [_heading(title), "", "## Questions & Answers"]
    for question, answer in pairs[:MAX_QA_PAIRS]:
        lines += ["", f"### Q: {question}", f"**A:** {answer}"]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Outline
# ---------------------------------------------------------------------------


def render_outline(content: str, title: str) -> str:
    sentences = _body_sentences(content)
    topics = extract_main_topics(content)
    points = extract_key_points(content)

    used: set[int] = set()
    section = 1

    lines = [_heading(title), "", f"## {to_roman(section)}. Introduction"]
    intro = sentences[:2]
    if intro:
        lines += [f"   {_letter(i)}. {_as_sentence(s)}" for i, s in enumerate(intro)]
    else:
        lines.append(f"   A. {_excerpt(content)}")

    for topic in topics:
        section += 1
        words = _long_words(topic)
        subpoints: list[str] = []
        for i, point in enumerate(points):
            if i in used or not words & _long_words(point):
                continue
            used.add(i)
            subpoints.append(point)

        lines += ["", f"## {to_roman(section)}. {topic}"]
        if subpoints:
            lines += [f"   {_letter(i)}. {_as_sentence(p)}" for i, p in enumerate(subpoints)]
        else:
            lines.append("   A. Covered briefly in the lecture.")

    remaining = [point for i, point in enumerate(points) if i not in used]
    if remaining:
        section += 1
        lines += ["", f"## {to_roman(section)}. Additional Points"]
        lines += [f"   {_letter(i)}. {_as_sentence(p)}" for i, p in enumerate(remaining)]

    section += 1
    lines += ["", f"## {to_roman(section)}. Conclusion"]
    closing = sentences[-2:]
    if closing:
        lines += [f"   {i}. {_as_sentence(s)}" for i, s in enumerate(closing, 1)]
    else:
        lines.append(f"   1. {_excerpt(content)}")

    return "\n".join(lines)
