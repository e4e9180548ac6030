"""Lecture Notes -- Streamlit UI.

Single-page application: capture a transcript (typed, pasted, sample, or
extracted from an uploaded file), generate notes, switch formats, download.
All processing runs in-process.
"""

from __future__ import annotations

import asyncio
import logging

import streamlit as st

from src.config import settings
from src.extraction.extractor import extract_upload, title_from_filename
from src.extraction.models import ExtractionError
from src.notes.models import GeneratedNotes, ProcessingStatus, Transcript, notes_filename
from src.notes.pipeline import process_transcript
from src.pipeline_config import NoteFormat, PipelineConfig

logging.basicConfig(level=settings.log_level)

FORMAT_LABELS: dict[NoteFormat, str] = {
    NoteFormat.SUMMARY: "Summary - comprehensive overview",
    NoteFormat.BULLETS: "Bullet Points - key points organized",
    NoteFormat.CONCEPTS: "Key Concepts - core ideas explained",
    NoteFormat.QNA: "Q&A Format - questions and answers",
    NoteFormat.OUTLINE: "Detailed Outline - hierarchical structure",
}

SAMPLE_TRANSCRIPTS: dict[str, str] = {
    "Introduction to Machine Learning": (
        "Today we'll explore the fundamental concepts of machine learning, including "
        "supervised and unsupervised learning paradigms."
    ),
    "Climate Change and Environmental Policy": (
        "The relationship between human activity and climate change has become increasingly "
        "evident through decades of research."
    ),
    "Modern Web Development Practices": (
        "Building scalable web applications requires understanding of modern frameworks, "
        "deployment strategies, and performance optimization."
    ),
}

TROUBLESHOOTING = (
    "- Make sure the file is not password-protected or corrupted.\n"
    "- Scanned PDFs need Tesseract installed for OCR; only the first pages are read.\n"
    "- Legacy .doc files must be saved as .docx first.\n"
    "- You can always paste the text directly instead."
)

PIPELINE = PipelineConfig.from_settings(settings)


def _sample_content(title: str, preview: str) -> str:
    return (
        f"{preview}\n\n"
        f"This is a comprehensive lecture covering multiple aspects of {title.lower()}. "
        "The discussion begins with foundational concepts and progresses through advanced "
        "applications.\n\n"
        "Key topics include:\n"
        "1. Fundamental principles and theories\n"
        "2. Current research and developments\n"
        "3. Practical applications and case studies\n"
        "4. Future trends and implications\n\n"
        "The lecture emphasizes both theoretical understanding and practical implementation, "
        "providing students with a complete framework for applying these concepts in "
        "real-world scenarios.\n\n"
        "Throughout the presentation, we'll examine various methodologies, analyze successful "
        "case studies, and discuss common challenges encountered in professional practice. "
        "The goal is to provide a thorough understanding that bridges academic knowledge "
        "with industry applications.\n\n"
        "Students will gain insights into best practices, learn to identify potential "
        "pitfalls, and develop strategies for continuous learning and adaptation in this "
        "rapidly evolving field."
    )


def _reset() -> None:
    for key in ("transcript", "notes", "title", "content"):
        st.session_state.pop(key, None)


def _generate(transcript: Transcript, note_format: NoteFormat, show_progress: bool) -> GeneratedNotes:
    if not show_progress:
        return asyncio.run(process_transcript(transcript, note_format, config=PIPELINE))

    bar = st.progress(0, text="Starting...")

    def on_status(status: ProcessingStatus) -> None:
        bar.progress(status.progress, text=status.message)

    notes = asyncio.run(process_transcript(transcript, note_format, on_status, config=PIPELINE))
    bar.empty()
    return notes


# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Lecture Notes", layout="wide")

# ---------------------------------------------------------------------------
# Sidebar -- current session
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("Lecture Notes")
    st.markdown("---")

    current: Transcript | None = st.session_state.get("transcript")
    current_notes: GeneratedNotes | None = st.session_state.get("notes")
    if current is not None and current_notes is not None:
        st.subheader("Current Session")
        st.write(f"**Transcript:** {current.title}")
        st.write(f"**Word count:** {current.word_count} words")
        st.write(f"**Generated:** {current_notes.created_at:%Y-%m-%d %H:%M:%S} UTC")
        st.button("Start New Transcript", on_click=_reset)

input_col, output_col = st.columns(2)

# ---------------------------------------------------------------------------
# Input: transcript capture
# ---------------------------------------------------------------------------
with input_col:
    if st.session_state.get("notes") is None:
        st.header("Lecture Transcript Input")
        method = st.radio("Input method", ["Type/Paste Text", "Upload File"], horizontal=True)

        if method == "Upload File":
            uploaded_file = st.file_uploader(
                "Choose a file",
                type=["pdf", "docx", "doc", "pptx", "txt", "md"],
            )
            if uploaded_file is not None and st.button("Extract text"):
                bar = st.progress(0, text="Reading file...")
                try:
                    text = extract_upload(
                        uploaded_file.getvalue(),
                        uploaded_file.name,
                        uploaded_file.type,
                        lambda percent, message: bar.progress(percent, text=message),
                    )
                except ExtractionError as exc:
                    bar.empty()
                    st.error(exc.message)
                    st.markdown(TROUBLESHOOTING)
                else:
                    bar.empty()
                    st.session_state["content"] = text
                    st.session_state["title"] = title_from_filename(uploaded_file.name)
                    st.success("Text extracted. Review it below, then generate notes.")
        else:
            st.caption("Or start from a sample:")
            for sample_title, preview in SAMPLE_TRANSCRIPTS.items():
                if st.button(sample_title):
                    st.session_state["title"] = sample_title
                    st.session_state["content"] = _sample_content(sample_title, preview)

        title = st.text_input("Lecture title", key="title")
        content = st.text_area("Transcript", key="content", height=320)

        if st.button("Generate Notes", disabled=not (title.strip() and content.strip())):
            transcript = Transcript.create(title, content)
            st.session_state["transcript"] = transcript
            st.session_state["notes"] = _generate(transcript, NoteFormat.SUMMARY, True)
            st.rerun()

# ---------------------------------------------------------------------------
# Output: generated notes
# ---------------------------------------------------------------------------
with output_col:
    notes = st.session_state.get("notes")
    transcript = st.session_state.get("transcript")
    if notes is not None and transcript is not None:
        st.header("Generated Notes")

        selected = st.selectbox(
            "Note format",
            options=list(NoteFormat),
            index=list(NoteFormat).index(notes.format),
            format_func=lambda f: FORMAT_LABELS[f],
        )
        if selected != notes.format:
            with st.spinner("Regenerating notes..."):
                notes = _generate(transcript, selected, False)
            st.session_state["notes"] = notes

        if notes.keywords:
            st.markdown("**Keywords:** " + ", ".join(notes.keywords))
        st.markdown(f"**Summary:** {notes.summary}")
        st.markdown("---")
        st.markdown(notes.content)

        st.download_button(
            "Download notes",
            data=notes.content,
            file_name=notes_filename(notes),
            mime="text/plain",
        )
        with st.expander("Copy as plain text"):
            st.code(notes.content, language=None)
