"""Rule-based text analysis shared by every note format.

Nothing here understands language: sentences are split on terminal
punctuation, keywords are counted, and "importance" is a handful of regex
signals added up.  The thresholds below define the behaviour, so change them
with care.
"""

from __future__ import annotations

import re
from collections import Counter

# Words ignored by keyword extraction (tokens of three letters or fewer are
# dropped before this set is consulted).
STOP_WORDS: frozenset[str] = frozenset(
    {
        "about", "above", "actually", "after", "again", "against", "also", "although",
        "always", "among", "another", "anything", "around", "because", "been", "before",
        "being", "below", "between", "both", "came", "cannot", "come", "comes", "could",
        "does", "doing", "done", "down", "during", "each", "either", "else", "enough",
        "even", "every", "everything", "from", "further", "gets", "getting", "give",
        "given", "gives", "goes", "going", "gone", "good", "have", "having", "here",
        "however", "into", "itself", "just", "keep", "know", "known", "like", "look",
        "looking", "made", "make", "makes", "making", "many", "maybe", "might", "more",
        "most", "much", "must", "need", "needs", "never", "next", "okay", "once", "only",
        "other", "others", "ours", "over", "really", "right", "said", "same", "says",
        "should", "show", "since", "some", "something", "still", "such", "sure", "take",
        "takes", "than", "that", "their", "theirs", "them", "themselves", "then", "there",
        "these", "they", "thing", "things", "think", "this", "those", "though", "through",
        "today", "together", "under", "until", "upon", "used", "uses", "using", "very",
        "want", "wants", "well", "went", "were", "what", "whatever", "when", "where",
        "whether", "which", "while", "will", "with", "within", "without", "would", "yeah",
        "your", "yours", "yourself",
    }
)

# Sentences matching any of these are treated as introducing a topic.
TOPIC_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(first|second|third|fourth|fifth|finally|lastly)\b", re.IGNORECASE),
    re.compile(r"\b(next|then|afterwards|subsequently|following)\b", re.IGNORECASE),
    re.compile(
        r"\b(however|moreover|furthermore|additionally|in addition|on the other hand)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(important|key|crucial|essential|significant|critical|fundamental)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(topic|concept|principle|theory|idea|subject|chapter|section)s?\b", re.IGNORECASE
    ),
    re.compile(
        r"\b(introduce|introduction|overview|discuss|today we|in this lecture|let's)\b",
        re.IGNORECASE,
    ),
)

IMPORTANCE_KEYWORDS: tuple[str, ...] = (
    "important",
    "key",
    "crucial",
    "essential",
    "significant",
    "critical",
    "fundamental",
    "main",
    "primary",
    "remember",
    "note",
)

_IMPORTANCE_RES: tuple[re.Pattern[str], ...] = tuple(
    re.compile(rf"\b{word}\b", re.IGNORECASE) for word in IMPORTANCE_KEYWORDS
)

COPULA_RE = re.compile(
    r"\b(is|are|was|were|means|refers to|defined as|called|consists of|involves|represents)\b",
    re.IGNORECASE,
)
DEFINITION_RE = re.compile(
    r"\b(is defined as|is known as|refers to|means|is called|is a|is an|are a|consists of)\b",
    re.IGNORECASE,
)
CAUSAL_RE = re.compile(
    r"\b(because|therefore|thus|hence|consequently|as a result|leads to|lead to|causes|"
    r"caused by|results in|due to)\b",
    re.IGNORECASE,
)
INTERROGATIVE_RE = re.compile(r"\b(what|why|how|when|where|which|who)\b", re.IGNORECASE)
NUMBERED_ITEM_RE = re.compile(r"^[ \t]*\d+[.)][ \t]+(\S.*?)[ \t]*$", re.MULTILINE)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_WORD_RE = re.compile(r"[^\w\s]")
_DIGIT_RE = re.compile(r"\d")

MAX_KEYWORDS = 10
MAX_TOPICS = 8
MAX_KEY_POINTS = 10
MIN_KEY_POINTS = 5
KEY_POINT_THRESHOLD = 2


def split_sentences(text: str) -> list[str]:
    """Split on runs of ``.``, ``!`` and ``?`` and collapse inner whitespace."""
    sentences: list[str] = []
    for fragment in _SENTENCE_SPLIT_RE.split(text):
        sentence = " ".join(fragment.split())
        if sentence:
            sentences.append(sentence)
    return sentences


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> list[str]:
    """Return the most frequent content words, capitalized.

    Ties keep the order in which the words were first seen.
    """
    tokens = _NON_WORD_RE.sub(" ", text.lower()).split()
    counts = Counter(t for t in tokens if len(t) > 3 and t not in STOP_WORDS)
    return [word[0].upper() + word[1:] for word, _ in counts.most_common(limit)]


def generate_summary(text: str) -> str:
    """Build a short extractive summary from the opening sentences."""
    sentences = [s for s in split_sentences(text) if len(s) >= 20]
    if not sentences:
        return text.strip()[:150] + "..."

    picked: list[str] = []
    length = 0
    for sentence in sentences:
        if len(picked) == 3:
            break
        added = len(sentence) + 2
        if picked and length + added > 200:
            break
        picked.append(sentence)
        length += added
    return (". ".join(picked) + ".").strip()


def extract_main_topics(text: str, limit: int = MAX_TOPICS) -> list[str]:
    """Sentences that look like they open a new subject, in document order."""
    topics: list[str] = []
    for sentence in split_sentences(text):
        if len(sentence) <= 20:
            continue
        signalled = any(p.search(sentence) for p in TOPIC_PATTERNS)
        if signalled or len(sentence.split()) < 20:
            topics.append(sentence)
            if len(topics) == limit:
                break
    return topics


def score_sentence(sentence: str) -> int:
    score = 2 * sum(1 for pattern in _IMPORTANCE_RES if pattern.search(sentence))
    if _DIGIT_RE.search(sentence):
        score += 1
    if COPULA_RE.search(sentence):
        score += 1
    if 30 <= len(sentence) < 200:
        score += 1
    return score


def extract_key_points(text: str, limit: int = MAX_KEY_POINTS) -> list[str]:
    """Heuristically important sentences, backfilled to at least five when possible."""
    sentences = [s for s in split_sentences(text) if len(s) > 15]

    chosen = [i for i, s in enumerate(sentences) if score_sentence(s) >= KEY_POINT_THRESHOLD]
    if len(chosen) < MIN_KEY_POINTS:
        seen = {sentences[i] for i in chosen}
        for i, sentence in enumerate(sentences):
            if len(chosen) >= MIN_KEY_POINTS:
                break
            if sentence not in seen and 40 <= len(sentence) <= 150:
                chosen.append(i)
                seen.add(sentence)
        chosen.sort()

    return [sentences[i] for i in chosen[:limit]]


def find_definitions(text: str, limit: int = 5) -> list[str]:
    return [s for s in split_sentences(text) if DEFINITION_RE.search(s)][:limit]


def find_cause_effect(text: str, limit: int = 5) -> list[str]:
    return [s for s in split_sentences(text) if CAUSAL_RE.search(s)][:limit]


def find_numbered_items(text: str) -> list[str]:
    """Lines of the source that already form a numbered list (``1.`` / ``1)``)."""
    return [match.group(1) for match in NUMBERED_ITEM_RE.finditer(text)]
