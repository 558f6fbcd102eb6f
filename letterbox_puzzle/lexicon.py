"""Word list used to accept or reject submitted words."""

from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional

log = logging.getLogger("letterbox")

MIN_WORD_LENGTH = 2
LEXICON_ENV = "LETTERBOX_LEXICON"

_REPO_LEXICON_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "lexicons")

# Enough to finish the bundled puzzle (e.g. GOAL-LIVE-ETHS-SWEAR) and a few detours.
_MINIMAL_WORDS = {
    "goal", "goals", "gal", "gals", "gas", "gat", "gate", "gates", "gave", "gel",
    "get", "gilt", "girl", "girt", "gist", "giver", "glow", "goat", "got",
    "hag", "hail", "hair", "halt", "has", "hat", "hate", "he", "heist", "her", "hew",
    "hilt", "his", "hit", "hoe", "hog", "hole", "hose", "host", "hot", "how",
    "ail", "air", "ale", "ales", "alit", "art", "arts", "ash", "ate", "avow",
    "awl", "evil", "ether", "eths", "eta", "eve", "ewe", "iota", "isle",
    "lair", "last", "lat", "late", "lather", "lave", "law", "lawgiver", "let",
    "levitate", "lie", "lit", "live", "liver", "lives", "lost", "lot", "lovers",
    "oat", "oath", "ohs", "oil", "ore", "other", "owe", "owl", "rag", "rage",
    "rail", "rat", "rate", "raw", "rho", "rile", "riot", "rival", "rot", "rote",
    "row", "sag", "sage", "sail", "sat", "save", "saw", "sew", "shag", "shale",
    "shirt", "shot", "show", "silt", "sit", "slot", "sow", "star", "stir",
    "swear", "sweat", "swirl", "tag", "tail", "tao", "tear", "thaw", "the",
    "their", "this", "those", "tie", "toe", "tog", "toga", "toil", "tow",
    "trail", "trio", "vat", "vet", "veto", "via", "vie", "vile", "visa",
    "vital", "viva", "vow", "wag", "wage", "wail", "war", "wart", "was",
    "wat", "wave", "weal", "wear", "wet", "what", "whirl", "wig", "wilt",
    "wit", "with", "woe", "wore", "wove",
}


class Lexicon:
    """Case-insensitive, exact-match word set."""

    def __init__(self, words: Iterable[str] = (), source: str = "<memory>"):
        self.words: set[str] = {w.strip().lower() for w in words if w and w.strip()}
        self.source = source

    def contains(self, word: str) -> bool:
        return str(word).lower() in self.words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self.words)

    def __repr__(self) -> str:
        return f"Lexicon({len(self.words):,} words from {self.source})"


def _candidate_paths(path: Optional[str]) -> List[str]:
    search_paths: List[str] = []
    if path:
        search_paths.append(path)
    env_path = os.environ.get(LEXICON_ENV)
    if env_path:
        search_paths.append(env_path)
    search_paths.extend([
        "words.txt",
        "dictionary.txt",
        os.path.join(_REPO_LEXICON_DIR, "words.txt"),
        "/usr/share/dict/words",
    ])
    return search_paths


def read_word_file(path: str, min_length: int = MIN_WORD_LENGTH) -> set[str]:
    """Read one word per line, keeping purely alphabetic words of ``min_length``+ letters."""
    words: set[str] = set()
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip().lower()
            if len(word) >= min_length and word.isalpha() and word.isascii():
                words.add(word)
    return words


def load_lexicon(path: Optional[str] = None) -> Lexicon:
    """Load the first readable, non-empty word list; fall back to the built-in list."""
    for candidate in _candidate_paths(path):
        if not os.path.exists(candidate):
            if candidate == path:
                log.warning("Lexicon file %s not found -- searching defaults.", path)
            continue
        try:
            words = read_word_file(candidate)
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Lexicon file %s unreadable -- skipping: %s", candidate, e)
            continue
        if words:
            log.info("Loaded %s words from %s", f"{len(words):,}", candidate)
            return Lexicon(words, source=candidate)
        log.warning("Lexicon file %s has no usable words -- skipping.", candidate)

    log.warning("No lexicon file found -- using built-in minimal word list.")
    return minimal_lexicon()


def minimal_lexicon() -> Lexicon:
    return Lexicon(_MINIMAL_WORDS, source="<built-in>")
