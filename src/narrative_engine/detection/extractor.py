"""Pulls candidate hostile creature names out of combat narrative."""
from __future__ import annotations

import logging
import re

from narrative_engine.generation.templates import CREATURE_TEMPLATES, CreatureTemplate
from narrative_engine.models.signals import EntityMention, MentionSource

logger = logging.getLogger(__name__)

# Words that look like names at the start of a sentence but never are.
_NOT_A_NAME = frozenset({
    "it", "he", "she", "they", "you", "we", "i", "someone", "something", "somebody",
    "everyone", "everything", "nothing", "nobody", "one", "another", "this", "that",
    "suddenly", "then", "now", "combat", "battle",
})

_FALLBACK_RE = re.compile(
    r"\b(?i:the|an?)\s+"
    r"\b(?P<name>[A-Z][a-z'\-]+(?:\s+[A-Z][a-z'\-]+)*)"
    r"\s+(?:appears?|attacks?|lunges?|charges?|ambush(?:es)?|strikes?|emerges?)\b"
)


def _strip_leading_stopwords(name: str, start: int) -> tuple[str, int]:
    """'Suddenly Silent Wraith' at 10 -> ('Silent Wraith', 19). Empty when nothing is left."""
    for word in re.finditer(r"\S+", name):
        if word.group(0).lower() not in _NOT_A_NAME:
            return name[word.start():], start + word.start()
    return "", start


def _template_pattern(template: CreatureTemplate) -> re.Pattern:
    forms = sorted({template.name, template.plural}, key=len, reverse=True)
    alt = "|".join(r"\s+".join(re.escape(w) for w in form.split()) for form in forms)
    return re.compile(rf"\b(?:{alt})\b", re.IGNORECASE)


class EntityExtractor:
    """Dictionary lookup first, then a capitalized-name heuristic for the rest.

    Every textual occurrence is one candidate: "Two goblins" is a single
    "goblin". Expanding numerals into counts is deliberately not attempted.
    """

    def __init__(self, templates: dict[str, CreatureTemplate] | None = None) -> None:
        self.templates = templates if templates is not None else CREATURE_TEMPLATES
        # Longest names first so "giant spider" claims its span before anything shorter.
        self._patterns = [
            (key, _template_pattern(t))
            for key, t in sorted(self.templates.items(), key=lambda kv: len(kv[0]), reverse=True)
        ]

    def extract(self, text: str) -> list[str]:
        return [m.type_key or m.name for m in self.find_mentions(text)]

    def find_mentions(self, text: str) -> list[EntityMention]:
        if not text:
            return []
        known = self._dictionary_mentions(text)
        mentions = list(known)
        for candidate in self._fallback_mentions(text):
            if any(candidate.overlaps(k) for k in known):
                continue
            mentions.append(candidate)
        mentions.sort(key=lambda m: m.start)
        logger.debug("Extracted %d creature mentions", len(mentions))
        return mentions

    def _dictionary_mentions(self, text: str) -> list[EntityMention]:
        found: list[EntityMention] = []
        for key, pattern in self._patterns:
            for match in pattern.finditer(text):
                mention = EntityMention(
                    name=match.group(0),
                    type_key=key,
                    start=match.start(),
                    end=match.end(),
                    source=MentionSource.DICTIONARY,
                )
                if any(mention.overlaps(f) for f in found):
                    continue
                found.append(mention)
        return found

    def _fallback_mentions(self, text: str) -> list[EntityMention]:
        found: list[EntityMention] = []
        for match in _FALLBACK_RE.finditer(text):
            name, start = _strip_leading_stopwords(match.group("name"), match.start("name"))
            if not name or self._contains_known_type(name):
                continue
            found.append(EntityMention(
                name=name,
                start=start,
                end=match.end("name"),
                source=MentionSource.FALLBACK,
            ))
        return found

    def _contains_known_type(self, name: str) -> bool:
        return any(pattern.search(name) for _, pattern in self._patterns)
