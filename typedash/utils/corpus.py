# utils/corpus.py
from typing import Dict, List

DEFAULT_LANGUAGE = "english"

# word buckets per natural language
NORMAL_WORDS: Dict[str, Dict[str, List[str]]] = {
    "english": {
        "short": ["the", "be", "to", "of", "and", "a", "in", "that", "have", "it"],
        "medium": ["about", "there", "right", "think", "would", "first", "after", "work"],
        "long": ["different", "important", "something", "education", "following", "computer"],
    },
    "tamil": {
        "short": ["நான்", "நீ", "அவன்", "அவள்", "அது", "இது", "என்ன", "எப்படி"],
        "medium": ["வணக்கம்", "நன்றி", "மன்னிக்கவும்", "சாப்பிடு", "படிக்க"],
        "long": ["கணினி", "தமிழ்நாடு", "பல்கலைக்கழகம்", "தொழில்நுட்பம்"],
    },
    "hindi": {
        "short": ["मैं", "तुम", "वह", "यह", "क्या", "कौन", "कहाँ", "कब"],
        "medium": ["नमस्ते", "धन्यवाद", "माफ़ करें", "खाना", "पढ़ना"],
        "long": ["कंप्यूटर", "विश्वविद्यालय", "प्रौद्योगिकी", "अभियांत्रिकी"],
    },
    "spanish": {
        "short": ["el", "la", "de", "que", "y", "en", "un", "ser", "se", "no"],
        "medium": ["tiempo", "ahora", "cuando", "hacer", "como", "estar", "tener"],
        "long": ["diferente", "importante", "desarrollo", "educación", "siguiente"],
    },
    "french": {
        "short": ["le", "la", "de", "et", "un", "en", "que", "il", "est", "je"],
        "medium": ["temps", "faire", "comme", "être", "avoir", "plus", "voir"],
        "long": ["différent", "important", "développement", "éducation", "suivant"],
    },
    "german": {
        "short": ["der", "die", "das", "und", "in", "zu", "den", "mit", "von"],
        "medium": ["machen", "können", "sehen", "gehen", "wissen", "sagen"],
        "long": ["unterschied", "wichtig", "entwicklung", "bildung", "folgenden"],
    },
}

WORD_LENGTHS = ("short", "medium", "long")

# full source lines; leading whitespace is part of the token
CODE_LINES: Dict[str, List[str]] = {
    "python": [
        "def sum(a, b):",
        "    return a + b",
        "for i in range(5):",
        "    print(i)",
        "class Car:",
        "    def __init__(self):",
        "        self.speed = 0",
    ],
    "javascript": [
        "function sum(a, b) {",
        "  return a + b;",
        "}",
        "for (let i = 0; i < 5; i++) {",
        "  console.log(i);",
        "class Car {",
        "  constructor() {",
    ],
    "java": [
        "public class Main {",
        "    public static void main() {",
        "        System.out.println();",
        "for (int i = 0; i < 5; i++) {",
        "    private String name;",
        "    return value;",
        "class Car extends Vehicle {",
    ],
}

NATURAL_LANGUAGES = tuple(NORMAL_WORDS)
PROGRAMMING_LANGUAGES = tuple(CODE_LINES)


def word_pool(language: str, word_length: str) -> List[str]:
    """Fresh list so callers can shuffle it freely."""
    buckets = NORMAL_WORDS.get(language) or NORMAL_WORDS[DEFAULT_LANGUAGE]
    if word_length in WORD_LENGTHS:
        return list(buckets[word_length])
    pool: List[str] = []
    for name in WORD_LENGTHS:
        pool.extend(buckets[name])
    return pool


def code_pool(language: str) -> List[str]:
    return list(CODE_LINES.get(language, []))
