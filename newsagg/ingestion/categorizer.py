"""Keyword categorizer for English and Arabic articles."""

import re
from typing import List, Pattern, Tuple

from ..models import Category

# Checked top to bottom; the first matching category wins. Articles often hit
# several keyword sets ("AI regulation" is both Politics and Technology), so
# reordering this table changes how stored articles are labelled.
#
# English fragments match at the start of a word ("sport" matches "sports");
# a leading \w* admits compounds ("fintech", "geopolitics") and a trailing \b
# pins short words ("ai" must not match "said"). Arabic fragments match
# anywhere, since Arabic glues articles and conjunctions ("ال", "و") onto the
# word; short stems that hide inside unrelated words are anchored with \b
# ("مالي" but not "شمالي").
_RULES: List[Tuple[Category, List[str], List[str]]] = [
    (
        Category.POLITICS,
        [
            r"\w*politic", "government", "election", "parliament", "minister",
            "diplomac", "president", "senate", "congress", "lawmaker",
            "regulat",
        ],
        ["سياسة", "حكومة", "انتخابات", "برلمان", "وزير", "دبلوماسية"],
    ),
    (
        Category.ECONOMY,
        [
            r"\w*econom", "business", "financ", "market", "stock", "trade",
            "investment", "inflation", "crypto",
        ],
        ["اقتصاد", "أعمال", "المال", r"\bمال[يى]", "سوق", "تجارة", "استثمار", "تضخم"],
    ),
    (
        Category.SOCIAL,
        [
            "social", "society", "people", "community", "human rights",
            "welfare", "activis",
        ],
        ["اجتماعي", "مجتمع", "الناس", r"\bأناس", "حقوق الإنسان", "رفاهية"],
    ),
    (
        Category.TECHNOLOGY,
        [
            r"\w*tech", "science", "digital", r"ai\b", "artificial intelligence",
            "software", "robot", "space", "innovation", "gadget",
        ],
        ["تكنولوجيا", "علوم", "ذكاء", "فضاء", "ابتكار"],
    ),
    (
        Category.SPORTS,
        [
            r"\w*sport", "football", "match", "fifa", "olympic", "tennis",
            "basketball", "soccer",
        ],
        ["رياضة", "كرة", "مباراة", "أولمبياد"],
    ),
    (
        Category.HEALTH,
        [
            "health", "medical", "virus", "hospital", "doctor", "vaccine",
            "pandemic", "wellness",
        ],
        ["صحة", "الطبي", r"\bطبي", "فيروس", "مستشفى", "طبيب", "لقاح", "وباء"],
    ),
    (
        Category.ENTERTAINMENT,
        [
            "entertainment", "movie", "music", "celebrit", "cinema", r"arts\b",
            "showbiz", "fashion",
        ],
        ["ترفيه", "سينما", "موسيقى", "فنون", "مشاهير"],
    ),
    (
        Category.EDUCATION,
        [
            "education", "school", "universit", "student", "learning", "teach",
            "academ",
        ],
        ["تعليم", "مدرسة", "جامعة", "طالب", "تعلم"],
    ),
    (
        Category.CULTURE,
        [
            "culture", "cultural", "heritage", "tradition", "literature",
            "history", "museum",
        ],
        ["ثقافة", "تراث", "تقاليد", "أدب", "تاريخ"],
    ),
]


def _compile(english: List[str], arabic: List[str]) -> Pattern[str]:
    parts = [r"\b(?:" + "|".join(english) + ")"]
    parts.extend(arabic)
    return re.compile("|".join(parts))


CATEGORY_RULES: List[Tuple[Category, Pattern[str]]] = [
    (category, _compile(english, arabic)) for category, english, arabic in _RULES
]

DEFAULT_CATEGORY = Category.WORLD


def categorize(title: str, content: str) -> Category:
    """Assign a category from keywords in the title and content."""
    combined = f"{title or ''} {content or ''}".lower()
    for category, pattern in CATEGORY_RULES:
        if pattern.search(combined):
            return category
    return DEFAULT_CATEGORY
