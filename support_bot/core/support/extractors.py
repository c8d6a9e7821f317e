"""
Order number and customer name extraction from free text.
"""

import re
import unicodedata
from typing import Optional

from support_bot.core.support.classifier import CATEGORY_KEYWORDS


# Tried in order, the first pattern that matches wins.
# NOTE: the bare digit run also catches phone numbers, postal codes and dates.
ORDER_NUMBER_PATTERNS = [
    re.compile(r"#([0-9]+)"),
    re.compile(r"注文番号\s*(?:[:は]\s*)?#?([0-9]+)"),
    re.compile(r"order\s*(?:number|no\.?)\s*(?:[:]\s*)?#?([0-9]+)", re.IGNORECASE),
    re.compile(r"([0-9]{4,})"),
]

# Kanji, katakana and latin letters; hiragana is left out so particles end a name
_NAME_CHARS = r"A-Za-z一-鿿々〆ヵヶァ-ヺー"
_NAME = rf"[{_NAME_CHARS}]+(?:[ 　][{_NAME_CHARS}]+)?"

CUSTOMER_NAME_PATTERNS = [
    re.compile(rf"(?:私の名前は|名前は|私は)\s*({_NAME})\s*(?:です|と申します|といいます)"),
    re.compile(rf"({_NAME})\s*(?:と申します|といいます)"),
    re.compile(rf"^\s*({_NAME})\s*です(?:[、。,.!！\s]|$)"),
    re.compile(rf"({_NAME})\s*です[。.!！]?\s*$"),
]

SHORT_NAME_PATTERN = re.compile(r"^[一-鿿々〆ヵヶァ-ヺー]{2,4}$")

# Words that fill the name slot in replies like "大丈夫です" but never name anyone
NON_NAME_WORDS = ["大丈夫", "未定", "不明", "了解", "承知", "確認", "質問", "問題", "以上", "結構"]

_NAME_STOPWORDS = NON_NAME_WORDS + [
    keyword for _, keywords in CATEGORY_KEYWORDS for keyword in keywords
]


def is_plausible_name(candidate: str) -> bool:
    """False for candidates containing a category trigger or a non-name word."""
    return not any(word in candidate for word in _NAME_STOPWORDS)


def extract_order_number(message: str) -> Optional[str]:
    """Extract an order number, e.g. "#1234" or "注文番号：1234"."""
    text = unicodedata.normalize("NFKC", message)
    for pattern in ORDER_NUMBER_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def extract_customer_name(message: str) -> Optional[str]:
    """
    Extract a customer name from a self-introduction.

    A message that is nothing but a short kanji/katakana token ("山田")
    is taken as a name as well.
    """
    for pattern in CUSTOMER_NAME_PATTERNS:
        match = pattern.search(message)
        if match:
            name = match.group(1).strip()
            if name and is_plausible_name(name):
                return name

    candidate = message.strip()
    if SHORT_NAME_PATTERN.match(candidate) and is_plausible_name(candidate):
        return candidate
    return None
