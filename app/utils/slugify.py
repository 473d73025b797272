import re
from unidecode import unidecode

MAX_SLUG_LENGTH = 128


def slugify(text, max_length=MAX_SLUG_LENGTH):
    """Turn ``text`` into a lowercase ASCII slug, e.g. "Café Menü" -> "cafe-menu"."""
    text = unidecode(str(text or "")).lower()
    text = re.sub(r'[^a-z0-9]+', '-', text).strip('-')
    return text[:max_length].rstrip('-')
