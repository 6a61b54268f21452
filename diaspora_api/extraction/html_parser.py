"""Flash-message extraction from pod HTML using BeautifulSoup."""

from bs4 import BeautifulSoup

try:
    import lxml  # noqa: F401 – used as BeautifulSoup parser backend
    _BS4_PARSER = "lxml"
except ImportError:
    _BS4_PARSER = "html.parser"

# diaspora* renders Rails flash messages with one of these ids
_FLASH_IDS = ("flash-alert", "flash_alert", "flash-error", "flash_error", "flash-notice", "flash_notice")


def extract_flash_message(html: str) -> str | None:
    """
    Return the text of the pod's flash alert (e.g. ``Invalid login or
    password.``) rendered into *html*, or None when the page carries none.

    Alerts and errors take precedence over notices.
    """
    if not html or "flash" not in html:
        return None

    soup = BeautifulSoup(html, _BS4_PARSER)

    for flash_id in _FLASH_IDS:
        el = soup.find(id=flash_id)
        if el is not None:
            text = el.get_text(" ", strip=True)
            if text:
                return text

    # Newer pod versions drop the id and only keep the class
    el = soup.select_one(".flash-message")
    if el is not None:
        text = el.get_text(" ", strip=True)
        return text or None
    return None
