"""Scraping helpers – named regex patterns and HTML flash messages."""

from diaspora_api.extraction.html_parser import extract_flash_message
from diaspora_api.extraction.patterns import PATTERNS, extract_pattern

__all__ = ["PATTERNS", "extract_pattern", "extract_flash_message"]
