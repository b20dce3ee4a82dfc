"""Core business logic for URL shortener."""

from .shortcode import ShortCodeGenerator
from .registry import UrlRegistry

__all__ = ["ShortCodeGenerator", "UrlRegistry"]
