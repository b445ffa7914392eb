"""Terminal user interface package (screens and news carousel)."""

from .carousel import NewsCarousel
from .console import (
    render_crypto_screen,
    render_news_screen,
    render_notice,
    render_perps_screen,
    render_prediction_screen,
)

__all__ = [
    "NewsCarousel",
    "render_crypto_screen",
    "render_news_screen",
    "render_notice",
    "render_perps_screen",
    "render_prediction_screen",
]
