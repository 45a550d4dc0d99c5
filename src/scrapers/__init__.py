"""Scrapers for benchmark data sources."""

from src.scrapers.artificial_analysis import ArtificialAnalysisScraper
from src.scrapers.base_scraper import Scraper
from src.scrapers.builtin import create_builtin_scraper
from src.scrapers.reference_sources import (
    create_lmsys_scraper,
    create_official_scraper,
    create_openllm_scraper,
)
from src.scrapers.static_source import ModelEntry, StaticScraper

__all__ = [
    "ArtificialAnalysisScraper",
    "ModelEntry",
    "Scraper",
    "StaticScraper",
    "create_builtin_scraper",
    "create_lmsys_scraper",
    "create_official_scraper",
    "create_openllm_scraper",
]
