"""Artificial Analysis API scraper."""

from src.scrapers.artificial_analysis.artificial_analysis import ArtificialAnalysisScraper

__all__ = ["ArtificialAnalysisScraper"]
