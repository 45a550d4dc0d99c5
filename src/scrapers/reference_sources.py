"""Mock reference sources mirroring public leaderboards.

These serve fixed sample data in each leaderboard's own payload shape. They
exist for demos and tests and are not registered by default.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from src.models.common import _utc_now
from src.scrapers.static_source import ModelEntry, StaticScraper

_DIMS = ("coding", "reasoning", "math", "multilingual", "instruction-following", "knowledge-qa")


def _scores(*values: float) -> dict[str, float]:
    return dict(zip(_DIMS, values))


LMSYS_MODELS = [
    ModelEntry("GPT-4o", "OpenAI", "2024-05-13", "200B", False,
               _scores(92.3, 94.1, 90.5, 91.8, 95.2, 93.7)),
    ModelEntry("Claude 3.5 Sonnet", "Anthropic", "2024-06-20", "175B", False,
               _scores(93.8, 92.5, 88.9, 90.2, 94.6, 91.4)),
    ModelEntry("Gemini 1.5 Pro", "Google", "2024-02-15", "340B", False,
               _scores(89.7, 91.3, 92.1, 93.5, 90.8, 92.0)),
    ModelEntry("GPT-4 Turbo", "OpenAI", "2024-04-09", "175B", False,
               _scores(90.1, 93.0, 89.2, 88.5, 93.4, 92.8)),
]

OPENLLM_MODELS = [
    ModelEntry("Llama 3 70B", "Meta", "2024-04-18", "70B", True,
               _scores(82.4, 85.1, 78.3, 76.9, 84.7, 83.2)),
    ModelEntry("Mistral Large", "Mistral AI", "2024-02-26", "123B", False,
               _scores(80.6, 83.8, 79.5, 81.2, 82.3, 80.9)),
    ModelEntry("Qwen2 72B", "Alibaba Cloud", "2024-06-07", "72B", True,
               _scores(84.1, 82.7, 86.4, 88.3, 81.5, 82.6)),
    ModelEntry("Yi-1.5 34B", "01.AI", "2024-05-13", "34B", True,
               _scores(76.8, 79.4, 80.2, 83.7, 78.1, 77.5)),
]

OFFICIAL_MODELS = [
    ModelEntry("GPT-4o", "OpenAI", "2024-05-13", "200B", False,
               _scores(91.5, 93.8, 91.2, 90.4, 94.9, 93.1),
               description="OpenAI multimodal flagship with text, image and audio I/O"),
    ModelEntry("Claude 3.5 Sonnet", "Anthropic", "2024-06-20", "175B", False,
               _scores(94.2, 91.7, 87.6, 89.8, 95.1, 90.5),
               description="Anthropic high-performance model, strong at coding and instructions"),
    ModelEntry("Gemini 1.5 Pro", "Google", "2024-02-15", "340B", False,
               _scores(88.9, 90.6, 93.4, 94.1, 91.2, 91.8),
               description="Google DeepMind multimodal model with a very long context window"),
    ModelEntry("Llama 3 70B", "Meta", "2024-04-18", "70B", True,
               _scores(81.7, 84.3, 77.9, 75.6, 83.8, 82.4),
               description="Meta open model with a large community ecosystem"),
]


def _lmsys_payload(
    entry: ModelEntry, dimension: str, score: float, position: int, scraped_at: datetime
) -> dict[str, Any]:
    return {
        "model": entry.name,
        "benchmark": dimension,
        "elo_rating": score,
        "arena_rank": position + 1,
        "last_updated": scraped_at.isoformat(),
    }


def _openllm_payload(
    entry: ModelEntry, dimension: str, score: float, position: int, scraped_at: datetime
) -> dict[str, Any]:
    return {
        "model_name": entry.name,
        "task": dimension,
        "score": score,
        "evaluation_date": scraped_at.isoformat(),
        "framework": "lm-evaluation-harness",
    }


def _official_payload(
    entry: ModelEntry, dimension: str, score: float, position: int, scraped_at: datetime
) -> dict[str, Any]:
    return {
        "model_name": entry.name,
        "vendor": entry.vendor,
        "benchmark": dimension,
        "reported_score": score,
        "report_date": scraped_at.isoformat(),
        "source_type": "official_technical_report",
    }


def create_lmsys_scraper(clock: Callable[[], datetime] = _utc_now) -> StaticScraper:
    """Sample data in the LMSYS Chatbot Arena payload shape."""
    return StaticScraper("lmsys", "LMSYS Chatbot Arena", LMSYS_MODELS, _lmsys_payload, clock=clock)


def create_openllm_scraper(clock: Callable[[], datetime] = _utc_now) -> StaticScraper:
    """Sample data in the HuggingFace OpenLLM Leaderboard payload shape."""
    return StaticScraper(
        "openllm",
        "HuggingFace OpenLLM Leaderboard",
        OPENLLM_MODELS,
        _openllm_payload,
        clock=clock,
    )


def create_official_scraper(clock: Callable[[], datetime] = _utc_now) -> StaticScraper:
    """Sample data in the vendor technical report payload shape."""
    return StaticScraper(
        "official", "Official Reports", OFFICIAL_MODELS, _official_payload, clock=clock
    )
