import os
from pathlib import Path

DEFAULT_DATA_DIR = (Path(__file__).parent.parent.resolve() / "data").absolute().resolve()
DEFAULT_STORE_FILENAME = "leaderboard.json"

# Scraper execution
SCRAPER_TIMEOUT_SECONDS = 30.0  # Hard deadline for a single scrape() call

# Recurring trigger (every 3 days)
DEFAULT_SCHEDULE_INTERVAL_SECONDS = float(
    os.getenv("LEADERBOARD_SCHEDULE_INTERVAL_SECONDS", str(3 * 24 * 3600))
)

# Scrape history
DEFAULT_HISTORY_LIMIT = 10

# Error messages surfaced in ScrapeResult.errors
NO_VALID_RECORDS_MESSAGE = "No valid records after validation and deduplication"
DATABASE_WRITE_FAILED_PREFIX = "Database write failed"

# Ranking
COMPOSITE_DIMENSION = "composite"  # Reserved name selecting weighted composite ranking

# Reference dimensions seeded into a fresh store
DEFAULT_DIMENSIONS = [
    {
        "name": "coding",
        "display_name": "Coding",
        "description": "Code generation, comprehension and debugging",
    },
    {
        "name": "reasoning",
        "display_name": "Reasoning",
        "description": "Logical reasoning and analysis",
    },
    {
        "name": "math",
        "display_name": "Math",
        "description": "Mathematical calculation and problem solving",
    },
    {
        "name": "multilingual",
        "display_name": "Multilingual",
        "description": "Understanding and generating many languages",
    },
    {
        "name": "instruction-following",
        "display_name": "Instruction Following",
        "description": "Following user instructions precisely",
    },
    {
        "name": "knowledge-qa",
        "display_name": "Knowledge QA",
        "description": "Accuracy and coverage on knowledge questions",
    },
]
DIMENSION_NAMES = [d["name"] for d in DEFAULT_DIMENSIONS]

# Artificial Analysis API
ARTIFICIAL_ANALYSIS_API_URL = "https://artificialanalysis.ai/api/v2/data/llms/models"
ARTIFICIAL_ANALYSIS_API_KEY_ENV = "ARTIFICIAL_ANALYSIS_API_KEY"

# Dimension -> preferred Artificial Analysis metric (composite indices first)
ARTIFICIAL_ANALYSIS_PREFERRED_METRICS = {
    "coding": "artificial_analysis_coding_index",
    "reasoning": "artificial_analysis_intelligence_index",
    "math": "artificial_analysis_math_index",
    "knowledge-qa": "mmlu_pro",
}

# Creator slugs that publish open weights (heuristic)
ARTIFICIAL_ANALYSIS_OPEN_SOURCE_CREATORS = [
    "meta",
    "mistral-ai",
    "alibaba",
    "deepseek",
    "01-ai",
    "google-deepmind",
    "tii",
    "cohere",
]
