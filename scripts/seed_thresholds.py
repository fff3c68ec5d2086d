"""
Seed the token threshold config from a JSON file into storage.

Usage:
    python -m scripts.seed_thresholds [path/to/token_thresholds.json]
"""
import asyncio
import json
import sys
from pathlib import Path
from shared.database import async_session
from shared.storage import DatabaseStorage
from actions.token_alerts.config import TOKEN_THRESHOLD_KEY
from actions.token_alerts.models.schemas import ThresholdConfig

THRESHOLDS_PATH = Path(__file__).parent.parent / "actions" / "token_alerts" / "examples" / "token_thresholds.json"


async def seed(path: Path = THRESHOLDS_PATH):
    if async_session is None:
        print("ERROR: DATABASE_URL not configured.")
        return

    with open(path) as f:
        raw = json.load(f)

    config = ThresholdConfig.from_mapping(raw)
    print(f"Seeding {len(config.records)} watched addresses across chains {config.chain_ids}...")
    await DatabaseStorage(async_session).put_json(TOKEN_THRESHOLD_KEY, config.to_mapping())
    print("Token thresholds seeded successfully.")


if __name__ == "__main__":
    asyncio.run(seed(Path(sys.argv[1]) if len(sys.argv) > 1 else THRESHOLDS_PATH))
