"""Main entry point for HarvestGuard."""

import json
import sys

from loguru import logger


def _load_json(path: str):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def main():
    """Run the application."""
    if len(sys.argv) < 2:
        print("Usage: python main.py [api|evaluate <weather.json> <crops.json> [bn|en]|drain <farmer_id>]")
        sys.exit(1)

    cmd = sys.argv[1]

    if cmd == "api":
        import uvicorn
        from harvestguard.utils.config import settings
        logger.info("Starting API server...")
        uvicorn.run(
            "harvestguard.api.main:app",
            host=settings.api.host,
            port=settings.api.port,
            reload=settings.api.reload,
        )

    elif cmd == "evaluate":
        if len(sys.argv) < 4:
            print("Usage: python main.py evaluate <weather.json> <crops.json> [bn|en]")
            sys.exit(1)
        from harvestguard.core import evaluate, format_output
        from harvestguard.store import CropBatchState, WeatherReading
        from harvestguard.utils.logger import setup_logging
        setup_logging()

        weather = WeatherReading.from_dict(_load_json(sys.argv[2]))
        crops = [CropBatchState.from_dict(c) for c in _load_json(sys.argv[3])]
        language = sys.argv[4] if len(sys.argv) > 4 else None
        advisories = evaluate("cli", weather, crops, language)
        print(format_output("cli", weather, advisories))

    elif cmd == "drain":
        if len(sys.argv) < 3:
            print("Usage: python main.py drain <farmer_id>")
            sys.exit(1)
        from harvestguard.notify import DispatchService
        from harvestguard.store import get_store
        from harvestguard.utils.logger import setup_logging
        setup_logging()

        dispatcher = DispatchService(store=get_store()).for_farmer(sys.argv[2])
        delivered = dispatcher.flush_queue()
        print(f"Delivered: {len(delivered)}")

    else:
        print(f"Unknown command: {cmd}")
        sys.exit(1)


if __name__ == "__main__":
    main()
