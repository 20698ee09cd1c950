#!/usr/bin/env python3
"""
Start the league API server.
Run from project root: python3 scripts/serve.py
Env: LEAGUE_HOST (127.0.0.1), LEAGUE_PORT (8080), LEAGUE_DB_PATH, LEAGUE_LOG_LEVEL (INFO).
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import uvicorn

# Ensure project root on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("LEAGUE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("LEAGUE_HOST", "127.0.0.1")
    port = int(os.environ.get("LEAGUE_PORT", "8080"))
    logging.getLogger(__name__).info("Server starting on http://%s:%d", host, port)
    uvicorn.run("football_league.api:app", host=host, port=port)


if __name__ == "__main__":
    main()
