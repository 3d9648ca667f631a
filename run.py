#!/usr/bin/env python3
"""
UniMatch launcher

Usage:
  python run.py login 101
  python run.py submit 101 102 103 104
  python run.py matches 101 --icebreakers
  python run.py --help
"""

import os
from pathlib import Path

from portal.cli import app


def load_env_file():
    """Load KEY=VALUE pairs from .env without overriding the environment."""
    env_path = Path(__file__).parent / ".env"
    if env_path.exists():
        with open(env_path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip().strip('"').strip("'")
                    if key and value and key not in os.environ:
                        os.environ[key] = value


if __name__ == "__main__":
    load_env_file()
    app()
