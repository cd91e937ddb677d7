#!/usr/bin/env python3
"""Verify config.example.yaml against the configuration schema."""

import sys
from pathlib import Path

import yaml

from jobmatch.config import validate_config_file


def verify_config_structure(config_file: Path = Path("config.example.yaml")) -> bool:
    """Validate the example config and print a short summary."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    if not validate_config_file(config_file):
        return False

    with open(config_file, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    matching = config.get("matching", {})
    classifier = config.get("classifier", {})
    print(f"  - Threshold: {matching.get('threshold', 75)}%")
    print(f"  - Progress every {matching.get('progress_interval', 5)} postings")
    print(f"  - Model: {classifier.get('model', 'gpt-4o-mini')}")
    print(f"  - Endpoint: {classifier.get('base_url') or 'OpenAI default'}")
    return True


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.example.yaml")
    sys.exit(0 if verify_config_structure(path) else 1)
