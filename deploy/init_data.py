#!/usr/bin/env python3
"""
Create the data directory and the empty users/feedback/responses files.
Safe to run repeatedly; existing files are left alone.
"""
import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from webgis import config
from webgis.storage import COLLECTIONS, JsonFileStore


async def init_data(data_dir: Optional[Path] = None) -> JsonFileStore:
    """Create all collection files."""
    store = JsonFileStore(data_dir or config.DATA_DIR)
    await store.ensure_all()
    for collection in COLLECTIONS:
        print(f"✓ {collection}: {store.path_for(collection)}")
    print("Data store initialized successfully!")
    return store


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the WebGIS JSON data store")
    parser.add_argument("--data-dir", type=Path, default=None, help="Defaults to DATA_DIR")
    args = parser.parse_args()
    asyncio.run(init_data(args.data_dir))
