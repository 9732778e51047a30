import json
from pathlib import Path
from typing import Dict


SNAPSHOT_DIR = Path(__file__).parent / "snapshots"

DEFAULT_RULE_TABLE_VERSION = "rule_table_2025.1"


def load_rule_snapshot(version: str = DEFAULT_RULE_TABLE_VERSION) -> Dict:
    """
    Load a versioned scoring rule snapshot from disk.
    Snapshots are static and reviewable; new templates add rules here,
    not in code.
    """
    filename = version if version.endswith(".json") else f"{version}.json"
    snapshot_path = SNAPSHOT_DIR / filename

    if not snapshot_path.exists():
        raise FileNotFoundError(f"Rule table snapshot not found: {filename}")

    with open(snapshot_path, "r", encoding="utf-8") as f:
        snapshot = json.load(f)

    if "snapshot_version" not in snapshot:
        raise ValueError("Invalid snapshot: missing snapshot_version")

    return snapshot
