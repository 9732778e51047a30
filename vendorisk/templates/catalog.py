import json
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple, Union

from vendorisk.models.question import Template, TemplateCategory


SNAPSHOT_DIR = Path(__file__).parent / "snapshots"

DEFAULT_TEMPLATES_VERSION = "default_templates_v1"


@lru_cache(maxsize=None)
def load_templates(version: str = DEFAULT_TEMPLATES_VERSION) -> Tuple[Template, ...]:
    """
    Load the built-in templates from a versioned snapshot.
    These back seeded assessments, so their questions and weights must
    not change within a version.
    """
    snapshot_path = SNAPSHOT_DIR / f"{version}.json"

    if not snapshot_path.exists():
        raise FileNotFoundError(f"Template snapshot not found: {version}")

    with open(snapshot_path, "r", encoding="utf-8") as f:
        snapshot = json.load(f)

    if "snapshot_version" not in snapshot:
        raise ValueError("Invalid snapshot: missing snapshot_version")

    return tuple(Template.from_dict(t) for t in snapshot.get("templates", []))


def get_all_templates() -> List[Template]:
    return list(load_templates())


def get_template_by_id(template_id: str) -> Optional[Template]:
    # built-in templates are identified by name
    return next((t for t in load_templates() if t.name == template_id), None)


def get_templates_by_category(category: Union[TemplateCategory, str]) -> List[Template]:
    category = TemplateCategory(category)
    return [t for t in load_templates() if t.category == category]
