import hashlib
import json
from typing import Any, Mapping

from vendorisk.config import ScoreScale
from vendorisk.models.question import WeightTable
from vendorisk.models.response import to_raw, RESPONSE_TYPES


def compute_score_fingerprint(
    responses: Mapping[str, Any],
    weights: WeightTable,
    rule_table_version: str,
    score_scale: ScoreScale,
) -> str:
    """
    Deterministically compute a SHA-256 over everything a score depends on.
    Two runs with the same fingerprint produce the same score, so a host
    can cache persisted scores and detect stale ones.
    """
    canonical_payload = {
        "responses": {
            k: to_raw(v) if isinstance(v, RESPONSE_TYPES) else v
            for k, v in responses.items()
        },
        "question_weights": dict(weights.question_weights),
        "rule_table_version": rule_table_version,
        "score_scale": ScoreScale(score_scale).value,
    }

    serialized = json.dumps(
        canonical_payload,
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )

    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()
