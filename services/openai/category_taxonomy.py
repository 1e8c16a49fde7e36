"""Adobe Stock category list used to classify analyzed images."""

import json
from typing import Dict, List, Optional

CATEGORY_DATASET_NAME = "1.Adobe-Category"

CATEGORIES: List[Dict[str, object]] = [
    {"id": 1, "name": "Animals"},
    {"id": 2, "name": "Architecture"},
    {"id": 3, "name": "Business"},
    {"id": 4, "name": "Drinks"},
    {"id": 5, "name": "Nature"},
    {"id": 6, "name": "Emotions"},
    {"id": 7, "name": "Food"},
    {"id": 8, "name": "Graphic"},
    {"id": 9, "name": "Hobbies"},
    {"id": 10, "name": "Industry"},
    {"id": 11, "name": "Landscape"},
    {"id": 12, "name": "Lifestyle"},
    {"id": 13, "name": "People"},
    {"id": 14, "name": "Plants"},
    {"id": 15, "name": "Culture"},
    {"id": 16, "name": "Science"},
    {"id": 17, "name": "Social Issues"},
    {"id": 18, "name": "Sports"},
    {"id": 19, "name": "Technology"},
    {"id": 20, "name": "Transport"},
    {"id": 21, "name": "Travel"},
]

_NAMES_BY_ID = {int(entry["id"]): str(entry["name"]) for entry in CATEGORIES}


def category_name(category_id: Optional[int]) -> Optional[str]:
    """Return the category name for an id, or None when it is unknown."""
    if category_id is None:
        return None
    return _NAMES_BY_ID.get(category_id)


def taxonomy_json() -> str:
    """Serialize the taxonomy compactly for embedding in a prompt."""
    return json.dumps(CATEGORIES, separators=(",", ":"))
