from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class AnalysisResult:
    """Structured output of one image analysis.

    Attributes:
        title: Descriptive title returned by the model.
        description: Short story of the image.
        keywords: Normalized keywords joined with commas, in model order.
        category_id: Identifier from the category taxonomy.
    """

    title: str
    description: str
    keywords: str
    category_id: Optional[int] = None

    def keyword_list(self) -> List[str]:
        """Return the keywords as a list for display."""
        return [keyword for keyword in self.keywords.split(",") if keyword]

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON body sent by `POST /api/analyze`."""
        return {
            "title": self.title,
            "description": self.description,
            "keywords": self.keywords,
            "categoryId": self.category_id,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AnalysisResult":
        """Build a result from an API response body.

        Raises:
            ValueError: If a required field is missing or not a string.
        """
        try:
            title = payload["title"]
            description = payload["description"]
            keywords = payload["keywords"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Analysis payload is missing a field: {exc}") from exc
        if not all(isinstance(value, str) for value in (title, description, keywords)):
            raise ValueError("Analysis payload fields must be strings.")

        raw_category = payload.get("categoryId")
        try:
            category_id = int(raw_category) if raw_category not in (None, "") else None
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid categoryId: {raw_category!r}") from exc
        return cls(title=title, description=description, keywords=keywords, category_id=category_id)
