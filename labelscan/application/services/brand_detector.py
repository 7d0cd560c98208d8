from typing import List

from labelscan.domain.entities.product import ProductMatch
from labelscan.infrastructure.mapping.product_catalog import ProductCatalog


KEYWORD_MATCH_CONFIDENCE = 90.0


class BrandDetector:
    def __init__(self):
        self._catalog = ProductCatalog()

    def detect(self, text: str) -> List[ProductMatch]:
        """Every catalogue key found in the text, in catalogue order.

        Overlapping keys are not merged: "coca-cola" and "coke" both match
        a can that prints both.
        """
        if not text:
            return []

        lower = text.lower()
        return [
            ProductMatch(
                key=key,
                canonical_name=entry.canonical_name,
                product_type=entry.product_type,
                category=entry.category,
                source_confidence=KEYWORD_MATCH_CONFIDENCE,
            )
            for key, entry in self._catalog.entries()
            if key in lower
        ]
