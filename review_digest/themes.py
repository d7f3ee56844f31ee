"""Fixed theme keywords and their human-readable labels.

Several keywords collapse onto one label ("build" and "quality" both read as
"Build quality"). Catalog order is significant: it breaks ranking ties.
"""

from __future__ import annotations

from types import MappingProxyType

THEME_KEYWORDS: tuple[str, ...] = (
    "battery",
    "price",
    "performance",
    "build",
    "quality",
    "screen",
    "display",
    "camera",
    "sound",
    "speaker",
    "shipping",
    "delivery",
    "size",
    "weight",
    "durable",
    "software",
)

THEME_LABELS = MappingProxyType({
    "battery": "Battery life",
    "price": "Price/value",
    "performance": "Performance",
    "build": "Build quality",
    "quality": "Build quality",
    "screen": "Display",
    "display": "Display",
    "camera": "Camera",
    "sound": "Sound",
    "speaker": "Sound",
    "shipping": "Shipping/delivery",
    "delivery": "Shipping/delivery",
    "size": "Size/weight",
    "weight": "Size/weight",
    "durable": "Durability",
    "software": "Software",
})

CATALOG_POSITION = MappingProxyType({kw: i for i, kw in enumerate(THEME_KEYWORDS)})


def humanize(keyword: str) -> str:
    return THEME_LABELS.get(keyword, keyword)
