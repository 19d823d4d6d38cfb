# =============================================================================
# GLOS-SITE Section Spacing
# =============================================================================
"""
Section spacing options -> CSS utility classes.

Section documents carry option keys ("sm", "lg", "2xl", ...) chosen in the
studio. Keys are resolved with stega_lookup so draft-mode values still map.
"""

from types import MappingProxyType
from typing import Optional

from core.content.stega import clean_stega, stega_lookup

PADDING_TOP_CLASSES = MappingProxyType({
    "none": "pt-0",
    "sm": "pt-4 md:pt-6",
    "md": "pt-8 md:pt-12",
    "lg": "pt-12 md:pt-16",
    "xl": "pt-16 md:pt-24",
    "2xl": "pt-24 md:pt-32",
})

PADDING_BOTTOM_CLASSES = MappingProxyType({
    "none": "pb-0",
    "sm": "pb-4 md:pb-6",
    "md": "pb-8 md:pb-12",
    "lg": "pb-12 md:pb-16",
    "xl": "pb-16 md:pb-24",
    "2xl": "pb-24 md:pb-32",
})

MARGIN_TOP_CLASSES = MappingProxyType({
    "none": "mt-0",
    "sm": "mt-4 md:mt-6",
    "md": "mt-8 md:mt-12",
    "lg": "mt-12 md:mt-16",
    "xl": "mt-16 md:mt-24",
})

MARGIN_BOTTOM_CLASSES = MappingProxyType({
    "none": "mb-0",
    "sm": "mb-4 md:mb-6",
    "md": "mb-8 md:mb-12",
    "lg": "mb-12 md:mb-16",
    "xl": "mb-16 md:mb-24",
})

# Legacy single paddingY option
PADDING_Y_CLASSES = MappingProxyType({
    "none": "py-0",
    "sm": "py-4 md:py-6",
    "md": "py-8 md:py-12",
    "lg": "py-12 md:py-16",
    "xl": "py-16 md:py-24",
    "2xl": "py-24 md:py-32",
})

CONTAINER_WIDTH_CLASSES = MappingProxyType({
    "narrow": "max-w-3xl",
    "normal": "max-w-6xl",
    "wide": "max-w-7xl",
    "full": "max-w-none",
})

DEFAULT_CONTAINER_CLASS = "container-glos"


def get_spacing_classes(data: dict, default_padding: str = "lg") -> str:
    """
    Spacing classes for a section.

    paddingTop/paddingBottom win over the legacy paddingY; margins are only
    emitted when set to something other than "none".
    """
    padding_y = data.get("paddingY") or default_padding
    classes = [
        stega_lookup(PADDING_TOP_CLASSES, data.get("paddingTop") or padding_y, default_padding),
        stega_lookup(PADDING_BOTTOM_CLASSES, data.get("paddingBottom") or padding_y, default_padding),
    ]

    margin_top = data.get("marginTop")
    if margin_top and clean_stega(margin_top) != "none":
        classes.append(stega_lookup(MARGIN_TOP_CLASSES, margin_top, "none"))

    margin_bottom = data.get("marginBottom")
    if margin_bottom and clean_stega(margin_bottom) != "none":
        classes.append(stega_lookup(MARGIN_BOTTOM_CLASSES, margin_bottom, "none"))

    return " ".join(c for c in classes if c)


def get_container_class(container_width: Optional[str] = None) -> str:
    """Container class for a section width option."""
    if not container_width:
        return DEFAULT_CONTAINER_CLASS

    width_class = stega_lookup(CONTAINER_WIDTH_CLASSES, container_width, "normal")
    if width_class == CONTAINER_WIDTH_CLASSES["normal"]:
        return DEFAULT_CONTAINER_CLASS

    return f"{width_class} mx-auto px-4 md:px-6"
