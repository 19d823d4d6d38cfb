# =============================================================================
# GLOS-SITE Rich Text Migration
# =============================================================================
"""
Conversion of Portable Text block arrays to plain strings.

Older section schemas stored localized fields as rich text:

    {"it": [{"_type": "block", "children": [{"_type": "span", "text": "..."}]}]}

The current schemas expect {"it": "..."}. These functions compute the
converted documents; they never talk to the CMS.
"""

from typing import Any, Optional

from core.content.localize import LANGUAGES

# Section fields holding localized strings
SECTION_FIELDS = [
    "eyebrow", "title", "subtitle", "description",
    "formTitle", "formSubtitle", "submitButtonText",
    "formSuccessMessage", "formErrorMessage", "privacyText",
    "contactInfoTitle", "openingHoursTitle", "socialTitle",
]

# Nested arrays inside sections: array field -> localized item fields
NESTED_FIELDS = {
    "formFields": ["label", "placeholder"],
    "contactItems": ["label"],
    "openingHours": ["days", "note"],
}

FAQ_FIELDS = ["question", "answer"]


def extract_plain_text(blocks: Any) -> str:
    """Join the span text of every block, one line per block."""
    if not blocks:
        return ""
    if isinstance(blocks, str):
        return blocks
    if not isinstance(blocks, list):
        return str(blocks)

    lines = []
    for block in blocks:
        if not isinstance(block, dict) or block.get("_type") != "block":
            continue
        spans = block.get("children") or []
        lines.append("".join(
            span.get("text") or ""
            for span in spans
            if isinstance(span, dict) and span.get("_type") == "span"
        ))
    return "\n".join(lines)


def convert_locale_field(value: Any) -> Optional[dict]:
    """
    Converted language object, or None when nothing needed converting.

    Only languages holding block arrays are rewritten; the others are copied.
    """
    if not isinstance(value, dict):
        return None

    converted = {}
    changed = False
    for lang in LANGUAGES:
        if lang not in value:
            continue
        if isinstance(value[lang], list):
            converted[lang] = extract_plain_text(value[lang])
            changed = True
        else:
            converted[lang] = value[lang]

    return converted if changed else None


def _convert_fields(item: dict, fields: list[str]) -> tuple[dict, list[str]]:
    updated = dict(item)
    changed = []
    for field in fields:
        if item.get(field):
            converted = convert_locale_field(item[field])
            if converted is not None:
                updated[field] = converted
                changed.append(field)
    return updated, changed


def convert_section(section: dict) -> tuple[dict, list[str]]:
    """
    Convert one page section.

    Returns:
        (section, changed field paths). The input section is returned
        unchanged when nothing was converted.
    """
    updated, changed = _convert_fields(section, SECTION_FIELDS)

    for array_field, item_fields in NESTED_FIELDS.items():
        items = section.get(array_field)
        if not isinstance(items, list):
            continue

        new_items = []
        array_changed = False
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                new_items.append(item)
                continue
            new_item, item_changed = _convert_fields(item, item_fields)
            if item_changed:
                array_changed = True
                changed.extend(f"{array_field}[{index}].{f}" for f in item_changed)
                new_items.append(new_item)
            else:
                new_items.append(item)

        if array_changed:
            updated[array_field] = new_items

    return (updated if changed else section), changed


def convert_page(page: dict) -> tuple[Optional[list], list[str]]:
    """
    Converted sections of a page.

    Returns:
        (sections or None when unchanged, changed paths like "sections[2].title")
    """
    sections = page.get("sections")
    if not isinstance(sections, list):
        return None, []

    new_sections = []
    changed = []
    for index, section in enumerate(sections):
        if not isinstance(section, dict):
            new_sections.append(section)
            continue
        new_section, section_changed = convert_section(section)
        new_sections.append(new_section)
        changed.extend(f"sections[{index}].{path}" for path in section_changed)

    return (new_sections if changed else None), changed


def convert_faq(faq: dict) -> dict:
    """Fields of a FAQ document that need rewriting ({} when none)."""
    updates = {}
    for field in FAQ_FIELDS:
        if faq.get(field):
            converted = convert_locale_field(faq[field])
            if converted is not None:
                updates[field] = converted
    return updates
