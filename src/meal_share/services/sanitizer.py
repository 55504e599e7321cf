"""Slug derivation and markup sanitation for meal submissions."""

import nh3
from slugify import slugify

from meal_share.domain.errors import ValidationError

SAFE_TAGS = {"b", "strong", "i", "em", "u", "p", "br", "ul", "ol", "li", "a"}
SAFE_ATTRIBUTES = {"a": {"href", "title"}}


def derive_slug(title: str) -> str:
    """Return a lower-case, hyphen-separated URL-safe slug for a title."""
    slug = slugify(title or "")
    if not slug:
        raise ValidationError("Title must contain at least one letter or digit")
    return slug


def sanitize_markup(text: str) -> str:
    """Strip script-capable markup, keeping plain text and basic formatting.

    `<script>` and `<style>` elements are dropped together with their content,
    event-handler attributes and `javascript:` URLs are removed. Newlines are
    kept so the detail view can turn them into line breaks. The output is a
    fixed point: sanitizing it again returns it unchanged.
    """
    return nh3.clean(text, tags=SAFE_TAGS, attributes=SAFE_ATTRIBUTES)


def image_key(slug: str, file_name: str) -> str:
    """Build the blob key for a meal image from its slug and file extension."""
    _, dot, extension = file_name.rpartition(".")
    extension = extension.lower()
    if not dot or not extension.isalnum():
        raise ValidationError(f"Image file name {file_name!r} has no usable extension")
    return f"{slug}.{extension}"
