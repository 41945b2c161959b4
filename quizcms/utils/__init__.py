from quizcms.utils.rich_text import rich_text_to_plain
from quizcms.utils.slug import generate_media_slug, slugify, strip_year

__all__ = ["rich_text_to_plain", "slugify", "generate_media_slug", "strip_year"]
