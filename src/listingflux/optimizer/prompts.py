"""
Prompts for listing rewriting.
"""
from ..models import RawListing

SYSTEM_MESSAGE = """You are an Amazon SEO expert.
You rewrite product listings for clarity, keyword relevance and conversion rate.
Never invent facts."""


USER_PROMPT_TEMPLATE = """TASK:
Rewrite the following Amazon product listing with improved clarity,
keyword relevance, and conversion rate.

IMPORTANT RULES:
- Do NOT copy sentences from the original
- Do NOT use generic phrases like "intended use", "product category", or placeholders
- Content must be specific to THIS product
- No emojis
- No exaggerated or unverified claims
- Follow Amazon listing guidelines

PRODUCT:
Title:
{title}

Bullets:
{bullets}

Description:
{description}

OUTPUT FORMAT (STRICT):
Return ONLY valid JSON in this structure.
Do NOT add any explanation or extra text.

{{
  "title": "optimized title (max 200 chars)",
  "bullets": [
    "benefit focused bullet 1",
    "benefit focused bullet 2",
    "benefit focused bullet 3",
    "benefit focused bullet 4",
    "benefit focused bullet 5"
  ],
  "description": "clear persuasive description (max 500 chars)",
  "keywords": [
    "keyword phrase 1",
    "keyword phrase 2",
    "keyword phrase 3",
    "keyword phrase 4",
    "keyword phrase 5"
  ]
}}"""


def build_prompt(listing: RawListing) -> str:
    """Build the user prompt embedding the scraped listing fields."""
    return USER_PROMPT_TEMPLATE.format(
        title=listing.title,
        bullets="\n".join(listing.bullets) if listing.bullets else "(No bullets available)",
        description=listing.description or "(No description available)",
    )
