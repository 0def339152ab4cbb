import json
import logging
import re

import requests

from blogapp.errors import AIUnavailable

logger = logging.getLogger(__name__)

DEFAULT_TONE = "professional"
DEFAULT_IDEA_COUNT = 5

GENERATE_PROMPT = """Write a comprehensive blog post about "{topic}" in the {category} category.
The tone should be {tone}.

Please structure the blog post with:
1. An engaging title (max 100 characters)
2. A compelling description/excerpt (max 200 characters)
3. Well-structured content with proper headings, paragraphs, and formatting
4. Include relevant examples and insights
5. A conclusion

Format the response as JSON with the following structure:
{{
  "title": "Blog title here",
  "description": "Brief description here",
  "content": "Full blog content with HTML formatting (use <h2>, <h3>, <p>, <ul>, <li>, <strong>, <em> tags)"
}}"""

IMPROVE_PROMPT = """Improve the following blog content based on this instruction: "{instruction}"

Original content:
{content}

Please return the improved content maintaining HTML formatting."""

IDEAS_PROMPT = """Generate {count} creative and engaging blog post ideas for the {category} category.

Return the response as a JSON array of objects with this structure:
[
  {{
    "title": "Blog idea title",
    "description": "Brief description of the blog idea"
  }}
]"""

_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


# =========================
# JSON dari teks bebas
# =========================
def extract_article(raw_text: str, topic: str) -> dict:
    """Ambil objek JSON pertama dari teks model; kalau gagal pakai teks mentah."""
    fallback = {
        "title": topic,
        "description": f"An insightful article about {topic}",
        "content": raw_text,
    }

    match = _OBJECT_RE.search(raw_text or "")
    if not match:
        return fallback
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return fallback
    if not isinstance(parsed, dict):
        return fallback

    return {
        "title": str(parsed.get("title") or fallback["title"]),
        "description": str(parsed.get("description") or fallback["description"]),
        "content": str(parsed.get("content") or fallback["content"]),
    }


def extract_ideas(raw_text: str) -> list:
    match = _ARRAY_RE.search(raw_text or "")
    if not match:
        return []
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return []
    return parsed if isinstance(parsed, list) else []


class ContentGenerator:
    """Kontrak generator konten; implementasi asli atau stub untuk test."""

    def complete(self, prompt: str) -> str:
        raise NotImplementedError

    def generate_article(self, topic: str, category_name: str, tone: str = DEFAULT_TONE) -> dict:
        prompt = GENERATE_PROMPT.format(topic=topic, category=category_name, tone=tone or DEFAULT_TONE)
        return extract_article(self.complete(prompt), topic)

    def improve_article(self, content: str, instruction: str) -> str:
        # Teks hasil dikembalikan apa adanya
        return self.complete(IMPROVE_PROMPT.format(instruction=instruction, content=content))

    def suggest_ideas(self, category_name: str, count: int = DEFAULT_IDEA_COUNT) -> list:
        prompt = IDEAS_PROMPT.format(count=count or DEFAULT_IDEA_COUNT, category=category_name)
        return extract_ideas(self.complete(prompt))


class GeminiContentGenerator(ContentGenerator):
    """Satu request ke Gemini generateContent per operasi; tanpa retry."""

    def __init__(self, api_key: str | None, model: str, base_url: str, timeout: int = 60, session=None):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config):
        return cls(
            api_key=config.get("GEMINI_API_KEY"),
            model=config.get("GEMINI_MODEL", "gemini-1.5-flash"),
            base_url=config.get("GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta"),
            timeout=config.get("AI_REQUEST_TIMEOUT", 60),
        )

    def complete(self, prompt: str) -> str:
        if not self.api_key:
            logger.error("GEMINI_API_KEY is not configured")
            raise AIUnavailable()

        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            resp = self.session.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Gemini request failed: %s", e)
            raise AIUnavailable()

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError):
            logger.error("Gemini response has no text: %s", str(data)[:500])
            raise AIUnavailable()

        if not text:
            raise AIUnavailable()
        return text
