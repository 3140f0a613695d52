"""
AI-assisted title and description generation.

Uses the Anthropic API to propose an SEO title (30-60 characters) and
meta description (120-160 characters) for a page, given its URL and any
existing metadata.
"""

import json
import logging
import os
import re
from typing import Optional
from urllib.parse import urlparse

import anthropic
import httpx

from .models import AIGeneratedMetadata, PageMetadata

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"

SYSTEM_PROMPT = (
    "You are an SEO expert specializing in creating optimized meta titles and "
    "descriptions. Respond with a single JSON object and nothing else."
)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class AIGeneratorError(Exception):
    """Raised when AI metadata generation fails."""
    pass


def build_prompt(metadata: PageMetadata, keywords: Optional[list[str]] = None) -> str:
    """Build the generation prompt from a page's current metadata."""
    parsed = urlparse(metadata.url)
    context = [
        f"URL: {metadata.url}",
        f"Domain: {parsed.hostname or ''}",
        f"Path: {parsed.path or '/'}",
    ]
    if metadata.title:
        context.append(f"Current Title: {metadata.title}")
    if metadata.description:
        context.append(f"Current Description: {metadata.description}")
    if metadata.h1:
        context.append(f"H1 Tag: {metadata.h1}")
    if keywords:
        context.append(f"Keywords: {', '.join(keywords)}")

    return (
        "Generate an optimized title and meta description for this webpage:\n\n"
        + "\n".join(context)
        + """

Requirements:
- Title: 30-60 characters, compelling and keyword-rich
- Description: 120-160 characters, engaging and includes a call-to-action
- Both should be unique, relevant to the page content, and optimized for search engines

Return a JSON object with this structure:
{
  "title": "optimized title here",
  "description": "optimized description here",
  "suggestions": ["suggestion 1", "suggestion 2"]
}"""
    )


def parse_generation_response(text: str) -> AIGeneratedMetadata:
    """
    Parse the model's JSON reply.

    Raises:
        AIGeneratorError: If no JSON object with a title and description is found.
    """
    match = _JSON_OBJECT.search(text or "")
    if not match:
        raise AIGeneratorError("No JSON object found in AI response")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise AIGeneratorError(f"AI response is not valid JSON: {e}")

    title = str(data.get("title") or "").strip()
    description = str(data.get("description") or "").strip()
    if not title or not description:
        raise AIGeneratorError("AI response is missing title or description")

    suggestions = data.get("suggestions") or []
    if not isinstance(suggestions, list):
        suggestions = [str(suggestions)]

    return AIGeneratedMetadata(
        title=title,
        description=description,
        suggestions=[str(s) for s in suggestions],
    )


class AIMetadataGenerator:
    """Client generating page metadata with Claude."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
    ):
        """
        Initialize the generator.

        Args:
            api_key: Anthropic API key. If None, reads ANTHROPIC_API_KEY.
            model: Model identifier to use.
        """
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model

        if not self.api_key:
            raise AIGeneratorError(
                "No API key provided. Set ANTHROPIC_API_KEY environment variable "
                "or pass api_key parameter."
            )

        http_client = httpx.Client(
            timeout=httpx.Timeout(60.0, connect=30.0),
            follow_redirects=True,
        )
        self.client = anthropic.Anthropic(api_key=self.api_key, http_client=http_client)

    def generate(
        self,
        metadata: PageMetadata,
        keywords: Optional[list[str]] = None,
        max_tokens: int = 500,
    ) -> AIGeneratedMetadata:
        """
        Generate a title and description for a page.

        Args:
            metadata: Current page metadata (not modified).
            keywords: Optional focus keywords.
            max_tokens: Maximum tokens in the response.

        Returns:
            AIGeneratedMetadata.

        Raises:
            AIGeneratorError: If the API call fails or the reply is unusable.
        """
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=0.7,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": build_prompt(metadata, keywords)}],
            )
        except anthropic.APIError as e:
            logger.error(f"AI generation failed for {metadata.url}: {e}")
            raise AIGeneratorError(f"AI generation failed: {e}")

        return parse_generation_response(response.content[0].text)
