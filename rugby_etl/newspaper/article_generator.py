"""
Article Generator Module

Builds the system/user prompt pair for each article kind, calls the LLM
once and splits the reply into title and body.

Prompt Types:
- Weekly round-up (data-driven, from the summary builder's text)
- Vlog / opinion piece (topic-driven, with a digest of earlier vlogs)

Expected reply format:
    Title on the first line

    Body paragraphs...
"""

from dataclasses import dataclass
from typing import Tuple

from loguru import logger

from rugby_etl.newspaper.llm_client import LLMClient

FALLBACK_TITLE = "Untitled article"
FALLBACK_CONTENT = "No content was generated for this article."

ROUNDUP_SYSTEM_PROMPT = """You are a rugby journalist writing for a personal rugby analytics blog.
Write an engaging weekly round-up based ONLY on the data you are given.

WRITING INSTRUCTIONS:
- Tone: knowledgeable, enthusiastic, accessible to casual fans
- Length: 400 to 600 words
- Cover every result, highlight close games and big wins
- Use the standings to explain what the results mean for the table
- Make it clear that the data comes from a historic season
- Do not invent players, scores or statistics

OUTPUT FORMAT:
- The FIRST line is the article title only (no "Title:" prefix, no quotes)
- Then a blank line
- Then the article body in plain paragraphs"""

VLOG_SYSTEM_PROMPT = """You are a rugby analyst writing opinion pieces for a personal rugby blog, in the voice of a video blogger talking to the audience.

WRITING INSTRUCTIONS:
- Tone: personal, opinionated, conversational but well argued
- Length: 500 to 800 words
- Explain tactical ideas with concrete, general examples
- Find a fresh angle: do not repeat the titles or arguments of earlier pieces

OUTPUT FORMAT:
- The FIRST line is the article title only (no "Title:" prefix, no quotes)
- Then a blank line
- Then the article body in plain paragraphs"""


@dataclass(frozen=True)
class GeneratedArticle:
    title: str
    content: str


def parse_article(raw_text: str) -> Tuple[str, str]:
    """
    Split LLM output into title and body.

    The first line (leading '#' markup stripped) is the title, everything
    after the first line break is the body. Empty parts get fallback text.

    Args:
        raw_text: Raw text from the LLM

    Returns:
        Tuple of (title, content)
    """
    text = (raw_text or '').strip()
    first_line, _, rest = text.partition('\n')

    title = first_line.strip().lstrip('#').strip()
    content = rest.strip()

    if not title:
        logger.warning("Generated article has no title, using fallback")
        title = FALLBACK_TITLE
    if not content:
        logger.warning("Generated article has no body, using fallback")
        content = FALLBACK_CONTENT

    return title, content


def build_vlog_user_prompt(topic: str, previous_vlogs_summary: str) -> str:
    """User message for a vlog article: the topic plus earlier pieces to avoid."""
    previous = previous_vlogs_summary.strip() or "None yet - this is the first vlog-style article."

    return (
        f"TOPIC: {topic}\n\n"
        "PREVIOUS VLOG-STYLE ARTICLES (avoid repeating their titles and angles):\n"
        f"{previous}\n\n"
        "Write the article now."
    )


class ArticleGenerator:
    """Turns prompts into titled articles through an LLM client."""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    def _generate(self, system_prompt: str, user_prompt: str) -> GeneratedArticle:
        raw_text = self.llm_client.chat(system_prompt, user_prompt)
        title, content = parse_article(raw_text)
        logger.info(f"Article generated - title: {title!r}, body: {len(content)} chars")
        return GeneratedArticle(title=title, content=content)

    def generate_roundup_article(self, summary_text: str) -> GeneratedArticle:
        """
        Generate a weekly round-up from a league summary.

        Args:
            summary_text: Output of summary_builder.build_summary()

        Returns:
            GeneratedArticle
        """
        return self._generate(ROUNDUP_SYSTEM_PROMPT, summary_text)

    def generate_vlog_article(self, topic: str, previous_vlogs_summary: str = '') -> GeneratedArticle:
        """
        Generate an opinion piece on a topic.

        Args:
            topic: Chosen vlog topic
            previous_vlogs_summary: Bullet list of recent vlogs (advisory only)

        Returns:
            GeneratedArticle
        """
        return self._generate(VLOG_SYSTEM_PROMPT, build_vlog_user_prompt(topic, previous_vlogs_summary))
