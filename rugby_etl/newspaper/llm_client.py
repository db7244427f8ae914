"""
LLM Client Module

API client for an OpenAI-compatible chat completions endpoint (the Hugging
Face inference router by default). Sends one system message and one user
message and returns the single text choice.

No retry: a failed generation propagates to the trigger that asked for it.
"""

import time
from typing import Dict, Optional

import requests
from loguru import logger


class LLMClient:
    """Client for chat-style text generation."""

    def __init__(
        self,
        base_url: str = 'https://router.huggingface.co/v1',
        api_key: str = '',
        default_model: str = 'meta-llama/Llama-3.1-8B-Instruct',
        timeout: int = 120,
        max_tokens: int = 900,
        temperature: float = 0.7
    ):
        """
        Initialize LLM client.

        Args:
            base_url: API root; '/chat/completions' is appended
            api_key: Bearer token (HF_ACCESS_TOKEN)
            default_model: Model used when none is given per call
            timeout: Request timeout in seconds (default: 120)
            max_tokens: Default output length cap
            temperature: Default sampling temperature
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.default_model = default_model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature

        if not api_key:
            logger.warning("HF_ACCESS_TOKEN not defined. Article generation will fail.")

        logger.info(f"Initialized LLMClient: {self.base_url}, default model: {self.default_model}")

    def chat(
        self,
        system_prompt: str,
        user_prompt: str,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ) -> str:
        """
        Run one system/user exchange and return the reply text.

        Args:
            system_prompt: Instruction message
            user_prompt: Data/topic message
            model: Model name (uses default if not specified)
            max_tokens: Output cap (uses default if not specified)
            temperature: Sampling temperature (uses default if not specified)

        Returns:
            Generated text (may be empty)

        Raises:
            requests.exceptions.RequestException: On network/HTTP errors
            ValueError: If the response has no text choice
        """
        model = model or self.default_model
        endpoint = f"{self.base_url}/chat/completions"
        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": self.temperature if temperature is None else temperature,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        logger.info(f"Generating text with model: {model}")
        logger.debug(f"Prompt length: {len(system_prompt) + len(user_prompt)} characters")

        start_time = time.time()

        try:
            response = requests.post(endpoint, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.Timeout:
            logger.error(f"Request timed out after {self.timeout}s")
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise

        text = extract_reply(result)

        elapsed = time.time() - start_time
        logger.info(f"Generation completed in {elapsed:.2f}s, {len(text)} characters")
        return text


def extract_reply(result: Dict) -> str:
    """
    Pull choices[0].message.content out of a chat completions response.

    Raises:
        ValueError: On an unexpected response shape
    """
    try:
        content = result['choices'][0]['message']['content']
    except (KeyError, IndexError, TypeError) as e:
        logger.error(f"Invalid response format: {e}")
        raise ValueError(f"Could not parse chat completion response: {e}")

    return content or ''


def create_llm_client(config: Dict) -> LLMClient:
    """Build a client from an LLM_CONFIG-style dict."""
    return LLMClient(
        base_url=config['base_url'],
        api_key=config.get('api_key', ''),
        default_model=config['model'],
        timeout=config.get('timeout', 120),
        max_tokens=config.get('max_tokens', 900),
        temperature=config.get('temperature', 0.7)
    )
