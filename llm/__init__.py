"""
LLM Module

Text-generation collaborator used for match icebreakers.

This module provides:
- Unified BaseLLMProvider interface
- OpenAI-compatible providers (OpenAI, Gemini, DeepSeek) and an offline fake
- Icebreaker prompt template
- Retry logic with exponential backoff
- IcebreakerGenerator with static fallback lines
"""

__version__ = "0.1.0"
