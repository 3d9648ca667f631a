"""Prompt templates for match icebreakers."""

from __future__ import annotations

import textwrap


class IcebreakerPrompt:
    max_words: int

    def __init__(self, max_words: int = 20) -> None:
        self.max_words = max_words

    def build(self, user_a: str, user_b: str) -> str:
        return textwrap.dedent(
            f"""
            Generate a short, fun, and witty icebreaker line for two students
            (User {user_a} and User {user_b}) who just matched on a campus app.
            Keep it under {self.max_words} words. Do not use quotes.
            """
        ).strip()
