"""Prompt Construction Package"""

from llmc.prompts.builder import DIFF_PLACEHOLDER, build_prompt, default_prompt

__all__ = ["DIFF_PLACEHOLDER", "build_prompt", "default_prompt"]
