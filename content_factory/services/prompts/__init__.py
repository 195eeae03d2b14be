"""
Prompt templates and context builders for the workflow stages.

Usage:
    from content_factory.services.prompts import MINING_SYSTEM, build_mining_prompt

    system_prompt = MINING_SYSTEM.format()
    user_prompt = build_mining_prompt(project)
"""

from .base import PromptTemplate
from .workflow import (
    MINING_SYSTEM,
    ANALYSIS_SYSTEM,
    DIRECTOR_SYSTEM,
    COPYWRITER_FORMULA_SYSTEM,
    COPYWRITER_STRUCTURE_SYSTEM,
    COPYWRITER_TITLE_SYSTEM,
    COPYWRITER_CONTENT_SYSTEM,
    PLANNING_SYSTEM,
    build_mining_prompt,
    build_analysis_prompt,
    build_analysis_context,
    build_director_prompt,
    build_formula_prompt,
    build_structure_prompt,
    build_title_prompt,
    build_content_prompt,
    build_planning_prompt,
    build_new_topic_seed,
    format_structure,
    summarize_output,
)

__all__ = [
    "PromptTemplate",
    "MINING_SYSTEM",
    "ANALYSIS_SYSTEM",
    "DIRECTOR_SYSTEM",
    "COPYWRITER_FORMULA_SYSTEM",
    "COPYWRITER_STRUCTURE_SYSTEM",
    "COPYWRITER_TITLE_SYSTEM",
    "COPYWRITER_CONTENT_SYSTEM",
    "PLANNING_SYSTEM",
    "build_mining_prompt",
    "build_analysis_prompt",
    "build_analysis_context",
    "build_director_prompt",
    "build_formula_prompt",
    "build_structure_prompt",
    "build_title_prompt",
    "build_content_prompt",
    "build_planning_prompt",
    "build_new_topic_seed",
    "format_structure",
    "summarize_output",
]
