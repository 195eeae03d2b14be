"""
Constants configuration

API settings, CORS configuration and workflow limits.
"""

# API settings
API_TITLE = "Content Factory API"
API_DESCRIPTION = "Turn raw transcripts into short-video editing plans and long-form copy"
API_VERSION = "1.0.0"

# CORS origins
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:5173",
]

# Project submission limits
PROJECT_TITLE_MAX_LENGTH = 255
ORIGINAL_TEXT_MIN_LENGTH = 10
DEFAULT_PROJECT_LIST_LIMIT = 20

# Copywriter sub-steps: formulas -> structure -> titles -> full content
COPYWRITER_STEP_NAMES = {
    1: "formulas",
    2: "structure",
    3: "titles",
    4: "fullContent",
}

# Persona labels shown in the UI for each stage ("digital employees")
STAGE_PERSONAS = {
    "mining": {
        "name": "Content Miner",
        "icon": "🔍",
        "description": "Mines high-value topics from the source text",
    },
    "analysis": {
        "name": "Content Analyst",
        "icon": "📊",
        "description": "Five-step deep analysis",
    },
    "director": {
        "name": "Director",
        "icon": "🎬",
        "description": "Designs the short-video editing plan",
    },
    "copywriter": {
        "name": "Copywriter",
        "icon": "✍️",
        "description": "Writes the long-form copy",
    },
    "planning": {
        "name": "Topic Planner",
        "icon": "📋",
        "description": "Branches out new topics",
    },
}

__all__ = [
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "PROJECT_TITLE_MAX_LENGTH",
    "ORIGINAL_TEXT_MIN_LENGTH",
    "DEFAULT_PROJECT_LIST_LIMIT",
    "COPYWRITER_STEP_NAMES",
    "STAGE_PERSONAS",
]
