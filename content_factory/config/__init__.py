"""
Application configuration and settings
"""

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from .paths import APP_DIR, BASE_DIR, DATA_DIR
from .constants import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
    PROJECT_TITLE_MAX_LENGTH,
    ORIGINAL_TEXT_MIN_LENGTH,
    DEFAULT_PROJECT_LIST_LIMIT,
    COPYWRITER_STEP_NAMES,
    STAGE_PERSONAS,
)
from .models import (
    LLMProviderType,
    CozeMode,
    StageModelConfig,
    STAGE_MODELS,
    OPENAI_BASE_URL,
    DEFAULT_OPENAI_MODEL,
    COZE_BASE_URL,
    COZE_MAX_POLLS,
    COZE_POLL_INTERVAL_SECONDS,
    OLLAMA_HOST,
    DEFAULT_OLLAMA_MODEL,
    LLM_TIMEOUT_SECONDS,
    get_active_provider,
    get_coze_mode,
    get_stage_config,
)

__all__ = [
    # Paths
    "APP_DIR",
    "BASE_DIR",
    "DATA_DIR",
    # Constants
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "PROJECT_TITLE_MAX_LENGTH",
    "ORIGINAL_TEXT_MIN_LENGTH",
    "DEFAULT_PROJECT_LIST_LIMIT",
    "COPYWRITER_STEP_NAMES",
    "STAGE_PERSONAS",
    # Models
    "LLMProviderType",
    "CozeMode",
    "StageModelConfig",
    "STAGE_MODELS",
    "OPENAI_BASE_URL",
    "DEFAULT_OPENAI_MODEL",
    "COZE_BASE_URL",
    "COZE_MAX_POLLS",
    "COZE_POLL_INTERVAL_SECONDS",
    "OLLAMA_HOST",
    "DEFAULT_OLLAMA_MODEL",
    "LLM_TIMEOUT_SECONDS",
    "get_active_provider",
    "get_coze_mode",
    "get_stage_config",
]
