"""DeepSeek provider adapter."""

from .client import DeepseekProvider
from .get_deepseek_models import fetch_model_ids, parse_models_response

__all__ = ["DeepseekProvider", "fetch_model_ids", "parse_models_response"]
