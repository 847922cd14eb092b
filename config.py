import os
from typing import Dict, Any
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Configuration class for the itinerary planner."""
    
    # LLM Configuration
    LLAMA_MODEL_NAME = os.getenv("LLAMA_MODEL_NAME", "llama3")
    OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", 0.4))
    
    # Default trip parameters
    DEFAULT_BUDGET = float(os.getenv("DEFAULT_BUDGET", 1000.0))
    
    # Suggestions
    MAX_SUGGESTIONS = int(os.getenv("MAX_SUGGESTIONS", 5))
    
    # Cache settings
    ENABLE_CACHING = os.getenv("ENABLE_CACHING", "false").lower() in ("1", "true", "yes")
    CACHE_TTL_SECONDS = int(os.getenv("CACHE_TTL_SECONDS", 3600))  # 1 hour cache
    CACHE_DIR = os.getenv("CACHE_DIR", ".llm_cache")
    
    # Performance Settings
    REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", 120))
    
    # Logging
    LOG_FILE = os.getenv("LOG_FILE", "itinerary_planner.log")
    
    @classmethod
    def validate_config(cls):
        """Validate configuration and print warnings."""
        warnings = []
        
        if not cls.OLLAMA_BASE_URL.startswith(("http://", "https://")):
            warnings.append(f"⚠️ OLLAMA_BASE_URL does not look like a URL: {cls.OLLAMA_BASE_URL}")
        
        if not 1 <= cls.MAX_SUGGESTIONS <= 10:
            warnings.append("⚠️ MAX_SUGGESTIONS should be between 1 and 10.")
        
        if cls.REQUEST_TIMEOUT <= 0:
            warnings.append("⚠️ REQUEST_TIMEOUT must be positive.")
        
        for warning in warnings:
            print(warning)
        
        return len(warnings) == 0
    
    @classmethod
    def get_all_config(cls) -> Dict[str, Any]:
        """Return all configuration as dictionary."""
        return {
            key: value for key, value in cls.__dict__.items()
            if not key.startswith('_') and not callable(value)
            and not isinstance(value, classmethod)
        }
