import hashlib
import os
import pickle
from datetime import datetime, timedelta
from typing import List, Optional

import requests

from config import Config
from utils.exceptions import LLMGatewayError
from utils.logging_utils import log_step


class LLMClient:
    """Client for text completions from an Ollama LLM server."""

    def __init__(self, base_url: str = None, model: str = None, cache_dir: str = None):
        self.base_url = base_url or getattr(Config, "OLLAMA_BASE_URL", "http://localhost:11434")
        self.model = model or getattr(Config, "LLAMA_MODEL_NAME", "llama3")
        self.cache_dir = cache_dir or getattr(Config, "CACHE_DIR", ".llm_cache")
        self._init_cache()

    # -----------------------------
    # Cache
    # -----------------------------
    def _init_cache(self):
        if getattr(Config, "ENABLE_CACHING", False):
            os.makedirs(self.cache_dir, exist_ok=True)

    def _get_cache_key(self, prompt: str, temperature: float) -> str:
        content = f"{prompt}_{temperature}_{self.model}"
        return hashlib.md5(content.encode()).hexdigest()

    def _get_from_cache(self, cache_key: str) -> Optional[str]:
        if not getattr(Config, "ENABLE_CACHING", False):
            return None

        cache_file = os.path.join(self.cache_dir, cache_key)
        if not os.path.exists(cache_file):
            return None

        # Any unreadable entry is a cache miss.
        try:
            with open(cache_file, "rb") as f:
                cached_data = pickle.load(f)

            if not isinstance(cached_data, dict):
                raise ValueError(f"unexpected cache payload {type(cached_data).__name__}")

            cache_time = cached_data.get("timestamp")
            response = cached_data.get("response")
            ttl = getattr(Config, "CACHE_TTL_SECONDS", 0)
            if cache_time and isinstance(response, str) and datetime.now() - cache_time < timedelta(seconds=ttl):
                return response
        except Exception as e:
            log_step("LLM_CLIENT", f"Ignoring unreadable cache entry {cache_key}: {e}", level="warning")

        return None

    def _save_to_cache(self, cache_key: str, response: str):
        if not getattr(Config, "ENABLE_CACHING", False):
            return

        cache_file = os.path.join(self.cache_dir, cache_key)
        cached_data = {
            "response": response,
            "timestamp": datetime.now(),
            "model": self.model,
        }
        try:
            with open(cache_file, "wb") as f:
                pickle.dump(cached_data, f)
        except OSError as e:
            log_step("LLM_CLIENT", f"Could not write cache entry {cache_key}: {e}", level="warning")

    # -----------------------------
    # Generate
    # -----------------------------
    def generate(self, prompt: str, temperature: float = 0.7) -> str:
        """Submit a prompt and return the full text completion."""

        cache_key = self._get_cache_key(prompt, temperature)
        cached = self._get_from_cache(cache_key)
        if cached:
            log_step("LLM_CLIENT", "Using cached completion", level="debug")
            return cached

        url = f"{self.base_url}/api/generate"
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": temperature},
        }

        timeout = getattr(Config, "REQUEST_TIMEOUT", 60)

        try:
            resp = requests.post(url, json=payload, timeout=timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.Timeout:
            raise LLMGatewayError(f"LLM request timed out after {timeout} seconds")
        except requests.exceptions.ConnectionError:
            raise LLMGatewayError(
                "Cannot connect to Ollama server. Please ensure:\n"
                "1) Ollama is running: 'ollama serve'\n"
                f"2) Model is pulled: 'ollama pull {self.model}'\n"
                f"3) Base URL is correct: {self.base_url}"
            )
        except (requests.exceptions.RequestException, ValueError) as e:
            raise LLMGatewayError(f"LLM request failed: {str(e)}")

        response = data.get("response") if isinstance(data, dict) else None
        if not isinstance(response, str):
            raise LLMGatewayError("LLM response payload has no 'response' text")

        self._save_to_cache(cache_key, response)
        return response

    def check_health(self) -> bool:
        try:
            response = requests.get(f"{self.base_url}/api/tags", timeout=10)
            return response.status_code == 200
        except requests.exceptions.RequestException:
            return False

    def get_available_models(self) -> List[str]:
        try:
            response = requests.get(f"{self.base_url}/api/tags", timeout=10)
            if response.status_code == 200:
                data = response.json()
                return [m.get("name") for m in data.get("models", [])]
        except (requests.exceptions.RequestException, ValueError):
            pass
        return []
