# LLM Provider
"""
Process-wide access to the language-model backend.

The default credential is read from the environment on first use and kept
until the process exits. LLM instances built from it are cached per
temperature. A per-request credential always gets a fresh, uncached LLM.
"""

import logging
import os
from threading import Lock
from typing import Dict, Optional

from crewai import LLM

from interview_prep.config import LLM_CONFIG

logger = logging.getLogger(__name__)


class MissingCredentialError(RuntimeError):
    """The default language-model credential is not configured."""


class LLMProvider:
    """
    Thread-safe, lazily initialized source of crewai LLM clients.

    Lifecycle:
    - nothing is resolved at import time
    - the first call to get_llm() without an override resolves the default
      credential and caches the client for that temperature
    - cached clients live until shutdown (or an explicit reset())
    """

    _instance: Optional['LLMProvider'] = None
    _lock = Lock()

    def __new__(cls):
        """Singleton pattern for the provider."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.llm_class = LLM
        self._default_api_key: Optional[str] = None
        self._llms: Dict[float, LLM] = {}
        self._llm_lock = Lock()
        self._initialized = True
        logger.info("LLMProvider initialized")

    @property
    def model(self) -> str:
        return LLM_CONFIG["model"]

    @property
    def has_default_credential(self) -> bool:
        if self._default_api_key is not None:
            return True
        return bool(os.getenv(LLM_CONFIG["api_key_env"], "").strip())

    def default_api_key(self) -> str:
        """Resolve the default credential, once."""
        with self._llm_lock:
            if self._default_api_key is None:
                env_var = LLM_CONFIG["api_key_env"]
                api_key = os.getenv(env_var, "").strip()
                if not api_key:
                    logger.error(f"❌ {env_var} is not set; cannot reach the language model")
                    raise MissingCredentialError(f"Missing {env_var} environment variable")
                self._default_api_key = api_key
                logger.info("🔑 Default LLM credential loaded")
            return self._default_api_key

    def get_llm(self, temperature: float, api_key: Optional[str] = None):
        """
        Get an LLM client for the given temperature.

        Args:
            temperature: Sampling temperature for the completion
            api_key: Optional per-request credential; takes precedence over
                     the default and is never cached

        Returns:
            An object exposing call(messages) -> str
        """
        if api_key and api_key.strip():
            return self._build(temperature, api_key.strip())

        default_key = self.default_api_key()
        with self._llm_lock:
            llm = self._llms.get(temperature)
            if llm is None:
                llm = self._build(temperature, default_key)
                self._llms[temperature] = llm
            return llm

    def reset(self) -> None:
        """Drop the cached credential and clients."""
        with self._llm_lock:
            self._default_api_key = None
            self._llms.clear()

    def _build(self, temperature: float, api_key: str):
        return self.llm_class(
            model=self.model,
            temperature=temperature,
            api_key=api_key,
        )


# Global provider instance
llm_provider = LLMProvider()
