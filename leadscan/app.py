"""Application wiring for LeadScan: environment, configuration and the assessor."""

import importlib.util
import logging
import os
import random
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from leadscan.config import DEFAULT_CONFIG_PATH, AssessmentSettings

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LEADSCAN_CONFIG"
LOG_LEVEL_ENV_VAR = "LEADSCAN_LOG_LEVEL"


class LeadScanApp:
    """Central application object.

    Usage::

        app = LeadScanApp()
        app.initialize()
        assessor = app.get_assessor()
        status = app.get_status()
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        env_path: str = ".env",
    ):
        self._config_path = config_path
        self._env_path = env_path
        self.config: dict[str, Any] = {}
        self.settings: Optional[AssessmentSettings] = None
        self._initialized = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load .env, then the YAML config, then build the assessment settings."""
        if self._initialized:
            return

        env_file = Path(self._env_path)
        if env_file.exists():
            load_dotenv(env_file)
            logger.info("Loaded environment from %s", self._env_path)

        self._config_path = self._config_path or os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
        self.config = self._load_config()
        self.settings = AssessmentSettings.from_dict(self.config.get("assessment") or {})

        self._initialized = True
        logger.info("LeadScan initialised.")

    def _load_config(self) -> dict[str, Any]:
        config_file = Path(self._config_path)
        if not config_file.exists():
            logger.warning("Config file not found: %s, using defaults.", self._config_path)
            return {}
        with open(config_file, "r", encoding="utf-8") as fh:
            config = yaml.safe_load(fh) or {}
        if not isinstance(config, dict):
            raise ValueError(f"{self._config_path} must contain a mapping at the top level")
        logger.info("Configuration loaded from %s", self._config_path)
        return config

    @property
    def config_path(self) -> Optional[str]:
        return self._config_path

    @property
    def log_level(self) -> str:
        """``LEADSCAN_LOG_LEVEL`` wins over ``app.log_level`` in the config."""
        configured = (self.config.get("app") or {}).get("log_level", "INFO")
        return (os.getenv(LOG_LEVEL_ENV_VAR) or configured).upper()

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def get_assessor(self, seed: Optional[int] = None, **overrides: Any):
        """Build a ``SiteAssessor`` from the loaded settings.

        *overrides* are passed through as capabilities (``fetcher``,
        ``probe``, ``browser``, ``accessibility_engine``).
        """
        self._ensure_initialized()
        from leadscan.modules.assessment.assessor import SiteAssessor

        rng = random.Random(seed) if seed is not None else None
        return SiteAssessor(settings=self.settings, rng=rng, **overrides)

    def get_status(self) -> dict[str, dict[str, Any]]:
        """Return health status of configuration and optional components."""
        self._ensure_initialized()
        status: dict[str, dict[str, Any]] = {}

        status["config"] = {
            "status": "ok" if self.config else "warning",
            "details": f"{self._config_path}" if self.config else "defaults in use",
        }

        s = self.settings
        status["signatures"] = {
            "status": "ok",
            "details": (
                f"{len(s.cms_signatures)} CMS, {len(s.framework_signatures)} frameworks, "
                f"{len(s.analytics_tools)} analytics tools"
            ),
        }

        for module, label in (("aiohttp", "http"), ("bs4", "parser"), ("playwright", "browser")):
            available = importlib.util.find_spec(module) is not None
            status[label] = {
                "status": "ok" if available else "error",
                "details": f"{module} {'installed' if available else 'missing'}",
            }

        return status

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("Call initialize() before using the application.")
