"""
Environment Configuration Manager
Handles loading environment-specific configurations with proper fallbacks
"""

import os
from typing import Optional
from dotenv import load_dotenv
import logging

logger = logging.getLogger(__name__)


class EnvConfigManager:
    """Manages environment-specific configuration loading with fallbacks"""

    def __init__(self, env: Optional[str] = None):
        self.env = env or os.getenv('ENVIRONMENT', 'development')
        self.loaded_files = []
        self.load_env_configs()

    def load_env_configs(self):
        """Load environment configurations, most specific file first"""
        config_files = [
            f'.env.{self.env}',
            '.env.local',
            '.env',
        ]

        for config_file in config_files:
            if os.path.exists(config_file):
                # Values already present in the process environment are kept
                load_dotenv(config_file, override=False)
                self.loaded_files.append(config_file)
                logger.info(f"Loaded configuration from: {config_file}")

        if not self.loaded_files:
            logger.warning("No environment configuration files found, using system environment variables only")

    def get_loaded_files(self) -> list:
        """Get list of loaded configuration files"""
        return self.loaded_files.copy()

    def validate_required_vars(self, required_vars: list) -> bool:
        """Validate that all required environment variables are set"""
        missing_vars = [var for var in required_vars if not os.getenv(var)]

        if missing_vars:
            logger.error(f"Missing required environment variables: {missing_vars}")
            return False

        return True

    def get_url_config(self) -> dict:
        """Get URL configuration with fallbacks"""
        return {
            'environment': os.getenv('ENVIRONMENT', 'development'),
            'frontend_url': os.getenv('FRONTEND_URL', 'http://localhost:8080'),
            'backend_url': os.getenv('BACKEND_URL', 'http://localhost:8000'),
        }

    @staticmethod
    def get_cors_origins(frontend_url: str) -> list:
        """Generate CORS origins based on frontend URL"""
        origins = [frontend_url]

        if 'localhost' in frontend_url or '127.0.0.1' in frontend_url:
            origins.extend([
                'http://localhost:8080',
                'http://127.0.0.1:8080',
                'http://localhost:5173',  # Vite dev server
                'http://127.0.0.1:5173',
            ])

        seen = set()
        return [x for x in origins if not (x in seen or seen.add(x))]


env_manager = EnvConfigManager()

required_vars = [
    'DATABASE_URL',
    'SECRET_KEY',
]

if not env_manager.validate_required_vars(required_vars):
    logger.critical("Critical configuration missing! Please check your environment configuration.")
