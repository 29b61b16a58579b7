"""
Configuration du service, lue depuis l'environnement (.env supporté).
"""
import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Chargement des variables d'environnement
load_dotenv()


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


@dataclass
class Settings:
    host: str = _env("HOST", "0.0.0.0")
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8001")))
    environment: str = _env("ENVIRONMENT", "production")
    log_file: str = _env("LOG_FILE", "logs.json")
    log_level: str = _env("LOG_LEVEL", "INFO")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"
