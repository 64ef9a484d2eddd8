"""
Application configuration
"""
from typing import Dict, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""
    
    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    API_TITLE: str = "binexplore API"
    API_VERSION: str = "0.1.0"
    
    # Disassembler
    OBJDUMP_PATH: str = "objdump"  # "objdump" = resolve from $PATH
    OBJDUMP_OPTIONS: str = "-d -S"
    OBJDUMP_FLAGS: Dict[str, bool] = {}  # JSON in env, e.g. {"demangle": true}
    OBJDUMP_TIMEOUT: float = 60.0  # seconds
    
    # Outputs
    OUTPUT_ROOT: Optional[str] = None
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
