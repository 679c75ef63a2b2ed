"""
Configuration settings for the Medication Timeline Engine
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""
    
    # Application
    APP_NAME: str = "Medication Timeline Engine"
    DEBUG: bool = False
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    
    # Duration estimation
    CHRONIC_DEFAULT_DAYS: int = 30  # Assumed course when only a frequency is known
    
    # Relationship classification
    SWITCH_GAP_DAYS: int = 1  # Max days between one drug's end and the next's start
    
    # Hosting limits
    MAX_MEDICATIONS_PER_REQUEST: int = 300
    
    # Display
    DATE_LABEL_FORMAT: str = "%d/%m/%Y"
    
    class Config:
        env_file = ".env"
        env_prefix = "MEDTIMELINE_"
        extra = "allow"


settings = Settings()
