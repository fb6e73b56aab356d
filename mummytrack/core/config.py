# mummytrack/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # --- storage ---
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "mummytrack"
    state_collection: str = "app_state"
    assignments_key: str = "mummytrack_assignments"
    grades_key: str = "mummytrack_grades"

    # --- Gemini ---
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-3-flash-preview"
    gemini_pro_model: str = "gemini-3-pro-preview"
    advisor_timeout: float = 60.0

    # --- server ---
    host: str = "0.0.0.0"
    port: int = 8000

    # --- timer ---
    deadline_poll_seconds: float = 5.0
    focus_session_seconds: int = 25 * 60


settings = Settings()
