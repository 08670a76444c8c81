"""Runtime configuration for the Cea chat client and TTS proxy."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = (
    "You are Cea, a compassionate and empathetic AI therapist. Your main objective is help people "
    "with their mental issues by talking to them as humanly as possible."
)


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(
        env_prefix="CEA_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = "cea-chat"
    log_level: str = "INFO"

    # Client-exposed completion credential; server-only TTS credential.
    groq_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CEA_GROQ_API_KEY", "GROQ_API_KEY", "NEXT_PUBLIC_GROQ_API_KEY"),
    )
    elevenlabs_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CEA_ELEVENLABS_API_KEY", "ELEVENLABS_API_KEY"),
    )

    completion_url: str = "https://api.groq.com/openai/v1/chat/completions"
    completion_model: str = "meta-llama/llama-4-scout-17b-16e-instruct"
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    assistant_name: str = "Cea"

    tts_proxy_url: str = Field(
        default="http://127.0.0.1:8000/api/tts",
        description="Proxy route the chat client calls for remote synthesis.",
    )
    elevenlabs_base_url: str = "https://api.elevenlabs.io"
    elevenlabs_voice_id: str = "cgSgspJ2msm6clMCkdW9"
    elevenlabs_model_id: str = "eleven_monolingual_v1"
    elevenlabs_stability: float = 0.7
    elevenlabs_similarity_boost: float = 0.7

    server_host: str = "127.0.0.1"
    server_port: int = 8000

    speech_language: str = "en-US"
    phrase_time_limit: float = 10.0
    voice_enabled: bool = True


settings = Settings()
