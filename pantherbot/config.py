"""
Configuration management for the PantherBot helper bot and kill feed watcher
"""

from typing import Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings


class BotConfig(BaseSettings):
    """Configuration for the helper bot"""

    # Minecraft server configuration
    minecraft_host: str = Field(
        default="localhost",
        validation_alias=AliasChoices("PANTHERBOT_MINECRAFT_HOST", "SERVER_IP"),
        description="Minecraft server host",
    )
    minecraft_port: int = Field(
        default=25565,
        validation_alias=AliasChoices("PANTHERBOT_MINECRAFT_PORT", "SERVER_PORT"),
        description="Minecraft server port",
    )
    bot_username: str = Field(
        default="PantherBot",
        validation_alias=AliasChoices("PANTHERBOT_BOT_USERNAME", "BOT_NAME"),
        description="Bot username in Minecraft",
    )
    minecraft_version: Optional[str] = Field(default=None, description="Minecraft version, None to auto-detect")
    auth: str = Field(default="offline", description="Mineflayer auth mode")

    # Gemini configuration
    gemini_api_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("PANTHERBOT_GEMINI_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"),
        description="Gemini API key, the advisor is disabled without one",
    )
    default_model: str = Field(default="gemini-2.0-flash", description="Gemini model used by the advisor")
    agent_temperature: float = Field(default=0.2, description="Temperature for advisor responses (0.0-1.0)")
    max_output_tokens: int = Field(default=100, description="Maximum tokens in advisor responses")

    # Keep-alive / uplink server
    http_port: int = Field(
        default=3000,
        validation_alias=AliasChoices("PANTHERBOT_HTTP_PORT", "PORT"),
        description="Port for the HTTP keep-alive endpoint",
    )

    # Action palette tuning
    follow_distance: int = Field(default=1, description="Distance kept when following a player")
    mine_search_radius: int = Field(default=32, description="Search radius for mine targets")
    chat_max_length: int = Field(default=240, description="Outgoing chat messages are cut to this length")
    collect_timeout_ms: int = Field(default=60000, description="Timeout for a collect-block call in milliseconds")
    announce_thinking: bool = Field(default=True, description="Say 'Thinking...' before consulting the advisor")

    # Reconnection
    reconnect_delay_seconds: float = Field(default=5.0, description="Fixed delay before reconnecting")

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_file: Optional[str] = Field(default=None, description="Log file path (None for timestamped name)")
    log_json_format: bool = Field(default=False, description="Use JSON format for console logs")
    google_log_level: str = Field(default="WARNING", description="Logging level for google-genai and httpx")

    class Config:
        env_file = ".env"
        env_prefix = "PANTHERBOT_"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"  # Ignore extra environment variables

    @property
    def advisor_enabled(self) -> bool:
        return self.gemini_api_key is not None and bool(self.gemini_api_key.get_secret_value().strip())


class WatcherConfig(BotConfig):
    """Configuration for the kill feed watcher"""

    minecraft_host: str = Field(
        default="pantherasmp.falixsrv.me",
        validation_alias=AliasChoices("PANTHERBOT_WATCHER_HOST", "WATCHER_SERVER_IP"),
        description="Minecraft server host",
    )
    minecraft_port: int = Field(
        default=55635,
        validation_alias=AliasChoices("PANTHERBOT_WATCHER_PORT", "WATCHER_SERVER_PORT"),
        description="Minecraft server port",
    )
    bot_username: str = Field(
        default="PantheraWatcher",
        validation_alias=AliasChoices("PANTHERBOT_WATCHER_USERNAME", "WATCHER_NAME"),
        description="Watcher username in Minecraft",
    )
    http_port: int = Field(
        default=8080,
        validation_alias=AliasChoices("PANTHERBOT_HTTP_PORT", "PORT"),
        description="Port shared by the keep-alive endpoint and the kill feed websocket",
    )
