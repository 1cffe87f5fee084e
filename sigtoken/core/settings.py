"""Library settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from sigtoken.crypto.algorithms import Algorithm, parse_algorithm

DEFAULT_ALGORITHM = "HS256"
DEFAULT_TOKEN_TYPE = "JWT"


class TokenSettings(BaseSettings):
    """Defaults applied when issuing and verifying tokens."""

    model_config = SettingsConfigDict(env_prefix="SIGTOKEN_")

    default_algorithm: str = DEFAULT_ALGORITHM
    token_type: str = DEFAULT_TOKEN_TYPE
    allowed_algorithms: str = ""

    def get_default_algorithm(self) -> Algorithm:
        """Parse the configured default algorithm."""
        return parse_algorithm(self.default_algorithm)

    def get_allowed_algorithm_list(self) -> list[Algorithm]:
        """Parse comma-separated allowed algorithms."""
        if not self.allowed_algorithms:
            return []
        return [
            parse_algorithm(a.strip())
            for a in self.allowed_algorithms.split(",")
            if a.strip()
        ]
