from pydantic import BaseModel


class NBAConfig(BaseModel):
    """Configuration for the RapidAPI NBA games client."""

    base_url: str = "https://api-nba-v1.p.rapidapi.com"
    host: str = "api-nba-v1.p.rapidapi.com"
    timeout_seconds: float = 15.0
    max_connections: int = 20
    max_keepalive_connections: int = 5
