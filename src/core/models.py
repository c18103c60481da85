"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass

# Type aliases to make SessionModel easier to read
TeamName = str
Score = int


@dataclass
class SessionModel:
    """Transport-safe representation of a game session used between API, Service, DB, and Game layers."""

    position: str
    team_to_move: TeamName
    scores: dict[TeamName, Score]
