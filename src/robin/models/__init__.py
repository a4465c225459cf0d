"""Play and drive models shared by the decomposer and the orchestrator."""

from .drive import Drive
from .play import Play, make_player_id, split_player_id

__all__ = ["Drive", "Play", "make_player_id", "split_player_id"]
