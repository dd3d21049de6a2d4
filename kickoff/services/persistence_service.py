"""
Persistence service for the Kickoff game-day engine.

This module handles saving and loading the session state to/from a JSON file
and the export/import document format.
"""
import json
import logging
import os
from typing import Optional

from ..models import GameSettings, GameState, Match, Player, Standing, Team
from ..utils import DEFAULT_STORAGE_DIR, STORAGE_KEY, STORAGE_VERSION
from .migrations import migrate_state, upgrade_captain_lists

logger = logging.getLogger(__name__)

EXPORT_COLLECTIONS = ("players", "teams", "matches", "settings", "standings")


class StateImportError(ValueError):
    """Raised when an export document cannot be turned into a session state."""
    pass


def check_collections(data: dict) -> None:
    """
    Check the shape of the collections in a stored state or export document.

    Each present collection must be a list of objects and settings must be an
    object, so that the model codecs only ever see dictionaries.

    Raises:
        StateImportError: On the first collection with the wrong shape
    """
    for name in ("players", "teams", "matches", "standings"):
        value = data.get(name)
        if value is None:
            continue
        if not isinstance(value, list):
            raise StateImportError(f"'{name}' must be a list")
        if not all(isinstance(entry, dict) for entry in value):
            raise StateImportError(f"'{name}' entries must be objects")
    if data.get("settings") is not None and not isinstance(data["settings"], dict):
        raise StateImportError("'settings' must be an object")


class PersistenceService:
    """
    Service for persisting the session state to a JSON file.

    The file holds a single record ``{"state": {...}, "version": N}`` and is
    rewritten in full on every save.
    """

    def __init__(self, storage_dir: Optional[str] = None, key: str = STORAGE_KEY):
        """
        Initialize PersistenceService.

        Args:
            storage_dir: Directory holding the storage file; defaults to
                ``~/.kickoff``
            key: Storage key, used as the file name stem
        """
        self.storage_dir = os.path.expanduser(storage_dir or DEFAULT_STORAGE_DIR)
        self.key = key

    @property
    def file_path(self) -> str:
        return os.path.join(self.storage_dir, f"{self.key}.json")

    def save_state(self, game_state: GameState) -> bool:
        """
        Write the persisted subset of the state.

        Failures are logged and swallowed; the in-memory state stays authoritative.

        Returns:
            True if the file was written
        """
        record = {"state": game_state.to_json(), "version": STORAGE_VERSION}
        try:
            if not os.path.exists(self.storage_dir):
                os.makedirs(self.storage_dir)
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(record, f, indent=2)
        except (OSError, TypeError):
            logger.exception("Failed to save state to %s", self.file_path)
            return False
        return True

    def load_state(self) -> Optional[GameState]:
        """
        Read and upgrade the stored state.

        Returns:
            The stored GameState, or None if nothing usable is stored
        """
        if not os.path.exists(self.file_path):
            return None

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                record = json.load(f)
            if not isinstance(record, dict) or not isinstance(record.get("state"), dict):
                raise ValueError("Storage record has no state object")
            check_collections(record["state"])
            state = migrate_state(record["state"], int(record.get("version", 0)))
            return GameState.from_json(state)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring unreadable stored state in %s: %s", self.file_path, exc)
            return None

    def clear(self) -> None:
        """Remove the storage file if present."""
        if os.path.exists(self.file_path):
            os.remove(self.file_path)


def export_document(game_state: GameState) -> str:
    """
    Serialize the five exportable collections as pretty-printed JSON.

    Args:
        game_state: State to export

    Returns:
        JSON text with ``players``, ``teams``, ``matches``, ``settings`` and
        ``standings`` in that order
    """
    data = game_state.to_json()
    return json.dumps({name: data[name] for name in EXPORT_COLLECTIONS}, indent=2)


def parse_export(text: str) -> GameState:
    """
    Build a complete GameState from an export document.

    Missing collections become empty and missing settings take their defaults.
    Nothing outside the five collections is read.

    Raises:
        StateImportError: If the document is not valid JSON or any entry is malformed
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise StateImportError(f"Import is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise StateImportError("Import must be a JSON object")

    check_collections(data)

    try:
        # exports written before captain lists carry a single captain_id
        data = upgrade_captain_lists(data)
        state = GameState(settings=GameSettings.from_dict(data.get("settings")))
        state.players = [Player.from_dict(p) for p in data.get("players") or []]
        state.teams = [Team.from_dict(t) for t in data.get("teams") or []]
        state.matches = [Match.from_dict(m) for m in data.get("matches") or []]
        state.standings = [Standing.from_dict(s) for s in data.get("standings") or []]
    except (KeyError, ValueError, TypeError) as exc:
        raise StateImportError(f"Import contains a malformed entry: {exc!r}") from exc
    return state
