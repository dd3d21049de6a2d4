"""
Versioned upgrades for persisted Kickoff state.

Each step takes the ``state`` dictionary of one storage version and returns
the shape of the next. :func:`migrate_state` applies them in order.
"""
import logging
from typing import Any, Callable, Dict

from ..utils import STORAGE_VERSION

logger = logging.getLogger(__name__)


def upgrade_captain_lists(state: Dict[str, Any]) -> Dict[str, Any]:
    """Teams kept a single ``captain_id``; they now keep a ``captain_ids`` list."""
    teams = []
    for team in state.get("teams") or []:
        team = dict(team)
        if "captain_ids" not in team:
            legacy = team.pop("captain_id", None)
            team["captain_ids"] = [legacy] if legacy else []
        else:
            team.pop("captain_id", None)
        teams.append(team)
    upgraded = dict(state)
    upgraded["teams"] = teams
    return upgraded


MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    0: upgrade_captain_lists,
}


def migrate_state(state: Dict[str, Any], version: int) -> Dict[str, Any]:
    """
    Upgrade a persisted state dictionary to the current storage version.

    Args:
        state: Persisted state in the shape of ``version``
        version: Storage version the state was written with

    Returns:
        The state in the current shape

    Raises:
        ValueError: If the version is newer than this build understands
    """
    if version > STORAGE_VERSION:
        raise ValueError(f"Unsupported storage version {version}")

    while version < STORAGE_VERSION:
        logger.info("Migrating stored state from version %d to %d", version, version + 1)
        state = MIGRATIONS[version](state)
        version += 1
    return state
