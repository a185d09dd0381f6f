"""Tracker exceptions.

Combat operations raise these internally and the tracker turns them into
ignored outcomes; only the loader errors ever reach a caller.
"""


class TrackerError(Exception):
    """Base class for rejected tracker operations."""

    code = "tracker_error"


class InvalidInitiative(TrackerError):
    """Raised when an initiative value is missing or not a number."""

    code = "invalid_initiative"


class InvalidArgument(TrackerError):
    """Raised for a missing id, a bad HP value, or an empty status label."""

    code = "invalid_argument"


class DuplicateCombatant(TrackerError):
    """Raised when an id is already in the initiative order."""

    code = "duplicate_combatant"


class UnknownCombatant(TrackerError):
    """Raised when an id is not in the initiative order."""

    code = "unknown_combatant"


class EmptySession(TrackerError):
    """Raised when an operation needs at least one combatant."""

    code = "empty_session"


class InactiveSession(TrackerError):
    """Raised when combatants are added while combat is not running."""

    code = "inactive_session"


class DuplicateStatus(TrackerError):
    """Raised when a status is already present and stacking is disabled."""

    code = "duplicate_status"


class UnknownStatus(TrackerError):
    """Raised when removing a status the combatant does not have."""

    code = "unknown_status"


class RosterLoadError(Exception):
    """Raised when a roster file cannot be read or parsed."""


class ConfigError(Exception):
    """Raised when the config file is not valid TOML."""
