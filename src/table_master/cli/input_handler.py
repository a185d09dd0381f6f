"""Processes and classifies master console input."""
from __future__ import annotations

import re
from typing import Any

from table_master.utils import parse_int

# "roll monsters" must be tried before the dice roller.
PATTERNS: list[tuple[str, str, re.Pattern]] = [
    # Meta commands (console only, never touch the tracker)
    ("help", "meta", re.compile(r"^(?:help|\?|commands)$", re.I)),
    ("quit", "meta", re.compile(r"^(?:quit|exit|q)$", re.I)),
    ("roster", "meta", re.compile(r"^(?:roster|entities|party)$", re.I)),
    ("show", "meta", re.compile(r"^(?:show|order|board|initiative)$", re.I)),

    # Combat lifecycle
    ("start", "combat", re.compile(r"^(?:start|begin|fight|start\s+combat)$", re.I)),
    ("end", "combat", re.compile(r"^(?:end|stop|finish|end\s+combat)$", re.I)),

    # Turn cursor
    ("next", "turn", re.compile(r"^(?:next|n|advance|next\s+turn)$", re.I)),
    ("prev", "turn", re.compile(r"^(?:prev|previous|back|p|rewind|previous\s+turn)$", re.I)),

    # Joining the order
    ("monsters", "combat", re.compile(r"^(?:monsters|roll\s+monsters|roll\s+initiative)$", re.I)),
    ("add", "combat", re.compile(r"^(?:add|join)\s+(\S+)\s+(\S+)$", re.I)),

    # Hit points
    ("hp", "health", re.compile(r"^hp\s+(\S+)\s+([+-]?\d+)$", re.I)),
    ("damage", "health", re.compile(r"^(?:damage|dmg|hurt)\s+(\S+)(?:\s+(\d+))?$", re.I)),
    ("heal", "health", re.compile(r"^(?:heal|cure\s+wounds)\s+(\S+)(?:\s+(\d+))?$", re.I)),
    ("dead", "health", re.compile(r"^(?:dead|death)\s+(\S+)$", re.I)),

    # Statuses and visibility
    ("status", "status", re.compile(r"^(?:status|condition|cond)\s+(\S+)\s+(.+)$", re.I)),
    ("unstatus", "status", re.compile(r"^(?:unstatus|clear|remove)\s+(\S+)\s+(.+)$", re.I)),
    ("hide", "status", re.compile(r"^(?:hide|toggle\s+hidden)\s+(\S+)$", re.I)),

    # Rests
    ("rest", "rest", re.compile(r"^rest\s+(short|long)$", re.I)),
    ("rest", "rest", re.compile(r"^(short|long)\s+rest$", re.I)),

    # Dice and viewer
    ("roll", "dice", re.compile(r"^(?:roll\s+)?d([1-9]\d*)$", re.I)),
    ("view", "console", re.compile(r"^(?:view|as)\s+(master|player)$", re.I)),
]


class InputHandler:
    def classify(self, raw_input: str) -> dict[str, Any]:
        text = raw_input.strip()
        if not text:
            return {"command": None, "target": None, "parameters": {}, "is_meta": False, "raw_input": raw_input}

        for command, category, pattern in PATTERNS:
            match = pattern.match(text)
            if not match:
                continue
            target = match.group(1).strip() if match.lastindex and match.group(1) else None
            second = match.group(2).strip() if match.lastindex and match.lastindex >= 2 and match.group(2) else None
            parameters: dict[str, Any] = {}
            if command == "add":
                parameters["initiative"] = second
            elif command == "hp":
                # Unreadable numbers stay raw so the tracker rejects them.
                parameters["delta"] = parse_int(second, second)
            elif command in ("damage", "heal"):
                parameters["amount"] = parse_int(second, second)
            elif command in ("status", "unstatus"):
                parameters["label"] = second
            elif command == "rest":
                parameters["rest_type"] = target.lower()
                target = None
            elif command == "roll":
                sides = parse_int(target)
                if sides is None:
                    break
                parameters["sides"] = sides
                target = None
            elif command == "view":
                target = target.lower()
            return {
                "command": command,
                "target": target,
                "parameters": parameters,
                "is_meta": category == "meta",
                "raw_input": raw_input,
            }

        return {"command": None, "target": None, "parameters": {}, "is_meta": False, "raw_input": raw_input}

    @staticmethod
    def help_lines() -> list[tuple[str, str]]:
        return [
            ("start / end", "Start or end combat"),
            ("next / prev", "Move the turn cursor"),
            ("add <id> <init>", "Add a roster entry at the given initiative"),
            ("monsters", "Roll d20 initiative for every monster not yet in combat"),
            ("hp <id> <+/-n>", "Change hit points"),
            ("damage <id> [n] / heal <id> [n]", "Damage or heal (default step if n omitted)"),
            ("dead <id>", "Toggle dead / revive"),
            ("status <id> <label> / unstatus <id> <label>", "Add or remove a status"),
            ("hide <id>", "Hide or show a combatant's details to players"),
            ("rest short / rest long", "Short or long rest for everyone"),
            ("d4 d6 d8 d10 d12 d20", "Roll a die"),
            ("view master / view player", "Switch who the board is drawn for"),
            ("roster / show / help / quit", "Console commands"),
        ]
