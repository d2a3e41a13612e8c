"""Saved party data and the slot-based save system that stores it."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from gridtactics.character_data import CompleteCharacterData

logger = logging.getLogger(__name__)

_CHARACTERS = ("chad", "rogue", "archer", "sorcerer")


@dataclass
class SaveFile:
    """The party's character sheets and when they were saved."""

    chad: CompleteCharacterData = field(default_factory=CompleteCharacterData)
    rogue: CompleteCharacterData = field(default_factory=CompleteCharacterData)
    archer: CompleteCharacterData = field(default_factory=CompleteCharacterData)
    sorcerer: CompleteCharacterData = field(default_factory=CompleteCharacterData)
    save_date: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-ready representation."""
        data: dict[str, Any] = {name: getattr(self, name).to_dict() for name in _CHARACTERS}
        data["save_date"] = self.save_date.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SaveFile:
        """Rebuild from to_dict output; missing characters take defaults."""
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")
        unknown = set(data) - set(_CHARACTERS) - {"save_date"}
        if unknown:
            raise TypeError(f"unknown save fields: {sorted(unknown)}")
        values: dict[str, Any] = {
            name: CompleteCharacterData.from_dict(data[name]) for name in _CHARACTERS if name in data
        }
        if "save_date" in data:
            values["save_date"] = datetime.fromisoformat(data["save_date"])
        return cls(**values)


class SaveSystem:
    """Stores one save file in a named slot inside a directory; loads or creates it on start."""

    def __init__(
        self,
        directory: Union[str, Path],
        slot_name: str = "PF2eSaveSlot",
        set_default_character_values: Optional[Callable[[SaveFile], None]] = None,
    ) -> None:
        self.directory = Path(directory)
        self.slot_name = slot_name
        self._set_default_character_values = set_default_character_values
        self.current_save_file: Optional[SaveFile] = None
        self.load_save()

    @property
    def path(self) -> Path:
        """File that holds the slot."""
        return self.directory / f"{self.slot_name}.json"

    def save_game(self, save_file: Optional[SaveFile]) -> bool:
        """Stamp the save date and write the file to the slot; return whether it was written."""
        if save_file is None:
            return False
        save_file.save_date = datetime.now()
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(save_file.to_dict(), indent=2), encoding="utf-8")
        except OSError as error:
            logger.error("could not write save slot %s: %s", self.slot_name, error)
            return False
        return True

    def load_save(self) -> SaveFile:
        """Load the slot if it exists, otherwise create a save with default characters."""
        if self.does_save_exist():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
                save_file = SaveFile.from_dict(data)
            except (json.JSONDecodeError, TypeError, ValueError) as error:
                raise ValueError(f"save slot {self.slot_name!r} is not a valid save: {error}") from error
            self.current_save_file = save_file
            return save_file
        save_file = self.create_new_save_file()
        if self._set_default_character_values is not None:
            self._set_default_character_values(save_file)
        self.current_save_file = save_file
        return save_file

    def does_save_exist(self) -> bool:
        """True if the slot has been saved to."""
        return self.path.is_file()

    def create_new_save_file(self) -> SaveFile:
        """A fresh save with default characters."""
        return SaveFile()

    def new_game(self) -> SaveFile:
        """Delete the slot if present and start over with defaults."""
        if self.does_save_exist():
            self.path.unlink()
        return self.load_save()