"""
HotelManager: the application's handle on the current hotel.

Tracks the file the hotel is associated with and a snapshot of the state
last saved or opened, so callers can tell whether there is unsaved work.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from zoo.hotel.exceptions import (
    ImportFileError,
    MissingFileAssociation,
    UnavailableFile,
    UnrecognizedEntry,
)
from zoo.hotel.hotel import Hotel
from zoo.hotel.parser import HotelImporter
from zoo.hotel.persistence import deserialize_hotel, load_hotel, save_hotel, serialize_hotel, snapshot
from zoo.hotel.seasons import Season


class HotelManager:
    """
    Owns the current Hotel and its file association.
    """

    def __init__(self, hotel: Optional[Hotel] = None):
        self.logger = logging.getLogger(__name__)
        self.hotel = hotel if hotel is not None else Hotel()
        self.file_path: Optional[Path] = None
        self._saved_snapshot = snapshot(self.hotel)

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    def new(self) -> Hotel:
        """Replace the current hotel with an empty one, with no file."""
        self.hotel = Hotel()
        self.file_path = None
        self._saved_snapshot = snapshot(self.hotel)
        self.logger.info("Created new hotel")
        return self.hotel

    def open(self, path: Union[str, Path]) -> Hotel:
        """
        Load a saved hotel and associate it with `path`.

        Raises:
            UnavailableFile: If the file cannot be read or decoded
        """
        try:
            hotel = load_hotel(path)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Could not open {path}: {e}")
            raise UnavailableFile(str(path)) from e

        self.hotel = hotel
        self.file_path = Path(path)
        self._saved_snapshot = snapshot(self.hotel)
        self.logger.info(f"Opened hotel from {path}")
        return self.hotel

    def save(self) -> None:
        """
        Save to the associated file.

        Raises:
            MissingFileAssociation: If the hotel was never saved or opened
        """
        if self.file_path is None:
            raise MissingFileAssociation()
        self.save_as(self.file_path)

    def save_as(self, path: Union[str, Path]) -> None:
        """Save to `path` and associate the hotel with it."""
        if not str(path).strip():
            raise MissingFileAssociation()
        save_hotel(self.hotel, path)
        self.file_path = Path(path)
        self._saved_snapshot = snapshot(self.hotel)
        self.logger.info(f"Saved hotel to {path}")

    def import_file(self, path: Union[str, Path], atomic: bool = False) -> int:
        """
        Import a text file of records into the current hotel.

        Without `atomic`, records applied before a failing line remain in the
        hotel. With it, the hotel is restored to its state before the import.

        Returns:
            Number of records imported

        Raises:
            ImportFileError: Wrapping the read error or UnrecognizedEntry.
                Any other error propagates as is, after the restore when
                `atomic` is set.
        """
        before = serialize_hotel(self.hotel) if atomic else None
        try:
            count = HotelImporter(self.hotel).import_file(path)
        except Exception as e:
            if before is not None:
                self.hotel = deserialize_hotel(before)
                self.logger.warning(f"Import of {path} failed, hotel restored: {e}")
            if isinstance(e, (OSError, UnrecognizedEntry)):
                raise ImportFileError(str(path)) from e
            raise

        return count

    def is_modified(self) -> bool:
        """True if the hotel changed since it was created, opened or saved."""
        return snapshot(self.hotel) != self._saved_snapshot

    # -------------------------------------------------------------------------
    # Hotel-wide operations
    # -------------------------------------------------------------------------

    def progress_season(self) -> Season:
        return self.hotel.progress_season()

    def satisfaction(self) -> float:
        return self.hotel.satisfaction()
