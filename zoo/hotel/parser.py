"""
Bulk importer: replays a text file of records into a Hotel.

One record per line, pipe-delimited, tagged by its first field:

    ESPÉCIE|id|nome
    ANIMAL|id|nome|idEspécie|idHabitat
    ÁRVORE|id|nome|idade|dificuldadeLimpeza|tipo
    HABITAT|id|nome|área[|idÁrvore1,...,idÁrvoreN]
    TRATADOR|id|nome[|idHabitat1,...,idHabitatN]
    VETERINÁRIO|id|nome[|idEspécie1,...,idEspécieN]
    VACINA|id|nome[|idEspécie1,...,idEspécieN]

Records go through the same Hotel operations as interactive use. The first
failing line stops the import; lines applied before it stay applied.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from zoo.hotel.core import CARETAKER, VET
from zoo.hotel.exceptions import HotelError, UnrecognizedEntry
from zoo.hotel.hotel import Hotel, split_ids

FIELD_SEPARATOR = "|"


def _optional_field(fields: List[str], index: int) -> str:
    """Trailing optional clause, or "" when absent."""
    return fields[index] if len(fields) > index else ""


class HotelImporter:
    """
    Parses import files line by line into a Hotel.
    """

    def __init__(self, hotel: Hotel):
        self.hotel = hotel
        self.logger = logging.getLogger(__name__)
        self._parsers: Dict[str, Callable[[List[str]], None]] = {
            "ESPÉCIE": self._parse_species,
            "ANIMAL": self._parse_animal,
            "ÁRVORE": self._parse_tree,
            "HABITAT": self._parse_habitat,
            "TRATADOR": lambda fields: self._parse_worker(fields, CARETAKER),
            "VETERINÁRIO": lambda fields: self._parse_worker(fields, VET),
            "VACINA": self._parse_vaccine,
        }

    def import_file(self, path: Union[str, Path]) -> int:
        """
        Import every record of a file.

        Args:
            path: UTF-8 text file

        Returns:
            Number of records applied

        Raises:
            OSError: If the file cannot be read
            UnrecognizedEntry: On the first line that cannot be applied
        """
        # Decoded line by line in import_lines
        with open(path, "rb") as f:
            count = self.import_lines(f)
        self.logger.info(f"Imported {count} records from {path}")
        return count

    def import_lines(self, lines: Iterable[Union[str, bytes]]) -> int:
        """
        Import records from any iterable of lines, text or UTF-8 bytes.

        Blank lines are skipped but still counted for line numbers.

        Raises:
            UnrecognizedEntry: On the first line that cannot be decoded or
                applied
        """
        count = 0
        line_number = 0
        iterator = iter(lines)
        while True:
            line_number += 1
            try:
                line = next(iterator)
                if isinstance(line, bytes):
                    line = line.decode("utf-8")
            except StopIteration:
                break
            except UnicodeDecodeError as e:
                self.logger.warning(f"Undecodable line {line_number}: {e}")
                raise UnrecognizedEntry(f"Invalid encoding: {e}", line_number) from e

            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            self.parse_line(line, line_number)
            count += 1
        return count

    def parse_line(self, line: str, line_number: Optional[int] = None) -> None:
        """
        Apply a single record.

        Raises:
            UnrecognizedEntry: Unknown tag, malformed fields, or any domain
                error raised by the hotel
        """
        fields = line.split(FIELD_SEPARATOR)
        parser = self._parsers.get(fields[0])
        if parser is None:
            self.logger.warning(f"Unknown record type at line {line_number}: {fields[0]!r}")
            raise UnrecognizedEntry(f"Invalid entry type: {fields[0]}", line_number)

        try:
            parser(fields)
        except (HotelError, IndexError, ValueError) as e:
            self.logger.warning(f"Rejected line {line_number}: {line!r} ({e})")
            raise UnrecognizedEntry(f"Invalid entry: {e}", line_number) from e

        self.logger.debug(f"Applied line {line_number}: {fields[0]} {fields[1]}")

    # -------------------------------------------------------------------------
    # Record parsers
    # -------------------------------------------------------------------------

    def _parse_species(self, fields: List[str]) -> None:
        # ESPÉCIE|id|nome
        self.hotel.add_species(fields[1], fields[2])

    def _parse_animal(self, fields: List[str]) -> None:
        # ANIMAL|id|nome|idEspécie|idHabitat
        self.hotel.add_animal(fields[1], fields[2], fields[3], fields[4])

    def _parse_tree(self, fields: List[str]) -> None:
        # ÁRVORE|id|nome|idade|dificuldadeLimpeza|tipo
        age = int(fields[3])
        difficulty = int(fields[4])
        self.hotel.add_tree(fields[1], fields[2], age, difficulty, fields[5])

    def _parse_habitat(self, fields: List[str]) -> None:
        # HABITAT|id|nome|área[|idÁrvore1,...]
        tree_ids = split_ids(_optional_field(fields, 4))
        # Resolve the trees before registering so a missing tree adds nothing
        for tree_id in tree_ids:
            self.hotel.get_tree(tree_id)

        habitat = self.hotel.add_habitat(fields[1], fields[2], int(fields[3]))
        for tree_id in tree_ids:
            self.hotel.attach_tree(habitat.habitat_id, tree_id)

    def _parse_worker(self, fields: List[str], kind: str) -> None:
        # TRATADOR|id|nome[|idHabitats] / VETERINÁRIO|id|nome[|idEspécies]
        responsibility_ids = split_ids(_optional_field(fields, 3))
        resolve = self.hotel.get_species if kind == VET else self.hotel.get_habitat
        for responsibility_id in responsibility_ids:
            resolve(responsibility_id)

        worker = self.hotel.add_worker(fields[1], fields[2], kind)
        for responsibility_id in responsibility_ids:
            self.hotel.add_responsibility(worker.worker_id, responsibility_id)

    def _parse_vaccine(self, fields: List[str]) -> None:
        # VACINA|id|nome[|idEspécies]
        self.hotel.add_vaccine(fields[1], fields[2], _optional_field(fields, 3))


def import_file(hotel: Hotel, path: Union[str, Path]) -> int:
    """Import a file into `hotel`. See HotelImporter.import_file."""
    return HotelImporter(hotel).import_file(path)
