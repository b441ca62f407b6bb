"""
Error taxonomy for the zoo hotel.

Every failure is a typed, recoverable exception carrying the offending
identifier(s). Callers decide how to present them.
"""

from typing import Optional


class HotelError(Exception):
    """Base class for every zoo hotel domain error."""
    pass


# =============================================================================
# NOT FOUND
# =============================================================================

class EntityNotFoundError(HotelError):
    """Raised when an identifier does not name a registered entity."""

    kind = "entity"

    def __init__(self, entity_id: str):
        super().__init__(f"Unknown {self.kind} key: {entity_id}")
        self.entity_id = entity_id


class AnimalNotFound(EntityNotFoundError):
    kind = "animal"


class SpeciesNotFound(EntityNotFoundError):
    kind = "species"


class HabitatNotFound(EntityNotFoundError):
    kind = "habitat"


class WorkerNotFound(EntityNotFoundError):
    kind = "worker"


class TreeNotFound(EntityNotFoundError):
    kind = "tree"


class VaccineNotFound(EntityNotFoundError):
    kind = "vaccine"


class ResponsibilityNotFound(HotelError):
    """Raised when a responsibility is unknown or not held by the worker."""

    def __init__(self, worker_id: str, responsibility_id: str):
        super().__init__(
            f"Responsibility {responsibility_id} not found for worker {worker_id}"
        )
        self.worker_id = worker_id
        self.responsibility_id = responsibility_id


# =============================================================================
# DUPLICATES
# =============================================================================

class DuplicateEntityError(HotelError):
    """Raised when an identifier (or species name) is already registered."""

    kind = "entity"

    def __init__(self, entity_id: str):
        super().__init__(f"Duplicate {self.kind} key: {entity_id}")
        self.entity_id = entity_id


class DuplicateAnimal(DuplicateEntityError):
    kind = "animal"


class DuplicateSpecies(DuplicateEntityError):
    kind = "species"


class DuplicateHabitat(DuplicateEntityError):
    kind = "habitat"


class DuplicateWorker(DuplicateEntityError):
    kind = "worker"


class DuplicateTree(DuplicateEntityError):
    kind = "tree"


class DuplicateVaccine(DuplicateEntityError):
    kind = "vaccine"


# =============================================================================
# UNRECOGNIZED KINDS
# =============================================================================

class UnrecognizedKindError(HotelError):
    """Raised when a variant tag is not one of the recognized values."""

    kind = "entity"

    def __init__(self, raw: str):
        super().__init__(f"Unrecognized {self.kind} type: {raw}")
        self.raw = raw


class UnrecognizedWorkerKind(UnrecognizedKindError):
    kind = "worker"


class UnrecognizedTreeKind(UnrecognizedKindError):
    kind = "tree"


# =============================================================================
# AUTHORIZATION / INTEGRITY
# =============================================================================

class WorkerNotAuthorized(HotelError):
    """Raised when a worker lacks the responsibility an action requires."""

    def __init__(self, worker_id: str, responsibility_id: str):
        super().__init__(
            f"Worker {worker_id} is not authorized to act on {responsibility_id}"
        )
        self.worker_id = worker_id
        self.responsibility_id = responsibility_id


class InvalidAttribute(HotelError, ValueError):
    """Raised when a numeric attribute (area, age, difficulty) is negative."""

    def __init__(self, entity_id: str, attribute: str, value: int):
        super().__init__(
            f"{attribute} of {entity_id} must be non-negative, got {value}"
        )
        self.entity_id = entity_id
        self.attribute = attribute
        self.value = value


class GraphIntegrityError(HotelError):
    """Raised when a back-reference the formulas rely on is missing."""
    pass


# =============================================================================
# IMPORT / PERSISTENCE
# =============================================================================

class UnrecognizedEntry(HotelError):
    """Raised when an import line cannot be applied to the hotel."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class ImportFileError(HotelError):
    """Raised when an import file cannot be read or replayed."""

    def __init__(self, path: str):
        super().__init__(f"Failed to import file: {path}")
        self.path = path


class UnavailableFile(HotelError):
    """Raised when a saved hotel cannot be opened or decoded."""

    def __init__(self, path: str):
        super().__init__(f"Unavailable file: {path}")
        self.path = path


class MissingFileAssociation(HotelError):
    """Raised when saving a hotel that has no associated file."""

    def __init__(self):
        super().__init__("Hotel has no associated file")
