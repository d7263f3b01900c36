class TraitStatsError(Exception):
    """Base class for all errors raised by traitstats."""


class ConfigurationError(TraitStatsError):
    """Caller or configuration error; nothing was written."""


class UnknownSpeciesError(ConfigurationError, KeyError):
    def __init__(self, species_id):
        super().__init__(species_id)
        self.species_id = species_id

    def __str__(self):
        return f"unknown species id {self.species_id!r}"


class BufferShapeError(ConfigurationError):
    """Histogram buffer does not match the trait count or bin layout."""


class TraitIndexError(ConfigurationError, IndexError):
    """Trait index outside [0, n_traits)."""


class TraitDimensionError(ConfigurationError):
    """Population supplied trait vectors of the wrong width."""


class TraitValueError(TraitStatsError, ValueError):
    """Trait value that cannot be placed in any bin (NaN)."""
