"""Exceptions raised by trinucmat."""


class FatalInputError(ValueError):
    """No single nucleotide variants are left to process."""


class ContigNotFoundError(KeyError):
    """A contig is not present in the reference sequence provider."""
