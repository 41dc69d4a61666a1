"""trinucmat: Trinucleotide mutational matrices and APOBEC enrichment.

This package classifies somatic single nucleotide variants into the
96 trinucleotide substitution classes used for mutational signature
analysis and estimates, for every sample, the enrichment of
APOBEC-associated mutations over the local sequence background.

"""

__version__ = "0.1.0"

from trinucmat.models import TrinucleotideMatrixConfig
from trinucmat.models import TrinucleotideMatrixResult
from trinucmat.sequence_provider import FastaSequenceProvider
from trinucmat.sequence_provider import InMemorySequenceProvider
from trinucmat.trinucleotide_matrix import trinucleotide_matrix
from trinucmat import locations

__all__ = [
    "TrinucleotideMatrixConfig",
    "TrinucleotideMatrixResult",
    "FastaSequenceProvider",
    "InMemorySequenceProvider",
    "trinucleotide_matrix",
    "locations",
]
