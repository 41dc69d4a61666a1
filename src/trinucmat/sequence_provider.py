"""Random access to reference genome subsequences.

A sequence provider is constructed once, queried many times and
released by the caller (either with :meth:`SequenceProvider.close` or
by using it as a context manager). Coordinates are 1-based and
inclusive on both ends, as in MAF files.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from Bio import SeqIO

from .errors import ContigNotFoundError
from .locations import check_data_file

logger = logging.getLogger(__name__)


class SequenceProvider(ABC):
    """Interface to a reference genome.

    Subclasses implement :meth:`list_contigs` and :meth:`_fetch`.
    """

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Release any resource held by the provider."""

    @abstractmethod
    def list_contigs(self) -> set[str]:
        """Return the names of all contigs in the reference."""

    @abstractmethod
    def _fetch(self, contig: str, start0: int, end0: int) -> str:
        """Return ``contig[start0:end0]`` (0-based, half open)."""

    def get_sequence(self, contig: str, start: int, end: int) -> str:
        """Return the uppercase sequence of ``contig`` in [start, end].

        Parameters
        ----------
        contig : str
            Contig name, must match the reference exactly.
        start, end : int
            1-based inclusive coordinates. Ranges running past either
            end of the contig are clipped to it, so a window at the
            edge of a contig comes back shorter than requested.

        Returns
        -------
        str
            Uppercase nucleotide sequence. Ambiguous bases (e.g. N)
            are returned verbatim.

        Raises
        ------
        ContigNotFoundError
            If ``contig`` is not present in the reference.
        """
        if contig not in self.list_contigs():
            raise ContigNotFoundError(contig)
        start0 = max(int(start), 1) - 1
        end0 = max(int(end), 0)
        if end0 <= start0:
            return ""
        return self._fetch(contig, start0, end0).upper()


class FastaSequenceProvider(SequenceProvider):
    """Indexed access to a (possibly very large) FASTA file.

    The file is indexed with :func:`Bio.SeqIO.index`, so only record
    offsets are kept in memory. The most recently requested contig is
    cached, which keeps memory bounded to one contig when queries are
    grouped by contig.

    Parameters
    ----------
    fasta_file : str or Path
        Path to an uncompressed or BGZF-compressed FASTA file.
    """

    def __init__(self, fasta_file):
        self.fasta_file = Path(fasta_file)
        logger.info(f"Indexing reference fasta {self.fasta_file}...")
        self._index = SeqIO.index(str(self.fasta_file), "fasta")
        self._contigs = set(self._index.keys())
        self._cached_contig = None
        self._cached_seq = None
        logger.info(f"... done ({len(self._contigs)} contigs).")

    def list_contigs(self) -> set[str]:
        return set(self._contigs)

    def _fetch(self, contig, start0, end0):
        if contig != self._cached_contig:
            logger.debug(f"Loading contig {contig}")
            self._cached_seq = self._index[contig].seq
            self._cached_contig = contig
        return str(self._cached_seq[start0:end0])

    def close(self):
        self._cached_contig = None
        self._cached_seq = None
        self._index.close()


class InMemorySequenceProvider(SequenceProvider):
    """Reference held as a mapping of contig name to sequence.

    Useful for small genomes and for tests.

    Examples
    --------
    >>> provider = InMemorySequenceProvider({"chr1": "acgtTCAGG"})
    >>> provider.get_sequence("chr1", 5, 7)
    'TCA'
    """

    def __init__(self, sequences):
        self._sequences = {str(name): str(seq)
                           for name, seq in dict(sequences).items()}

    @classmethod
    def from_fasta(cls, fasta_file):
        """Read every record of ``fasta_file`` into memory."""
        return cls({rec.id: str(rec.seq)
                    for rec in SeqIO.parse(str(fasta_file), "fasta")})

    def list_contigs(self) -> set[str]:
        return set(self._sequences)

    def _fetch(self, contig, start0, end0):
        return self._sequences[contig][start0:end0]


def open_sequence_provider(ref_genome) -> SequenceProvider:
    """Return a provider for ``ref_genome``.

    ``ref_genome`` may already be a :class:`SequenceProvider`, in which
    case it is returned untouched, or a path to a FASTA file, which is
    opened with :class:`FastaSequenceProvider`.
    """
    if isinstance(ref_genome, SequenceProvider):
        return ref_genome
    return FastaSequenceProvider(
        check_data_file(ref_genome, "Reference genome"))
